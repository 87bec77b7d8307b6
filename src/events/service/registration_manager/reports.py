"""Read-side views over the registration ledger."""

from django.db.models import Count, Q

from accounts.models import ClubUser
from events.models import Registration, RideLevel, RideLevelCancellation
from events.models.registration import RegistrationQuerySet
from events.service.event_metadata import GUIDED_LEVELS, EventMetadata


def capacity_overview(event_id: int) -> dict[str, object]:
    """Active confirmed and waitlisted counts per level, plus the voided levels."""
    rows = (
        Registration.objects.active()
        .filter(event_id=event_id)
        .values("ride_level")
        .annotate(
            confirmed=Count("id", filter=Q(is_waitlist=False)),
            waitlisted=Count("id", filter=Q(is_waitlist=True)),
        )
        .order_by()
    )
    counts = {level: 0 for level in RideLevel.values}
    waitlisted = {level: 0 for level in RideLevel.values}
    for row in rows:
        counts[row["ride_level"]] = row["confirmed"]
        waitlisted[row["ride_level"]] = row["waitlisted"]
    cancelled_levels = list(
        RideLevelCancellation.objects.filter(event_id=event_id)
        .order_by("ride_level")
        .values_list("ride_level", flat=True)
    )
    return {
        "event_id": event_id,
        "total": sum(counts.values()),
        "counts": counts,
        "waitlisted": waitlisted,
        "cancelled_levels": cancelled_levels,
    }


def guide_levels(event: EventMetadata, guide: ClubUser) -> list[dict[str, object]]:
    """The guided levels of an event, flagging those the guide leads."""
    cancelled = set(
        RideLevelCancellation.objects.filter(event_id=event.event_id).values_list("ride_level", flat=True)
    )
    return [
        {
            "ride_level": level,
            "label": RideLevel(level).label,
            "guide_ids": event.guide_ids_for(level),
            "is_assigned": guide.guide_id is not None and guide.guide_id in event.guide_ids_for(level),
            "is_cancelled": level in cancelled,
        }
        for level in GUIDED_LEVELS
    ]


def waitlist_report() -> RegistrationQuerySet:
    """Active waitlisted registrations across all events, in promotion order."""
    return (
        Registration.objects.active()
        .waitlisted()
        .with_user()
        .order_by("event_id", "ride_level", "waitlist_joined_at", "id")
    )
