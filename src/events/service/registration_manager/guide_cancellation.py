"""GuideBulkCancellation: a guide calls off the ride level they lead."""

import datetime

from accounts.models import ClubUser
from events.exceptions import GuideAccessRequiredError, GuideNotAssignedError
from events.service.event_metadata import EventMetadata

from . import notifier
from .ledger import RegistrationLedger
from .types import BulkCancelOutcome


def ensure_guide(user: ClubUser) -> int:
    """Return the caller's roster id.

    Raises:
        GuideAccessRequiredError: If the user is not a guide linked to the roster.
    """
    if user.guide_id is None:
        raise GuideAccessRequiredError()
    return user.guide_id


class GuideBulkCancellation:
    """Cancels every registration of one ride level on behalf of its guide."""

    def __init__(self, guide: ClubUser, event: EventMetadata, ride_level: str) -> None:
        self.guide = guide
        self.event = event
        self.ride_level = ride_level

    def ensure_assigned(self) -> None:
        """Only a guide assigned to this exact level may cancel it.

        Raises:
            GuideAccessRequiredError: If the caller is not a guide.
            GuideNotAssignedError: If the guide leads another level (or none) of this event.
        """
        guide_id = ensure_guide(self.guide)
        if guide_id not in self.event.guide_ids_for(self.ride_level):
            raise GuideNotAssignedError()

    def cancel(self, reason: str, now: datetime.datetime | None = None) -> BulkCancelOutcome:
        """Void the level and notify everyone who was on it.

        Raises:
            RideLevelAlreadyCancelledError: If the level was already called off.
        """
        self.ensure_assigned()
        ledger = RegistrationLedger(self.event.event_id, self.ride_level)
        cancellation, registrations = ledger.bulk_cancel_level(cancelled_by=self.guide, reason=reason, now=now)
        emails_sent = notifier.notify_ride_level_cancelled(registrations, self.event, reason)
        return BulkCancelOutcome(cancellation=cancellation, registrations=registrations, emails_sent=emails_sent)
