import typing as t

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from common.models import TimeStampedModel

if t.TYPE_CHECKING:
    from events.service.registration_manager.types import Registrant


class RideLevel(models.TextChoices):
    LEVEL_1 = "level1", "Level 1"
    LEVEL_2 = "level2", "Level 2"
    LEVEL_2_PLUS = "level2plus", "Level 2+"
    LEVEL_3 = "level3", "Level 3"
    WORKSHOP = "workshop", "Workshop"


class RegistrationQuerySet(models.QuerySet["Registration"]):
    """Custom queryset for Registration."""

    def active(self) -> t.Self:
        """Registrations that have not been cancelled."""
        return self.filter(cancelled_at__isnull=True)

    def confirmed(self) -> t.Self:
        """Registrations holding a seat."""
        return self.filter(is_waitlist=False)

    def waitlisted(self) -> t.Self:
        """Registrations queued for a seat."""
        return self.filter(is_waitlist=True)

    def for_level(self, event_id: int, ride_level: str) -> t.Self:
        """Scope to a single (event, ride level) key."""
        return self.filter(event_id=event_id, ride_level=ride_level)

    def for_registrant(self, registrant: "Registrant") -> t.Self:
        """Scope to a member or a guest."""
        return self.filter(**registrant.lookup())

    def in_waitlist_order(self) -> t.Self:
        """Oldest waitlist entry first, insertion order breaks ties."""
        return self.order_by("waitlist_joined_at", "id")

    def with_user(self) -> t.Self:
        """Select the related user."""
        return self.select_related("user")


class RegistrationManager(models.Manager["Registration"]):
    """Custom manager for Registration."""

    def get_queryset(self) -> RegistrationQuerySet:
        """Get base queryset."""
        return RegistrationQuerySet(self.model, using=self._db)

    def active(self) -> RegistrationQuerySet:
        """Returns only registrations that are not cancelled."""
        return self.get_queryset().active()


class Registration(TimeStampedModel):
    """A member's or guest's claim on a seat (or a waitlist spot) for one ride level."""

    # Monotonic ids double as insertion order for waitlist tie-breaks.
    id = models.BigAutoField(primary_key=True)
    event_id = models.PositiveIntegerField(db_index=True, help_text="Event id in the event CMS.")
    ride_level = models.CharField(max_length=20, choices=RideLevel.choices, db_index=True)
    event_type = models.CharField(max_length=32, default="ride")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="registrations",
        null=True,
        blank=True,
    )
    email = models.EmailField(null=True, blank=True, help_text="Guest registrant email, lowercased.")
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    is_waitlist = models.BooleanField(default=False)
    waitlist_joined_at = models.DateTimeField(null=True, blank=True)
    waitlist_promoted_at = models.DateTimeField(null=True, blank=True)
    cancel_token_hash = models.CharField(max_length=64, unique=True)
    cancel_token_issued_at = models.DateTimeField()
    cancelled_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = RegistrationManager()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(user__isnull=False, email__isnull=True) | Q(user__isnull=True, email__isnull=False),
                name="registration_member_xor_guest",
            ),
            models.UniqueConstraint(
                fields=["event_id", "ride_level", "user"],
                condition=Q(cancelled_at__isnull=True, user__isnull=False),
                name="unique_active_member_registration",
            ),
            models.UniqueConstraint(
                "event_id",
                "ride_level",
                Lower("email"),
                condition=Q(cancelled_at__isnull=True, email__isnull=False),
                name="unique_active_guest_registration",
            ),
        ]
        indexes = [
            models.Index(
                fields=["event_id", "ride_level", "is_waitlist", "cancelled_at"], name="registration_level_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.event_id}/{self.ride_level} {self.first_name} {self.last_name}"

    @property
    def registrant(self) -> "Registrant":
        """The tagged registrant this row belongs to."""
        from events.service.registration_manager.types import Guest, Member

        if self.user_id is not None:
            return Member(user_id=self.user_id)
        return Guest(email=t.cast(str, self.email))

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled_at is not None

    @property
    def recipient_email(self) -> str | None:
        """Where notifications go: the guest email, or the member's profile email."""
        if self.email:
            return self.email
        if self.user is not None and self.user.email:
            return t.cast(str, self.user.email)
        return None

    @property
    def ride_level_label(self) -> str:
        return str(RideLevel(self.ride_level).label)
