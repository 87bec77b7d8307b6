from django.conf import settings
from django.db import models

from common.models import TimeStampedModel

from .registration import RideLevel


class RideLevelCancellation(TimeStampedModel):
    """Marks a whole ride level of an event as called off by a guide.

    Append-only: at most one row per (event, ride level), and its existence
    means every registration for that key has been cancelled.
    """

    event_id = models.PositiveIntegerField(db_index=True)
    ride_level = models.CharField(max_length=20, choices=RideLevel.choices)
    cancelled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="ride_level_cancellations",
        null=True,
        blank=True,
    )
    reason = models.TextField()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event_id", "ride_level"], name="unique_ride_level_cancellation"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id}/{self.ride_level} cancelled"


class RideLevelLock(models.Model):
    """One row per (event, ride level), locked with SELECT ... FOR UPDATE.

    Serializes every seat-changing write (signup, cancel, promotion, bulk
    cancel) for the same key across processes.
    """

    event_id = models.PositiveIntegerField()
    ride_level = models.CharField(max_length=20, choices=RideLevel.choices)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event_id", "ride_level"], name="unique_ride_level_lock"),
        ]

    def __str__(self) -> str:
        return f"lock {self.event_id}/{self.ride_level}"
