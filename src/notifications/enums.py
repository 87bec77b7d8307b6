"""Enums for the notification system."""

from django.db.models import TextChoices


class NotificationType(TextChoices):
    """All notification types in the system."""

    # Registration notifications
    REGISTRATION_CONFIRMED = "registration_confirmed"
    WAITLIST_JOINED = "waitlist_joined"
    WAITLIST_PROMOTED = "waitlist_promoted"

    # Ride level notifications
    RIDE_LEVEL_CANCELLED = "ride_level_cancelled"
