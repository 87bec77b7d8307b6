"""Notification templates, registered on import."""

from . import registration_templates, ride_level_templates  # noqa: F401
