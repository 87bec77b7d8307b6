"""Context schemas for notifications using TypedDict for type safety.

Each notification type has a corresponding context schema that defines
the keys its templates rely on.
"""

import typing as t

from notifications.enums import NotificationType


class BaseNotificationContext(t.TypedDict, total=False):
    """Base context for all notifications."""

    frontend_url: str
    event_url: str


class RegistrationContext(BaseNotificationContext):
    """Context for REGISTRATION_CONFIRMED, WAITLIST_JOINED and WAITLIST_PROMOTED."""

    event_id: t.Required[int]
    event_title: t.Required[str]
    ride_level: t.Required[str]
    ride_level_label: t.Required[str]
    first_name: t.Required[str]
    cancel_url: t.Required[str]


class RideLevelCancelledContext(BaseNotificationContext):
    """Context for RIDE_LEVEL_CANCELLED."""

    event_id: t.Required[int]
    event_title: t.Required[str]
    ride_level: t.Required[str]
    ride_level_label: t.Required[str]
    first_name: t.Required[str]
    reason: t.Required[str]


NOTIFICATION_CONTEXT_SCHEMAS: dict[NotificationType, type[BaseNotificationContext]] = {
    NotificationType.REGISTRATION_CONFIRMED: RegistrationContext,
    NotificationType.WAITLIST_JOINED: RegistrationContext,
    NotificationType.WAITLIST_PROMOTED: RegistrationContext,
    NotificationType.RIDE_LEVEL_CANCELLED: RideLevelCancelledContext,
}


def validate_notification_context(notification_type: NotificationType, context: dict[str, t.Any]) -> None:
    """Validate that context matches expected schema for notification type.

    Raises:
        ValueError: If context is invalid or notification type has no schema
    """
    schema = NOTIFICATION_CONTEXT_SCHEMAS.get(notification_type)
    if schema is None:
        raise ValueError(f"No schema defined for notification type: {notification_type}")

    required_keys: frozenset[str] = getattr(schema, "__required_keys__", frozenset())
    missing_keys = required_keys - context.keys()

    if missing_keys:
        raise ValueError(f"Missing required context keys for {notification_type}: {missing_keys}")
