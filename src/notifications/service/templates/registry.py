"""Lookup from notification type to its e-mail template."""

import typing as t

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate

_templates: dict[NotificationType, NotificationTemplate] = {}

TemplateClass = t.TypeVar("TemplateClass", bound=type[NotificationTemplate])


def register(template_class: TemplateClass) -> TemplateClass:
    """Class decorator: instantiate the template and file it under its notification_type."""
    notification_type = template_class.notification_type
    if notification_type in _templates:
        raise ValueError(f"Template for {notification_type} registered twice")
    _templates[notification_type] = template_class()
    return template_class


def get_template(notification_type: NotificationType | str) -> NotificationTemplate:
    """Return the template for a notification type.

    Raises:
        ValueError: for an unknown type or a type without a template.
    """
    notification_type = NotificationType(notification_type)
    try:
        return _templates[notification_type]
    except KeyError:
        raise ValueError(f"No template registered for {notification_type}") from None


def is_template_registered(notification_type: NotificationType | str) -> bool:
    return NotificationType(notification_type) in _templates


def missing_templates() -> list[NotificationType]:
    return [notification_type for notification_type in NotificationType if notification_type not in _templates]
