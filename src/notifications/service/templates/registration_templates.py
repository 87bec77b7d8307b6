"""Templates for signup and waitlist notifications."""

import typing as t

from django.utils.translation import gettext as _

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import register


@register
class RegistrationConfirmedTemplate(NotificationTemplate):
    notification_type = NotificationType.REGISTRATION_CONFIRMED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Your event spot is saved")


@register
class WaitlistJoinedTemplate(NotificationTemplate):
    notification_type = NotificationType.WAITLIST_JOINED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("You are on the waitlist")


@register
class WaitlistPromotedTemplate(NotificationTemplate):
    """Carries the fresh cancel link issued on promotion."""

    notification_type = NotificationType.WAITLIST_PROMOTED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("A spot opened up for your event")
