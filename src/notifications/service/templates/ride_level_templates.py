"""Templates for ride level notifications."""

import typing as t

from django.utils.translation import gettext as _

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import register


@register
class RideLevelCancelledTemplate(NotificationTemplate):
    """Sent to every registrant, seated or waitlisted, of a level a guide called off."""

    notification_type = NotificationType.RIDE_LEVEL_CANCELLED

    def get_email_subject(self, context: dict[str, t.Any]) -> str:
        return _("Your %(event)s - %(level)s ride has been cancelled") % {
            "event": context.get("event_title", ""),
            "level": context.get("ride_level_label", ""),
        }
