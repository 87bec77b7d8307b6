"""Best-effort e-mail notification dispatch.

Registration state is the source of truth; a notification that cannot be
rendered or queued is logged and dropped, never raised to the caller.
"""

import typing as t

import structlog

from common.tasks import send_email
from notifications.context_schemas import validate_notification_context
from notifications.enums import NotificationType
from notifications.service.templates.registry import get_template

logger = structlog.get_logger(__name__)


def send_notification(
    recipient_email: str | None,
    notification_type: NotificationType | str,
    context: dict[str, t.Any],
) -> bool:
    """Render and queue a notification e-mail.

    Args:
        recipient_email: Where to send it. Nothing is sent when empty.
        notification_type: Type of notification
        context: Template context

    Returns:
        True if the e-mail was handed to the mail task, False otherwise.
    """
    if isinstance(notification_type, str):
        notification_type = NotificationType(notification_type)

    if not recipient_email:
        logger.warning("notification_skipped_no_recipient", notification_type=notification_type)
        return False

    try:
        validate_notification_context(notification_type, context)
        template = get_template(notification_type)
        send_email.delay(
            to=recipient_email,
            subject=template.get_email_subject(context),
            body=template.get_email_text_body(context),
            html_body=template.get_email_html_body(context),
            kind=notification_type.value,
        )
    except Exception:
        logger.exception(
            "notification_send_failed",
            notification_type=notification_type,
            event_id=context.get("event_id"),
        )
        return False

    logger.info("notification_queued", notification_type=notification_type, event_id=context.get("event_id"))
    return True
