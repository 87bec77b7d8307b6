"""Mail delivery and mail log housekeeping."""

from datetime import timedelta

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils import timezone

from common.models import EmailLog, SiteSettings

logger = structlog.get_logger(__name__)


@shared_task
def send_email(
    *, to: str | list[str], subject: str, body: str, html_body: str | None = None, kind: str = ""
) -> None:
    """Deliver one message and log it per recipient.

    Args:
        to (str | list[str]): The recipient address(es).
        subject (str): The email subject.
        body (str): The plain text body.
        html_body (str | None): The HTML body.
        kind (str): The notification type, stored on the log rows.
    """
    site_settings = SiteSettings.get_solo()
    requested = [to] if isinstance(to, str) else to
    recipients = [to_safe_email_address(address, site_settings=site_settings) for address in requested]

    message = EmailMultiAlternatives(subject=subject, body=body, from_email=settings.DEFAULT_FROM_EMAIL, to=recipients)
    if html_body:
        message.attach_alternative(html_body, "text/html")
    message.send(fail_silently=False)

    EmailLog.objects.bulk_create(
        EmailLog.for_recipient(recipient, subject=subject, body=body, html_body=html_body, kind=kind)
        for recipient in recipients
    )
    logger.info("email_sent", kind=kind, recipient_count=len(recipients), live=site_settings.live_emails)


@shared_task
def cleanup_email_logs() -> None:
    """Expire old mail log rows and drop bodies once they are no longer needed for support."""
    now = timezone.now()
    deleted, _ = EmailLog.objects.filter(sent_at__lte=now - timedelta(days=settings.EMAIL_LOG_RETENTION_DAYS)).delete()
    stripped = EmailLog.objects.filter(
        sent_at__lte=now - timedelta(days=settings.EMAIL_LOG_BODY_RETENTION_DAYS),
        compressed_body__isnull=False,
    ).update(compressed_body=None, compressed_html=None)
    logger.info("email_logs_cleaned", deleted=deleted, stripped=stripped)


def to_safe_email_address(email: str, site_settings: SiteSettings | None = None) -> str:
    """Return the address a message for ``email`` is actually sent to.

    With live emails off, riders never receive mail from staging or test
    setups: the address is folded into a plus-address of the catch-all.
    """
    site_settings = site_settings or SiteSettings.get_solo()
    if site_settings.live_emails:
        return email
    user, domain = site_settings.internal_catchall_email.split("@", 1)
    folded = email.replace("@", "_at_").replace(".", "_dot_")
    return f"{user}+{folded}@{domain}"
