"""Builds and sends the registration e-mails.

Everything here is best-effort: failures are logged by the dispatcher and
reported as False, never raised.
"""

import typing as t
from urllib.parse import urlencode

import structlog
from django.conf import settings

from common.models import SiteSettings
from events.exceptions import EventMetadataUnavailableError
from events.models import Registration
from events.service import event_metadata
from events.service.event_metadata import EventMetadata
from notifications.enums import NotificationType
from notifications.service.dispatcher import send_notification

from .types import Promotion, SignupOutcome

logger = structlog.get_logger(__name__)


def _frontend_base_url() -> str:
    return t.cast(str, SiteSettings.get_solo().frontend_base_url).rstrip("/")


def build_cancel_url(token: str) -> str:
    """Self-service cancellation link carrying the plaintext token."""
    return f"{_frontend_base_url()}/event/cancel?{urlencode({'token': token})}"


def build_event_url(event: EventMetadata | None) -> str | None:
    if event is None or not event.slug:
        return None
    return f"{_frontend_base_url()}/community/{event.slug}"


def _context(registration: Registration, event: EventMetadata | None, **extra: t.Any) -> dict[str, t.Any]:
    context: dict[str, t.Any] = {
        "event_id": registration.event_id,
        "event_title": event.title if event else settings.DEFAULT_EVENT_TITLE,
        "ride_level": registration.ride_level,
        "ride_level_label": registration.ride_level_label,
        "first_name": registration.first_name,
        "frontend_url": _frontend_base_url(),
        **extra,
    }
    if event_url := build_event_url(event):
        context["event_url"] = event_url
    return context


def notify_signup(outcome: SignupOutcome, event: EventMetadata) -> bool:
    """Confirmation or waitlist e-mail for a fresh signup."""
    registration = outcome.registration
    notification_type = (
        NotificationType.WAITLIST_JOINED if outcome.waitlisted else NotificationType.REGISTRATION_CONFIRMED
    )
    context = _context(registration, event, cancel_url=build_cancel_url(outcome.cancel_token))
    return send_notification(registration.recipient_email, notification_type, context)


def notify_promotion(promotion: Promotion) -> bool:
    """Tell a promoted registrant they have a seat, with their new cancel link."""
    registration = promotion.registration
    try:
        event = event_metadata.fetch_event_metadata(registration.event_id)
    except EventMetadataUnavailableError:
        logger.warning("promotion_notification_without_metadata", event_id=registration.event_id)
        event = None
    context = _context(registration, event, cancel_url=build_cancel_url(promotion.cancel_token))
    return send_notification(registration.recipient_email, NotificationType.WAITLIST_PROMOTED, context)


def notify_ride_level_cancelled(registrations: list[Registration], event: EventMetadata, reason: str) -> int:
    """Fan out the cancellation notice; returns how many e-mails were queued."""
    emails_sent = 0
    for registration in registrations:
        context = _context(registration, event, reason=reason)
        if send_notification(registration.recipient_email, NotificationType.RIDE_LEVEL_CANCELLED, context):
            emails_sent += 1
    return emails_sent
