"""WaitlistPromoter: fills a freed seat from the waitlist, FIFO."""

import datetime

import structlog
from django.db import transaction
from django.utils import timezone

from .credentials import issue_cancel_credential
from .ledger import RegistrationLedger
from .types import Promotion

logger = structlog.get_logger(__name__)


class WaitlistPromoter:
    """Promotes the earliest-joined waitlisted registration of one ride level."""

    def __init__(self, event_id: int, ride_level: str) -> None:
        self.ledger = RegistrationLedger(event_id, ride_level)

    def on_seat_vacated(self, now: datetime.datetime | None = None) -> Promotion | None:
        """Promote the head of the waitlist, if any.

        Only call this after a Confirmed registration was cancelled. The promoted
        row gets a new cancellation credential, so its previous link stops working.
        """
        now = now or timezone.now()
        with transaction.atomic():
            self.ledger.lock()
            candidate = (
                self.ledger.registrations().active().waitlisted().in_waitlist_order().select_for_update().first()
            )
            if candidate is None:
                return None

            credential = issue_cancel_credential()
            candidate.is_waitlist = False
            candidate.waitlist_promoted_at = now
            candidate.cancel_token_hash = credential.token_hash
            candidate.cancel_token_issued_at = now
            candidate.save(
                update_fields=[
                    "is_waitlist",
                    "waitlist_promoted_at",
                    "cancel_token_hash",
                    "cancel_token_issued_at",
                    "updated_at",
                ]
            )

        logger.info(
            "waitlist_promoted",
            registration_id=candidate.pk,
            event_id=self.ledger.event_id,
            ride_level=self.ledger.ride_level,
            waitlist_joined_at=candidate.waitlist_joined_at,
        )
        return Promotion(registration=candidate, cancel_token=credential.token)
