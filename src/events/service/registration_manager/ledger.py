"""RegistrationLedger: the authoritative store of registration state.

Every seat-changing write for an (event, ride level) key runs inside
``transaction.atomic`` after locking that key's RideLevelLock row, so the
count-then-insert and select-then-update sequences cannot interleave across
processes. Partial unique constraints on Registration back the one active
registration per registrant rule.
"""

import datetime

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.models import ClubUser
from events.exceptions import (
    AlreadyRegisteredError,
    AlreadyWaitlistedError,
    InvalidCancelTokenError,
    RegistrationNotFoundError,
    RideLevelAlreadyCancelledError,
    RideLevelCancelledError,
)
from events.models import Registration, RideLevelCancellation, RideLevelLock
from events.models.registration import RegistrationQuerySet

from .credentials import hash_cancel_token, issue_cancel_credential, verify_cancel_token
from .types import CancelCriteria, CancelOutcome, Registrant, SignupOutcome, TokenMatch

logger = structlog.get_logger(__name__)


class RegistrationLedger:
    """Registration state for a single (event, ride level) key."""

    def __init__(self, event_id: int, ride_level: str) -> None:
        self.event_id = event_id
        self.ride_level = ride_level

    @classmethod
    def for_cancel_token(cls, token: str) -> tuple["RegistrationLedger", TokenMatch]:
        """Resolve the key an active registration's cancel token belongs to.

        Raises:
            InvalidCancelTokenError: If no active registration holds the token.
        """
        criteria = TokenMatch(cancel_token_hash=hash_cancel_token(token))
        row = (
            Registration.objects.active()
            .filter(cancel_token_hash=criteria.cancel_token_hash)
            .values_list("event_id", "ride_level", "cancel_token_hash")
            .first()
        )
        if row is None or not verify_cancel_token(token, row[2]):
            raise InvalidCancelTokenError()
        event_id, ride_level, _ = row
        return cls(event_id, ride_level), criteria

    def lock(self) -> RideLevelLock:
        """Take the row lock serializing writes for this key.

        Must be called inside an atomic block.
        """
        lock, _ = RideLevelLock.objects.get_or_create(event_id=self.event_id, ride_level=self.ride_level)
        return RideLevelLock.objects.select_for_update().get(pk=lock.pk)

    def registrations(self) -> RegistrationQuerySet:
        return Registration.objects.get_queryset().for_level(self.event_id, self.ride_level)

    def is_cancelled(self) -> bool:
        return RideLevelCancellation.objects.filter(event_id=self.event_id, ride_level=self.ride_level).exists()

    def confirmed_count(self) -> int:
        return self.registrations().active().confirmed().count()

    def create(
        self,
        *,
        registrant: Registrant,
        first_name: str,
        last_name: str,
        capacity: int | None,
        event_type: str = "ride",
        now: datetime.datetime | None = None,
    ) -> SignupOutcome:
        """Insert a Confirmed or Waitlisted registration.

        Args:
            capacity: Seats for the level, None for unlimited.

        Raises:
            RideLevelCancelledError: If a guide has called the level off.
            AlreadyRegisteredError: If the registrant already holds a seat.
            AlreadyWaitlistedError: If the registrant is already queued.
        """
        now = now or timezone.now()
        with transaction.atomic():
            self.lock()
            if self.is_cancelled():
                raise RideLevelCancelledError()

            existing = self.registrations().active().for_registrant(registrant).first()
            if existing is not None:
                raise AlreadyWaitlistedError() if existing.is_waitlist else AlreadyRegisteredError()

            is_waitlist = capacity is not None and self.confirmed_count() >= capacity
            credential = issue_cancel_credential()
            registration = Registration(
                event_id=self.event_id,
                ride_level=self.ride_level,
                event_type=event_type,
                first_name=first_name,
                last_name=last_name,
                is_waitlist=is_waitlist,
                waitlist_joined_at=now if is_waitlist else None,
                cancel_token_hash=credential.token_hash,
                cancel_token_issued_at=now,
                **registrant.fields(),
            )
            try:
                with transaction.atomic():
                    registration.save()
            except IntegrityError as e:
                raise AlreadyRegisteredError() from e

        logger.info(
            "registration_created",
            registration_id=registration.pk,
            event_id=self.event_id,
            ride_level=self.ride_level,
            waitlisted=is_waitlist,
            capacity=capacity,
        )
        return SignupOutcome(registration=registration, cancel_token=credential.token)

    def cancel(self, criteria: CancelCriteria, now: datetime.datetime | None = None) -> CancelOutcome:
        """Cancel exactly one active registration.

        Raises:
            InvalidCancelTokenError: If no active registration holds the token.
            RegistrationNotFoundError: If the registrant has no active registration.
        """
        now = now or timezone.now()
        with transaction.atomic():
            self.lock()
            queryset = self.registrations().active()
            if isinstance(criteria, TokenMatch):
                queryset = queryset.filter(cancel_token_hash=criteria.cancel_token_hash)
                not_found: type[RegistrationNotFoundError] = InvalidCancelTokenError
            else:
                queryset = queryset.for_registrant(criteria.registrant)
                not_found = RegistrationNotFoundError

            registration = queryset.select_for_update().first()
            if registration is None:
                raise not_found()

            # cancelled_at is terminal: only rows still active are touched.
            updated = Registration.objects.filter(pk=registration.pk, cancelled_at__isnull=True).update(
                cancelled_at=now, updated_at=now
            )
            if not updated:
                raise not_found()
            registration.cancelled_at = now

        logger.info(
            "registration_cancelled",
            registration_id=registration.pk,
            event_id=self.event_id,
            ride_level=self.ride_level,
            was_confirmed=not registration.is_waitlist,
        )
        return CancelOutcome(registration=registration, was_confirmed=not registration.is_waitlist)

    def bulk_cancel_level(
        self,
        *,
        cancelled_by: ClubUser | None,
        reason: str,
        now: datetime.datetime | None = None,
    ) -> tuple[RideLevelCancellation, list[Registration]]:
        """Void the whole level: record the cancellation and cancel every active registration.

        Nobody is promoted; a voided level has no seats left to fill.

        Raises:
            RideLevelAlreadyCancelledError: If the level was already called off.
        """
        now = now or timezone.now()
        with transaction.atomic():
            self.lock()
            if self.is_cancelled():
                raise RideLevelAlreadyCancelledError()
            try:
                with transaction.atomic():
                    cancellation = RideLevelCancellation.objects.create(
                        event_id=self.event_id,
                        ride_level=self.ride_level,
                        cancelled_by=cancelled_by,
                        reason=reason,
                    )
            except IntegrityError as e:
                raise RideLevelAlreadyCancelledError() from e

            registrations = list(self.registrations().active().with_user().select_for_update(of=("self",)))
            Registration.objects.filter(pk__in=[r.pk for r in registrations]).update(
                cancelled_at=now, updated_at=now
            )
            for registration in registrations:
                registration.cancelled_at = now

        logger.info(
            "ride_level_cancelled",
            event_id=self.event_id,
            ride_level=self.ride_level,
            cancelled_by=str(cancelled_by.pk) if cancelled_by else None,
            cancelled_count=len(registrations),
        )
        return cancellation, registrations
