"""Registration flows: signup, self-cancel and guide bulk cancel.

Each flow validates and authorizes before touching state, mutates state
through the RegistrationLedger, and sends e-mails only afterwards.
"""

import datetime

from django.db import transaction
from django.utils import timezone

from accounts.models import ClubUser
from events.exceptions import EventNotFoundError, GuestAccountExistsError
from events.service import event_metadata
from events.service.event_metadata import EventMetadata

from . import notifier
from .capacity import capacity_for
from .guide_cancellation import GuideBulkCancellation, ensure_guide
from .ledger import RegistrationLedger
from .policy import AccessPolicyEvaluator
from .types import (
    Actor,
    BulkCancelOutcome,
    CancelCriteria,
    CancelOutcome,
    Guest,
    Member,
    Registrant,
    RegistrantMatch,
    SignupOutcome,
)
from .waitlist import WaitlistPromoter


def get_event(event_id: int) -> EventMetadata:
    """Fetch event metadata.

    Raises:
        EventNotFoundError: If the CMS does not know the event.
        EventMetadataUnavailableError: If the CMS could not be queried.
    """
    event = event_metadata.fetch_event_metadata(event_id)
    if event is None:
        raise EventNotFoundError()
    return event


def sign_up(
    *,
    event_id: int,
    ride_level: str,
    registrant: Registrant,
    actor: Actor,
    first_name: str,
    last_name: str,
    event_type: str = "ride",
    now: datetime.datetime | None = None,
) -> SignupOutcome:
    """Claim a seat, or a waitlist spot when the level is full."""
    now = now or timezone.now()
    event = get_event(event_id)
    AccessPolicyEvaluator(event, actor, now).ensure_allowed()
    outcome = RegistrationLedger(event_id, ride_level).create(
        registrant=registrant,
        first_name=first_name,
        last_name=last_name,
        capacity=capacity_for(ride_level, event),
        event_type=event_type,
        now=now,
    )
    notifier.notify_signup(outcome, event)
    return outcome


def sign_up_member(
    user: ClubUser,
    *,
    event_id: int,
    ride_level: str,
    flinta_attested: bool,
    first_name: str,
    last_name: str,
    event_type: str = "ride",
) -> SignupOutcome:
    return sign_up(
        event_id=event_id,
        ride_level=ride_level,
        registrant=Member(user_id=user.pk),
        actor=Actor(is_member=user.is_member, flinta_attested=flinta_attested),
        first_name=first_name,
        last_name=last_name,
        event_type=event_type,
    )


def sign_up_guest(
    *,
    email: str,
    event_id: int,
    ride_level: str,
    flinta_attested: bool,
    first_name: str,
    last_name: str,
    event_type: str = "ride",
) -> SignupOutcome:
    """Sign up without an account. Guests never count as members.

    Raises:
        GuestAccountExistsError: If an account already uses the email.
    """
    if ClubUser.objects.get_queryset().with_email(email).exists():
        raise GuestAccountExistsError()
    return sign_up(
        event_id=event_id,
        ride_level=ride_level,
        registrant=Guest(email=email),
        actor=Actor(is_member=False, flinta_attested=flinta_attested),
        first_name=first_name,
        last_name=last_name,
        event_type=event_type,
    )


def _cancel(ledger: RegistrationLedger, criteria: CancelCriteria, now: datetime.datetime | None) -> CancelOutcome:
    now = now or timezone.now()
    with transaction.atomic():
        outcome = ledger.cancel(criteria, now=now)
        if outcome.was_confirmed:
            outcome.promotion = WaitlistPromoter(ledger.event_id, ledger.ride_level).on_seat_vacated(now=now)
    if outcome.promotion is not None:
        notifier.notify_promotion(outcome.promotion)
    return outcome


def cancel_registration(
    user: ClubUser, *, event_id: int, ride_level: str, now: datetime.datetime | None = None
) -> CancelOutcome:
    """Cancel the caller's own registration for a level."""
    ledger = RegistrationLedger(event_id, ride_level)
    return _cancel(ledger, RegistrantMatch(registrant=Member(user_id=user.pk)), now)


def cancel_with_token(token: str, now: datetime.datetime | None = None) -> CancelOutcome:
    """Cancel whichever active registration the token was issued for."""
    ledger, criteria = RegistrationLedger.for_cancel_token(token)
    return _cancel(ledger, criteria, now)


def cancel_ride_level(
    guide: ClubUser,
    *,
    event_id: int,
    ride_level: str,
    reason: str,
    now: datetime.datetime | None = None,
) -> BulkCancelOutcome:
    """Void a ride level on behalf of one of its guides."""
    ensure_guide(guide)
    event = get_event(event_id)
    return GuideBulkCancellation(guide, event, ride_level).cancel(reason, now=now)
