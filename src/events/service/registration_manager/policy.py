"""AccessPolicyEvaluator: phased release of signups."""

import datetime
import typing as t

import structlog
from django.conf import settings
from django.utils import timezone

from events.exceptions import AccessDeniedError
from events.service.event_metadata import EventMetadata

from .gates import ACCESS_GATES, BaseAccessGate
from .types import AccessDecision, Actor

logger = structlog.get_logger(__name__)


class AccessPolicyEvaluator:
    """Decides whether an actor may sign up for an event right now.

    Two early-access windows end at the public release date: members get
    ``MEMBER_EARLY_DAYS`` and FLINTA riders ``FLINTA_EARLY_DAYS`` ahead of it.
    """

    def __init__(self, event: EventMetadata, actor: Actor, now: datetime.datetime | None = None) -> None:
        self.event = event
        self.actor = actor
        self.now = now or timezone.now()
        self._gates: list[BaseAccessGate] = [gate(self) for gate in ACCESS_GATES]

    @property
    def release_date(self) -> datetime.datetime:
        return t.cast(datetime.datetime, self.event.public_release_date)

    def _in_window(self, days: int) -> bool:
        if self.event.public_release_date is None:
            return False
        window_start = self.release_date - datetime.timedelta(days=days)
        return window_start <= self.now < self.release_date

    @property
    def in_member_window(self) -> bool:
        return self._in_window(settings.MEMBER_EARLY_DAYS)

    @property
    def in_flinta_window(self) -> bool:
        return self._in_window(settings.FLINTA_EARLY_DAYS)

    def evaluate(self) -> AccessDecision:
        for gate in self._gates:
            if result := gate.check():
                return result

        return AccessDecision(allowed=True)

    def ensure_allowed(self) -> AccessDecision:
        """Evaluate and raise on denial.

        Raises:
            AccessDeniedError: If a gate denied access.
        """
        decision = self.evaluate()
        if not decision.allowed:
            logger.info(
                "signup_access_denied",
                event_id=self.event.event_id,
                reason=decision.reason,
                is_member=self.actor.is_member,
                flinta_attested=self.actor.flinta_attested,
            )
            raise AccessDeniedError(t.cast(str, decision.message), reason=t.cast(str, decision.reason))
        return decision
