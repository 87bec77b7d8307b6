"""Access gates for the release policy.

Each gate checks one rule. Gates are composed, in order, by the
AccessPolicyEvaluator: the first gate that returns a decision wins.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from django.utils.translation import gettext as _

from .enums import DenyMessage, DenyReason
from .types import AccessDecision

if TYPE_CHECKING:
    from .policy import AccessPolicyEvaluator


def _deny(reason: DenyReason, message: DenyMessage) -> AccessDecision:
    return AccessDecision(allowed=False, reason=reason, message=_(message))


class BaseAccessGate(abc.ABC):
    """Abstract Base Class for a composable access check."""

    def __init__(self, handler: AccessPolicyEvaluator) -> None:
        self.handler = handler
        self.event = handler.event
        self.actor = handler.actor

    @abc.abstractmethod
    def check(self) -> AccessDecision | None:
        """Perform the check.

        Returns:
            AccessDecision if this gate decides, None to continue to next gate.
        """


class FlintaOnlyGate(BaseAccessGate):
    """Gate #1: FLINTA-only events need an attestation, whatever the date."""

    def check(self) -> AccessDecision | None:
        if self.event.is_flinta_only and not self.actor.flinta_attested:
            return _deny(DenyReason.FLINTA_ONLY, DenyMessage.FLINTA_ONLY)
        return None


class NoReleaseDateGate(BaseAccessGate):
    """Gate #2: Events without a release date are open."""

    def check(self) -> AccessDecision | None:
        if self.event.public_release_date is None:
            return AccessDecision(allowed=True)
        return None


class PublicReleaseGate(BaseAccessGate):
    """Gate #3: Everyone is admitted once the public release date has passed."""

    def check(self) -> AccessDecision | None:
        if self.handler.now >= self.handler.release_date:
            return AccessDecision(allowed=True)
        return None


class MemberEarlyAccessGate(BaseAccessGate):
    """Gate #4: Inside the member window only members (or FLINTA) get in."""

    def check(self) -> AccessDecision | None:
        if self.handler.in_member_window and not self.actor.is_member and not self.actor.flinta_attested:
            return _deny(DenyReason.MEMBER_EARLY_ACCESS_ONLY, DenyMessage.MEMBER_EARLY_ACCESS_ONLY)
        return None


class FlintaEarlyAccessGate(BaseAccessGate):
    """Gate #5: Inside the FLINTA window an attestation is required.

    The FLINTA window contains the member window with the default day counts,
    so a non-FLINTA member is denied here too.
    """

    def check(self) -> AccessDecision | None:
        if self.handler.in_flinta_window and not self.actor.flinta_attested:
            return _deny(DenyReason.FLINTA_EARLY_ACCESS_ONLY, DenyMessage.FLINTA_EARLY_ACCESS_ONLY)
        return None


class NotOpenYetGate(BaseAccessGate):
    """Gate #6: Before any early-access window opens nobody gets in."""

    def check(self) -> AccessDecision | None:
        if not self.handler.in_member_window and not self.handler.in_flinta_window:
            return _deny(DenyReason.NOT_OPEN_YET, DenyMessage.NOT_OPEN_YET)
        return None


ACCESS_GATES: list[type[BaseAccessGate]] = [
    FlintaOnlyGate,
    NoReleaseDateGate,
    PublicReleaseGate,
    MemberEarlyAccessGate,
    FlintaEarlyAccessGate,
    NotOpenYetGate,
]
