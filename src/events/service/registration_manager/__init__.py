"""Registration and waitlist admission control.

This package decides whether a signup gets a seat, a waitlist spot or a
denial, and manages seats as people cancel.
"""

from .capacity import capacity_for
from .credentials import CancelCredential, hash_cancel_token, issue_cancel_credential, verify_cancel_token
from .enums import DenyMessage, DenyReason
from .guide_cancellation import GuideBulkCancellation
from .ledger import RegistrationLedger
from .policy import AccessPolicyEvaluator
from .types import (
    AccessDecision,
    Actor,
    BulkCancelOutcome,
    CancelOutcome,
    Guest,
    Member,
    Promotion,
    Registrant,
    RegistrantMatch,
    SignupOutcome,
    TokenMatch,
)
from .waitlist import WaitlistPromoter

__all__ = [
    "AccessDecision",
    "AccessPolicyEvaluator",
    "Actor",
    "BulkCancelOutcome",
    "CancelCredential",
    "CancelOutcome",
    "DenyMessage",
    "DenyReason",
    "Guest",
    "GuideBulkCancellation",
    "Member",
    "Promotion",
    "Registrant",
    "RegistrantMatch",
    "RegistrationLedger",
    "SignupOutcome",
    "TokenMatch",
    "WaitlistPromoter",
    "capacity_for",
    "hash_cancel_token",
    "issue_cancel_credential",
    "verify_cancel_token",
]
