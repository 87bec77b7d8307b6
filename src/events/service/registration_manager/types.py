"""Types for the registration subsystem."""

import typing as t
import uuid
from dataclasses import dataclass, field

from pydantic import BaseModel

from events.models import Registration, RideLevelCancellation

from .enums import DenyReason


@dataclass(frozen=True)
class Member:
    """A registrant with an account."""

    user_id: uuid.UUID

    def lookup(self) -> dict[str, t.Any]:
        return {"user_id": self.user_id}

    def fields(self) -> dict[str, t.Any]:
        return {"user_id": self.user_id, "email": None}


@dataclass(frozen=True)
class Guest:
    """A registrant known only by e-mail address."""

    email: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", self.email.strip().lower())

    def lookup(self) -> dict[str, t.Any]:
        return {"email__iexact": self.email}

    def fields(self) -> dict[str, t.Any]:
        return {"user_id": None, "email": self.email}


Registrant = Member | Guest


@dataclass(frozen=True)
class Actor:
    """Attributes of whoever is trying to sign up."""

    is_member: bool
    flinta_attested: bool


class AccessDecision(BaseModel):
    """Result of the access policy for one signup attempt."""

    allowed: bool
    reason: DenyReason | None = None
    message: str | None = None


@dataclass(frozen=True)
class TokenMatch:
    """Cancel the active registration holding this credential hash."""

    cancel_token_hash: str


@dataclass(frozen=True)
class RegistrantMatch:
    """Cancel the registrant's active registration."""

    registrant: Registrant


CancelCriteria = TokenMatch | RegistrantMatch


@dataclass
class SignupOutcome:
    registration: Registration
    cancel_token: str

    @property
    def waitlisted(self) -> bool:
        return self.registration.is_waitlist


@dataclass
class Promotion:
    registration: Registration
    cancel_token: str


@dataclass
class CancelOutcome:
    registration: Registration
    was_confirmed: bool
    promotion: Promotion | None = None


@dataclass
class BulkCancelOutcome:
    cancellation: RideLevelCancellation
    registrations: list[Registration] = field(default_factory=list)
    emails_sent: int = 0

    @property
    def cancelled_count(self) -> int:
        return len(self.registrations)
