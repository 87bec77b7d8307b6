"""Cancellation credentials for self-service (guest) cancellation.

The token is handed out once, in the confirmation e-mail. Only its SHA-256
digest is stored.
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass

TOKEN_BYTES = 24


@dataclass(frozen=True)
class CancelCredential:
    token: str
    token_hash: str


def hash_cancel_token(token: str) -> str:
    """One-way digest persisted as Registration.cancel_token_hash."""
    return hashlib.sha256(token.encode()).hexdigest()


def issue_cancel_credential() -> CancelCredential:
    """Issue a fresh URL-safe token together with its digest."""
    token = secrets.token_urlsafe(TOKEN_BYTES)
    return CancelCredential(token=token, token_hash=hash_cancel_token(token))


def verify_cancel_token(presented_token: str, stored_hash: str) -> bool:
    """Check a presented token against a stored digest in constant time."""
    if not presented_token or not stored_hash:
        return False
    return hmac.compare_digest(hash_cancel_token(presented_token), stored_hash)
