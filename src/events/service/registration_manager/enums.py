"""Enums for the access policy."""

from enum import StrEnum

from django.utils.translation import gettext_noop


class DenyReason(StrEnum):
    """Machine-readable reasons a signup attempt is denied."""

    FLINTA_ONLY = "flinta-only"
    MEMBER_EARLY_ACCESS_ONLY = "member-early-access-only"
    FLINTA_EARLY_ACCESS_ONLY = "flinta-early-access-only"
    NOT_OPEN_YET = "not-open-yet"


class DenyMessage(StrEnum):
    """User-facing messages for each DenyReason.

    Note: Strings are marked with gettext_noop() for extraction and
    translated in gates.py.
    """

    FLINTA_ONLY = gettext_noop("This event is FLINTA only.")
    MEMBER_EARLY_ACCESS_ONLY = gettext_noop("Member early access only.")
    FLINTA_EARLY_ACCESS_ONLY = gettext_noop("FLINTA early access only.")
    NOT_OPEN_YET = gettext_noop("Registration and waitlist are not open yet.")
