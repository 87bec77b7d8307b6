"""Domain errors raised by the registration services.

Each carries a user-facing message and a stable machine-readable code;
api.exception_handlers maps the classes onto HTTP statuses.
"""

from django.utils.translation import gettext_lazy as _


class RegistrationError(Exception):
    """Base class for registration errors."""

    code: str = "registration_error"
    default_message = _("Registration failed.")

    def __init__(self, message: str | None = None) -> None:
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class AccessDeniedError(RegistrationError):
    """Raised when the release policy does not admit the actor yet (or at all)."""

    code = "access_denied"

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class GuideAccessRequiredError(RegistrationError):
    """Raised when the caller is not a guide linked to the roster."""

    code = "guide_access_required"
    default_message = _("Guide access required.")


class GuideNotAssignedError(RegistrationError):
    """Raised when a guide acts on a ride level they do not lead."""

    code = "guide_not_assigned"
    default_message = _("You are not assigned as a guide for this ride level.")


class EventNotFoundError(RegistrationError):
    code = "event_not_found"
    default_message = _("Event not found.")


class RegistrationNotFoundError(RegistrationError):
    code = "registration_not_found"
    default_message = _("Registration not found or already cancelled.")


class InvalidCancelTokenError(RegistrationNotFoundError):
    code = "invalid_cancel_token"
    default_message = _("Cancellation link is invalid or already used.")


class RegistrationConflictError(RegistrationError):
    code = "conflict"


class AlreadyRegisteredError(RegistrationConflictError):
    code = "already_registered"
    default_message = _("You are already registered for this level.")


class AlreadyWaitlistedError(RegistrationConflictError):
    code = "already_waitlisted"
    default_message = _("You are already on the waitlist.")


class RideLevelCancelledError(RegistrationConflictError):
    """Raised when signing up for a ride level that a guide called off."""

    code = "ride_level_cancelled"
    default_message = _("This ride level has been cancelled.")


class RideLevelAlreadyCancelledError(RegistrationConflictError):
    code = "ride_level_already_cancelled"
    default_message = _("This ride level has already been cancelled.")


class GuestAccountExistsError(RegistrationError):
    """Raised when a guest signup uses the email of an existing account."""

    code = "account_exists"
    default_message = _("An account with this email already exists. Please log in.")


class EventMetadataUnavailableError(RegistrationError):
    """Raised when the event CMS could not be reached or answered with errors."""

    code = "event_metadata_unavailable"
    default_message = _("Could not load event details. Please try again later.")
