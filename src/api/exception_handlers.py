"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest
from ninja.errors import ValidationError as NinjaValidationError
from ninja.responses import Response

from events.exceptions import AccessDeniedError, EventMetadataUnavailableError, RegistrationError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Logs the traceback together with obfuscated request metadata.
    """
    metadata = {
        "headers": obfuscate(dict(request.headers)),
        "method": request.method,
        "path": request.path,
        "GET": obfuscate(request.GET.dict()),
        "user": str(request.user) if getattr(request, "user", None) else None,
    }
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            metadata["json"] = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            metadata["json"] = None
    logger.exception("INTERNAL_SERVER_ERROR", exc_info=exc, **metadata)
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_database_error(request: HttpRequest, exc: DatabaseError | t.Type[DatabaseError]) -> Response:
    """Handle a persistence failure; the enclosing transaction was rolled back."""
    logger.exception("PERSISTENCE_ERROR", exc_info=exc, method=request.method, path=request.path)
    return Response(status=500, data={"detail": "Could not save registration.", "code": "persistence_error"})


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a model validation error."""
    logger.warning("VALIDATION_ERROR", path=request.path)
    assert isinstance(exc, ValidationError)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
        return Response(status=400, data={"errors": error_dict})
    return Response(status=400, data={"errors": {"__all__": exc.messages}})


def handle_request_validation_error(
    request: HttpRequest, exc: NinjaValidationError | t.Type[NinjaValidationError]
) -> Response:
    """Handle an invalid request payload with 400 instead of ninja's default 422."""
    assert isinstance(exc, NinjaValidationError)
    return Response(status=400, data={"errors": orjson.loads(orjson.dumps(exc.errors, default=str))})


def _error_payload(exc: RegistrationError) -> dict[str, t.Any]:
    return {"detail": exc.message, "code": exc.code}


def handle_access_denied_error(request: HttpRequest, exc: AccessDeniedError | t.Type[AccessDeniedError]) -> Response:
    """Handle a denial by the release policy."""
    assert isinstance(exc, AccessDeniedError)
    return Response(status=403, data={**_error_payload(exc), "reason": exc.reason})


def handle_forbidden_error(request: HttpRequest, exc: RegistrationError | t.Type[RegistrationError]) -> Response:
    assert isinstance(exc, RegistrationError)
    return Response(status=403, data=_error_payload(exc))


def handle_bad_request_error(request: HttpRequest, exc: RegistrationError | t.Type[RegistrationError]) -> Response:
    assert isinstance(exc, RegistrationError)
    return Response(status=400, data=_error_payload(exc))


def handle_not_found_error(request: HttpRequest, exc: RegistrationError | t.Type[RegistrationError]) -> Response:
    assert isinstance(exc, RegistrationError)
    return Response(status=404, data=_error_payload(exc))


def handle_conflict_error(request: HttpRequest, exc: RegistrationError | t.Type[RegistrationError]) -> Response:
    assert isinstance(exc, RegistrationError)
    return Response(status=409, data=_error_payload(exc))


def handle_upstream_error(
    request: HttpRequest, exc: EventMetadataUnavailableError | t.Type[EventMetadataUnavailableError]
) -> Response:
    """Handle a failed event metadata fetch."""
    assert isinstance(exc, EventMetadataUnavailableError)
    return Response(status=502, data=_error_payload(exc))


SENSITIVE_KEYS = {"password", "token", "authorization", "x-waitlist-secret", "cookie"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
