from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest
from ninja.errors import ValidationError as NinjaValidationError
from ninja_extra import NinjaExtraAPI
from ninja_jwt.controller import NinjaJWTDefaultController

from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers import REGISTRATION_CONTROLLERS
from events.exceptions import (
    AccessDeniedError,
    EventMetadataUnavailableError,
    EventNotFoundError,
    GuestAccountExistsError,
    GuideAccessRequiredError,
    GuideNotAssignedError,
    RegistrationConflictError,
    RegistrationNotFoundError,
)

from .exception_handlers import (
    handle_access_denied_error,
    handle_bad_request_error,
    handle_conflict_error,
    handle_database_error,
    handle_django_validation_error,
    handle_forbidden_error,
    handle_general_exception,
    handle_not_found_error,
    handle_request_validation_error,
    handle_upstream_error,
)

api = NinjaExtraAPI(
    title="Ridelist API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Ridelist API {settings.VERSION}",
    app_name=f"ridelist-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version."""
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    NinjaJWTDefaultController,
    *REGISTRATION_CONTROLLERS,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    DatabaseError: handle_database_error,
    ValidationError: handle_django_validation_error,
    NinjaValidationError: handle_request_validation_error,
    AccessDeniedError: handle_access_denied_error,
    GuideAccessRequiredError: handle_forbidden_error,
    GuideNotAssignedError: handle_forbidden_error,
    GuestAccountExistsError: handle_bad_request_error,
    EventNotFoundError: handle_not_found_error,
    RegistrationNotFoundError: handle_not_found_error,
    RegistrationConflictError: handle_conflict_error,
    EventMetadataUnavailableError: handle_upstream_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
