import hmac
import typing as t

from django.conf import settings
from django.http import HttpRequest
from django.utils import translation
from ninja.security import APIKeyHeader
from ninja_jwt.authentication import JWTAuth


class I18nJWTAuth(JWTAuth):
    """JWT authentication that activates user's preferred language.

    The language is activated right after the token is validated, so error
    messages raised by the handler are already translated.

    Usage:
        @route.post("/endpoint", auth=I18nJWTAuth())
        def my_endpoint(request):
            ...
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and activate user's language preference.

        Raises:
            AuthenticationFailed: If authentication fails
            InvalidToken: If the token is invalid
        """
        user = super().authenticate(request, token)

        user_language = getattr(user, "language", None)
        if user_language:
            translation.activate(user_language)
            request.LANGUAGE_CODE = user_language

        return user


class SharedSecretHeaderAuth(APIKeyHeader):
    """Authenticates machine clients presenting a shared secret in a header.

    The secret is read from the named Django setting on every request; an
    empty setting rejects everybody.

    Usage:
        @route.get("/report", auth=SharedSecretHeaderAuth("X-Report-Secret", "REPORT_SECRET"))
    """

    def __init__(self, header_name: str, setting_name: str) -> None:
        self.param_name = header_name
        self.setting_name = setting_name
        super().__init__()

    def authenticate(self, request: HttpRequest, key: str | None) -> str | None:
        expected = getattr(settings, self.setting_name, "")
        if not expected or not key:
            return None
        if not hmac.compare_digest(key.encode(), str(expected).encode()):
            return None
        return key
