import base64
import binascii
import hmac
from abc import ABC, abstractmethod
from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.security.utils import get_authorization_scheme_param

from src.admin import urls
from src.admin.session_token import verify_session_token
from src.config.settings import AuthStrategyName, Settings


def unauthorized_response(headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"ok": False, "message": "Unauthorized"},
        headers=headers,
    )


def secrets_match(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class AuthStrategy(ABC):
    """One way of proving admin identity. A deployment runs exactly one."""

    name: AuthStrategyName

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    def missing_setting(self) -> str | None:
        """Name of the first required setting that is not configured, if any."""
        raise NotImplementedError

    @abstractmethod
    def authenticate(self, request: Request) -> str | None:
        """Return the admin username carried by the request, or None."""
        raise NotImplementedError

    def deny_page(self, request: Request) -> Response:
        return unauthorized_response()

    def deny_api(self, request: Request) -> Response:
        return unauthorized_response()


class CookieTokenStrategy(AuthStrategy):
    """Signed session token stored in the admin session cookie."""

    name = AuthStrategyName.COOKIE

    def missing_setting(self) -> str | None:
        return None if self.settings.auth_secret else "AUTH_SECRET"

    def authenticate(self, request: Request) -> str | None:
        token = request.cookies.get(self.settings.session_cookie_name)
        if not token:
            return None
        verification = verify_session_token(token, self.settings.auth_secret)
        return verification.username if verification.allowed else None

    def deny_page(self, request: Request) -> Response:
        query = urlencode({"next": request.url.path})
        return RedirectResponse(
            url=f"{urls.LOGIN_PAGE_URL}?{query}",
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )


class BasicAuthStrategy(AuthStrategy):
    """HTTP Basic credentials checked on every request."""

    name = AuthStrategyName.BASIC
    challenge = {"WWW-Authenticate": 'Basic realm="admin", charset="UTF-8"'}

    def missing_setting(self) -> str | None:
        if not self.settings.admin_user:
            return "ADMIN_USER"
        if not self.settings.admin_password:
            return "ADMIN_PASSWORD"
        return None

    def authenticate(self, request: Request) -> str | None:
        scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
        if scheme.lower() != "basic" or not param:
            return None
        try:
            decoded = base64.b64decode(param, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return None
        username, separator, password = decoded.partition(":")
        if not separator:
            return None

        # Both comparisons always run
        user_ok = secrets_match(username, self.settings.admin_user)
        password_ok = secrets_match(password, self.settings.admin_password)
        return username if user_ok and password_ok else None

    def deny_page(self, request: Request) -> Response:
        return unauthorized_response(headers=self.challenge)

    def deny_api(self, request: Request) -> Response:
        return unauthorized_response(headers=self.challenge)


class StaticBearerStrategy(AuthStrategy):
    """A single shared bearer token compared against the configured value."""

    name = AuthStrategyName.BEARER

    def missing_setting(self) -> str | None:
        return None if self.settings.admin_token else "ADMIN_TOKEN"

    def authenticate(self, request: Request) -> str | None:
        scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
        if scheme.lower() != "bearer" or not token:
            return None
        if not secrets_match(token, self.settings.admin_token):
            return None
        return self.settings.admin_user or "admin"

    def deny_api(self, request: Request) -> Response:
        return unauthorized_response(headers={"WWW-Authenticate": "Bearer"})

    def deny_page(self, request: Request) -> Response:
        return self.deny_api(request)


STRATEGIES: dict[AuthStrategyName, type[AuthStrategy]] = {
    AuthStrategyName.COOKIE: CookieTokenStrategy,
    AuthStrategyName.BASIC: BasicAuthStrategy,
    AuthStrategyName.BEARER: StaticBearerStrategy,
}


def build_auth_strategy(settings: Settings) -> AuthStrategy:
    return STRATEGIES[settings.admin_auth_strategy](settings)
