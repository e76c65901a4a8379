import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.admin import urls
from src.admin.strategies import AuthStrategy

logger = logging.getLogger(__name__)

PUBLIC_PATHS = (urls.LOGIN_PAGE_URL,)
PUBLIC_PREFIXES = (urls.LOGIN_URL, urls.LOGOUT_URL)


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


class AccessGate:
    """Decides, per request, whether an admin path may be served."""

    def __init__(self, strategy: AuthStrategy) -> None:
        self.strategy = strategy

    @staticmethod
    def is_api_path(path: str) -> bool:
        return _under(path, urls.ADMIN_API_PREFIX)

    @staticmethod
    def is_protected(path: str) -> bool:
        if not (_under(path, urls.ADMIN_PAGE_PREFIX) or _under(path, urls.ADMIN_API_PREFIX)):
            return False
        if path in PUBLIC_PATHS:
            return False
        return not any(_under(path, prefix) for prefix in PUBLIC_PREFIXES)

    def check(self, request: Request) -> Response | None:
        """Return a denial response, or None when the request may pass through."""
        path = request.url.path
        if not self.is_protected(path):
            return None

        missing = self.strategy.missing_setting()
        if missing:
            logger.error(f"Admin access refused: {missing} is not configured")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"ok": False, "message": "Server configuration error"},
            )

        username = self.strategy.authenticate(request)
        if username is not None:
            return None

        logger.info(f"Denied admin access to {path}")
        if self.is_api_path(path):
            return self.strategy.deny_api(request)
        return self.strategy.deny_page(request)


class AccessGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, gate: AccessGate) -> None:
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        denial = self.gate.check(request)
        if denial is not None:
            return denial
        return await call_next(request)
