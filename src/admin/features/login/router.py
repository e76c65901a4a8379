import logging
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from src.admin import urls
from src.admin.session_token import issue_session_token
from src.admin.strategies import secrets_match
from src.config.settings import Settings
from src.dependencies import get_app_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    ok: bool
    message: str


@router.post(urls.LOGIN_URL, response_model=SessionResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    """
    Check the admin credentials and set a signed session cookie.
    The cookie holds the whole session; nothing is stored server-side.
    """
    if not (settings.admin_user and settings.admin_password and settings.auth_secret):
        logger.error("Admin login refused: ADMIN_USER, ADMIN_PASSWORD or AUTH_SECRET missing")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    user_ok = secrets_match(credentials.username, settings.admin_user)
    password_ok = secrets_match(credentials.password, settings.admin_password)
    if not (user_ok and password_ok):
        logger.info("Admin login failed")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Bad credentials")

    token, payload = issue_session_token(
        username=credentials.username,
        secret=settings.auth_secret,
        ttl=timedelta(days=settings.session_ttl_days),
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
        expires=datetime.fromtimestamp(payload.expires_at / 1000, tz=UTC),
    )
    logger.info(f"Admin {credentials.username} logged in")
    return SessionResponse(ok=True, message="Logged in")


@router.post(urls.LOGOUT_URL, response_model=SessionResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    """Clear the session cookie by overwriting it with an expired empty value."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return SessionResponse(ok=True, message="Logged out")
