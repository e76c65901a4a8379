from urllib.parse import urlencode

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from src.config.settings import Settings
from src.dependencies import get_app_settings
from src.rsvps import urls

router = APIRouter()


@router.get(urls.INVITE_LANDING_URL, include_in_schema=False)
async def invite_landing(
    code: str,
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """
    Personal invitation link. A known code is carried to the home page as a
    query parameter; an unknown one lands on the bare home page, exactly like
    no code at all.
    """
    clean = code.strip()
    target = urls.HOME_PAGE_URL
    if clean and clean in settings.get_invite_codes():
        target = f"{urls.HOME_PAGE_URL}?{urlencode({'code': clean})}"
    return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
