import re
from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from src.admin import urls as admin_urls
from src.config.settings import Settings
from src.dependencies import get_app_settings
from src.pages.templates import PageTemplates
from src.rsvps import urls as rsvp_urls
from src.rsvps.dtos import RSVPRecord
from src.rsvps.features.list_rsvps.read_model import AttendingFilter, RSVPListReadModel
from src.rsvps.features.list_rsvps.router import get_rsvp_list_read_model

router = APIRouter(include_in_schema=False)

# Return targets after login must stay on this site
SAFE_NEXT_PATH = re.compile(r"^/[A-Za-z0-9/_\-]*$")


def render_page(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(PageTemplates.LAYOUT.format(title=escape(title), body=body))


def safe_next_path(next_path: str | None) -> str:
    if next_path and SAFE_NEXT_PATH.match(next_path) and not next_path.startswith("//"):
        return next_path
    return admin_urls.DASHBOARD_PAGE_URL


def _render_row(record: RSVPRecord) -> str:
    age_ranges = record.children.age_ranges
    children = "-"
    if record.attending and record.children.count:
        children = (
            f"{record.children.count} "
            f"(0-3: {age_ranges.age_0_3}, 4-10: {age_ranges.age_4_10}, 11-17: {age_ranges.age_11_17})"
        )
    return PageTemplates.DASHBOARD_ROW.format(
        updated_at=escape(record.updated_at),
        name=escape(record.name),
        contact=escape(" / ".join(value for value in (record.email, record.phone) if value)),
        attending="YES" if record.attending else "NO",
        adult_partner="yes" if record.attending and record.adult_partner else "-",
        children=children,
        message=escape(record.message or ""),
    )


@router.get(rsvp_urls.HOME_PAGE_URL, response_class=HTMLResponse)
async def home_page(
    code: str | None = None,
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    """Flyer for everyone; the RSVP form only for a known invite code."""
    if not code or code not in settings.get_invite_codes():
        return render_page("You're invited", PageTemplates.FLYER)
    body = PageTemplates.RSVP_FORM.format(
        code=escape(code),
        submit_url=rsvp_urls.SUBMIT_RSVP_URL,
    )
    return render_page("RSVP", body)


@router.get(admin_urls.DASHBOARD_PAGE_URL, response_class=HTMLResponse)
async def dashboard_page(
    attending: str | None = None,
    read_model: RSVPListReadModel = Depends(get_rsvp_list_read_model),
) -> HTMLResponse:
    """Admin table of responses. Protected by the admin access gate."""
    listing = await read_model.list_rsvps(AttendingFilter.parse(attending))
    body = PageTemplates.DASHBOARD.format(
        dashboard_url=admin_urls.DASHBOARD_PAGE_URL,
        count=listing.count,
        headcount=listing.headcount,
        rows="\n".join(_render_row(record) for record in listing.items),
    )
    return render_page("RSVPs", body)


login_page_router = APIRouter(include_in_schema=False)


@login_page_router.get(admin_urls.LOGIN_PAGE_URL, response_class=HTMLResponse)
async def login_page(next: str | None = None) -> HTMLResponse:
    body = PageTemplates.LOGIN.format(
        login_url=admin_urls.LOGIN_URL,
        next_url=safe_next_path(next),
    )
    return render_page("Admin login", body)
