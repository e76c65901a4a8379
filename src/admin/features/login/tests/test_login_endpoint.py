"""Tests for the admin login and logout endpoints."""

import pytest

from src.admin import urls
from src.admin.session_token import verify_session_token


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client_factory, settings):
    credentials = {"username": settings.admin_user, "password": settings.admin_password}

    async with client_factory() as client:
        response = await client.post(urls.LOGIN_URL, json=credentials)

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Logged in"}

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.session_cookie_name}=")
    assert "HttpOnly" in set_cookie
    assert "Secure" in set_cookie
    assert "SameSite=lax" in set_cookie
    assert "Path=/" in set_cookie
    assert "expires=" in set_cookie.lower()

    token = response.cookies[settings.session_cookie_name]
    verification = verify_session_token(token, settings.auth_secret)
    assert verification.allowed is True
    assert verification.username == settings.admin_user


@pytest.mark.asyncio
async def test_login_then_list_rsvps(client_factory, settings):
    credentials = {"username": settings.admin_user, "password": settings.admin_password}

    async with client_factory() as client:
        login_response = await client.post(urls.LOGIN_URL, json=credentials)
        list_response = await client.get(urls.LIST_RSVPS_URL)
        page_response = await client.get(urls.DASHBOARD_PAGE_URL)

    assert login_response.status_code == 200
    assert list_response.status_code == 200
    assert list_response.json() == {"count": 0, "headcount": 0, "items": []}
    assert page_response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "credentials",
    [
        {"username": "admin", "password": "wrong"},
        {"username": "someone", "password": "correct horse battery staple"},
        {"username": "", "password": ""},
        {},
    ],
)
async def test_login_rejects_bad_credentials(client_factory, settings, credentials):
    async with client_factory() as client:
        response = await client.post(urls.LOGIN_URL, json=credentials)

    assert response.status_code == 401
    assert response.json()["ok"] is False
    assert settings.session_cookie_name not in response.cookies


@pytest.mark.asyncio
async def test_login_without_configured_credentials_is_a_server_error(
    client_factory, settings_factory
):
    async with client_factory(app_settings=settings_factory(admin_password="")) as client:
        response = await client.post(urls.LOGIN_URL, json={"username": "admin", "password": ""})

    assert response.status_code == 500
    assert response.json() == {"ok": False, "message": "Server configuration error"}


@pytest.mark.asyncio
async def test_logout_clears_the_cookie(client_factory, settings):
    credentials = {"username": settings.admin_user, "password": settings.admin_password}

    async with client_factory() as client:
        await client.post(urls.LOGIN_URL, json=credentials)
        logout_response = await client.post(urls.LOGOUT_URL)
        list_response = await client.get(urls.LIST_RSVPS_URL)

    assert logout_response.status_code == 200
    assert logout_response.json()["ok"] is True
    set_cookie = logout_response.headers["set-cookie"]
    assert set_cookie.startswith(f'{settings.session_cookie_name}=""') or set_cookie.startswith(
        f"{settings.session_cookie_name}=;"
    )
    assert "Max-Age=0" in set_cookie
    assert list_response.status_code == 401
