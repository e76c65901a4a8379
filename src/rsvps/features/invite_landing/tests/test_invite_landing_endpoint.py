import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, location",
    [
        ("/i/VIP1", "/?code=VIP1"),
        ("/i/FAMILY42", "/?code=FAMILY42"),
        ("/i/%20VIP1%20", "/?code=VIP1"),
        ("/i/vip1", "/"),
        ("/i/UNKNOWN", "/"),
    ],
)
async def test_invite_link_redirects_to_home(client_factory, path, location):
    async with client_factory() as client:
        response = await client.get(path)

    assert response.status_code == 307
    assert response.headers["location"] == location
