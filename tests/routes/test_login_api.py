"""Tests for the /api/login endpoint."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response
from pytest import mark
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
)

from app.managers import TokenManager
from app.managers.rate_limiter import limiter
from app.models import UserDB


class TestLogin:
    """POST /api/login."""

    @mark.asyncio
    async def test_valid_credentials_return_token(
        self,
        client: AsyncClient,
        root_user: UserDB,
        token_manager: TokenManager,
    ) -> None:
        response = await client.post(
            "/api/login",
            json={"username": "root", "password": "sekret"},
        )

        assert response.status_code == HTTP_200_OK
        body = response.json()
        assert body["username"] == "root"
        assert body["name"] == "Superuser"

        token_data = token_manager.verify(body["token"])
        assert token_data.user_id == root_user.uuid
        assert token_data.username == "root"

    @mark.asyncio
    async def test_wrong_password_and_unknown_user_fail_identically(
        self,
        client: AsyncClient,
        root_user: UserDB,
    ) -> None:
        wrong_password = await client.post(
            "/api/login",
            json={"username": "root", "password": "wrong"},
        )
        unknown_user = await client.post(
            "/api/login",
            json={"username": "nobody", "password": "sekret"},
        )

        assert wrong_password.status_code == HTTP_401_UNAUTHORIZED
        assert unknown_user.status_code == HTTP_401_UNAUTHORIZED
        assert wrong_password.json() == unknown_user.json()
        assert wrong_password.json() == {"error": "invalid username or password"}

    @mark.asyncio
    @mark.parametrize("body", [{"username": "root"}, {"password": "sekret"}, {}])
    async def test_missing_fields_fail_as_invalid_credentials(
        self,
        client: AsyncClient,
        root_user: UserDB,
        body: dict[str, str],
    ) -> None:
        response = await client.post("/api/login", json=body)

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "invalid username or password"}

    @mark.asyncio
    async def test_login_token_authorizes_blog_creation(
        self,
        client: AsyncClient,
        root_user: UserDB,
    ) -> None:
        login = await client.post("/api/login", json={"username": "root", "password": "sekret"})
        token = login.json()["token"]

        response = await client.post(
            "/api/blogs",
            json={"title": "Via login", "url": "http://example.org/login"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == HTTP_201_CREATED
        assert response.json()["user"]["username"] == "root"

    @mark.asyncio
    async def test_registered_user_can_log_in(self, client: AsyncClient) -> None:
        await client.post(
            "/api/users",
            json={"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"},
        )

        response = await client.post(
            "/api/login",
            json={"username": "mluukkai", "password": "salainen"},
        )

        assert response.status_code == HTTP_200_OK
        assert response.json()["name"] == "Matti Luukkainen"

    @mark.asyncio
    async def test_password_whitespace_is_kept(self, client: AsyncClient) -> None:
        """Surrounding spaces belong to the password; the username is trimmed."""
        credentials = {"username": " spacey ", "password": " sekret "}
        registered = await client.post("/api/users", json=credentials)
        assert registered.status_code == HTTP_201_CREATED
        assert registered.json()["username"] == "spacey"

        same_body = await client.post("/api/login", json=credentials)
        trimmed_password = await client.post(
            "/api/login",
            json={"username": "spacey", "password": "sekret"},
        )

        assert same_body.status_code == HTTP_200_OK
        assert same_body.json()["username"] == "spacey"
        assert trimmed_password.status_code == HTTP_401_UNAUTHORIZED


async def _failed_logins(
    app: FastAPI,
    client_ip: str,
    attempts: int,
    *,
    rotate_api_key: bool = False,
) -> list[Response]:
    """Send ``attempts`` wrong-password logins from ``client_ip``."""
    limiter.enabled = True
    responses = []
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, client=(client_ip, 123)),
    ) as ac:
        for attempt in range(attempts):
            headers = {"X-API-Key": f"k{attempt}"} if rotate_api_key else {}
            response = await ac.post(
                "/api/login",
                json={"username": "root", "password": "wrong"},
                headers=headers,
            )
            responses.append(response)
    return responses


@mark.asyncio
async def test_login_rate_limit(app: FastAPI, root_user: UserDB) -> None:
    """The sixth login within a minute from one client is refused."""
    responses = await _failed_logins(app, "10.1.0.1", 6)

    assert [r.status_code for r in responses[:5]] == [HTTP_401_UNAUTHORIZED] * 5
    assert responses[5].status_code == HTTP_429_TOO_MANY_REQUESTS
    assert responses[5].json()["error"].startswith("rate limit exceeded")


@mark.asyncio
async def test_login_rate_limit_ignores_api_key_header(app: FastAPI, root_user: UserDB) -> None:
    """A fresh ``X-API-Key`` per request does not open a fresh bucket."""
    responses = await _failed_logins(app, "10.1.0.2", 8, rotate_api_key=True)

    assert [r.status_code for r in responses[:5]] == [HTTP_401_UNAUTHORIZED] * 5
    assert {r.status_code for r in responses[5:]} == {HTTP_429_TOO_MANY_REQUESTS}
