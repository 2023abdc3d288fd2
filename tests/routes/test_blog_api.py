"""Tests for the /api/blogs endpoints."""

from collections.abc import Awaitable, Callable
from datetime import timedelta

from httpx import AsyncClient
from pytest import mark
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
)

from app.managers import TokenManager
from app.models import BlogDB, UserDB

NEW_BLOG = {
    "title": "Test Blog 3",
    "author": "Test Author 3",
    "url": "http://www.testblog3.com",
    "likes": 3,
}

BlogsReader = Callable[[], Awaitable[list[BlogDB]]]
UsersReader = Callable[[], Awaitable[list[UserDB]]]


def _user_named(users: list[UserDB], username: str) -> UserDB:
    return next(user for user in users if user.username == username)


class TestListBlogs:
    """GET /api/blogs."""

    @mark.asyncio
    async def test_blogs_are_returned_as_json(self, client: AsyncClient, root_user: UserDB) -> None:
        response = await client.get("/api/blogs")

        assert response.status_code == HTTP_200_OK
        assert response.headers["content-type"].startswith("application/json")

    @mark.asyncio
    async def test_all_blogs_are_returned(self, client: AsyncClient, root_user: UserDB) -> None:
        response = await client.get("/api/blogs")

        titles = {blog["title"] for blog in response.json()}
        assert titles == {"Test Blog 1", "Test Blog 2"}

    @mark.asyncio
    async def test_blogs_expose_id_and_owner(self, client: AsyncClient, root_user: UserDB) -> None:
        """Each blog has a string ``id`` and its creator without credentials."""
        response = await client.get("/api/blogs")

        for blog in response.json():
            assert isinstance(blog["id"], str)
            assert "_id" not in blog
            assert blog["user"] == {
                "id": str(root_user.uuid),
                "username": "root",
                "name": "Superuser",
            }
            assert "password_hash" not in blog["user"]

    @mark.asyncio
    async def test_blogs_are_listed_in_creation_order(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        titles = [f"Ordered {n}" for n in range(4)]
        for title in titles:
            await client.post(
                "/api/blogs",
                json={"title": title, "url": "http://example.org/ordered"},
                headers=auth_headers,
            )

        response = await client.get("/api/blogs")

        listed = [blog["title"] for blog in response.json() if blog["title"] in titles]
        assert listed == titles

    @mark.asyncio
    async def test_empty_store_returns_empty_list(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs")

        assert response.status_code == HTTP_200_OK
        assert response.json() == []


class TestCreateBlog:
    """POST /api/blogs."""

    @mark.asyncio
    async def test_valid_blog_can_be_added(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        response = await client.post("/api/blogs", json=NEW_BLOG, headers=auth_headers)

        assert response.status_code == HTTP_201_CREATED
        assert response.json()["title"] == "Test Blog 3"

        blogs = await blogs_in_db()
        assert len(blogs) == 3
        assert "Test Blog 3" in {blog.title for blog in blogs}

        listed = await client.get("/api/blogs")
        assert len(listed.json()) == 3

    @mark.asyncio
    async def test_missing_likes_defaults_to_zero(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        blog = {key: value for key, value in NEW_BLOG.items() if key != "likes"}

        response = await client.post("/api/blogs", json=blog, headers=auth_headers)

        assert response.status_code == HTTP_201_CREATED
        assert response.json()["likes"] == 0

    @mark.asyncio
    @mark.parametrize("likes", [-1, 3_000_000_000, 2**70])
    async def test_out_of_range_likes_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
        likes: int,
    ) -> None:
        blogs_at_start = await blogs_in_db()

        response = await client.post(
            "/api/blogs",
            json={**NEW_BLOG, "likes": likes},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert "likes" in response.json()["error"]
        assert len(await blogs_in_db()) == len(blogs_at_start)

    @mark.asyncio
    async def test_created_blog_is_linked_to_creator(
        self,
        client: AsyncClient,
        root_user: UserDB,
        auth_headers: dict[str, str],
        users_in_db: UsersReader,
    ) -> None:
        response = await client.post("/api/blogs", json=NEW_BLOG, headers=auth_headers)
        body = response.json()

        assert body["user"]["id"] == str(root_user.uuid)

        owner = _user_named(await users_in_db(), "root")
        assert len(owner.blogs) == 3
        assert owner.blogs[-1] == body["id"]

    @mark.asyncio
    @mark.parametrize("missing", ["title", "url"])
    async def test_blog_without_required_field_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
        missing: str,
    ) -> None:
        blog = {key: value for key, value in NEW_BLOG.items() if key != missing}

        response = await client.post("/api/blogs", json=blog, headers=auth_headers)

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert f"`{missing}` is required" in response.json()["error"]
        assert len(await blogs_in_db()) == 2

    @mark.asyncio
    async def test_blank_title_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        response = await client.post(
            "/api/blogs",
            json={**NEW_BLOG, "title": "   "},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert len(await blogs_in_db()) == 2

    @mark.asyncio
    async def test_missing_token_is_rejected(
        self,
        client: AsyncClient,
        root_user: UserDB,
        blogs_in_db: BlogsReader,
    ) -> None:
        response = await client.post("/api/blogs", json=NEW_BLOG)

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "token missing"}
        assert len(await blogs_in_db()) == 2

    @mark.asyncio
    async def test_tampered_token_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        headers = {"Authorization": auth_headers["Authorization"] + "x"}

        response = await client.post("/api/blogs", json=NEW_BLOG, headers=headers)

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "token invalid"}
        assert len(await blogs_in_db()) == 2

    @mark.asyncio
    async def test_expired_token_is_rejected(
        self,
        client: AsyncClient,
        root_user: UserDB,
        token_manager: TokenManager,
    ) -> None:
        token = token_manager.issue(
            user_id=root_user.uuid,
            username=root_user.username,
            expires_delta=timedelta(seconds=-10),
        )

        response = await client.post(
            "/api/blogs",
            json=NEW_BLOG,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "token expired"}

    @mark.asyncio
    async def test_token_signed_with_other_secret_is_rejected(
        self,
        client: AsyncClient,
        root_user: UserDB,
        token_manager: TokenManager,
    ) -> None:
        forger = TokenManager(
            secret_key="not-the-server-secret",  # noqa: S106
            issuer=token_manager.issuer,
            audience=token_manager.audience,
        )
        token = forger.issue(user_id=root_user.uuid, username=root_user.username)

        response = await client.post(
            "/api/blogs",
            json=NEW_BLOG,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == HTTP_401_UNAUTHORIZED


class TestDeleteBlog:
    """DELETE /api/blogs/{id}."""

    @mark.asyncio
    async def test_owner_can_delete(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
        users_in_db: UsersReader,
    ) -> None:
        blogs_at_start = await blogs_in_db()
        blog_to_delete = blogs_at_start[0]

        response = await client.delete(f"/api/blogs/{blog_to_delete.id}", headers=auth_headers)

        assert response.status_code == HTTP_204_NO_CONTENT

        blogs_at_end = await blogs_in_db()
        assert len(blogs_at_end) == len(blogs_at_start) - 1
        assert blog_to_delete.title not in {blog.title for blog in blogs_at_end}

        owner = _user_named(await users_in_db(), "root")
        assert len(owner.blogs) == 1
        assert str(blog_to_delete.id) not in owner.blogs

    @mark.asyncio
    async def test_non_owner_cannot_delete(
        self,
        client: AsyncClient,
        root_user: UserDB,
        other_auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
        users_in_db: UsersReader,
    ) -> None:
        blog_to_delete = (await blogs_in_db())[0]

        response = await client.delete(
            f"/api/blogs/{blog_to_delete.id}",
            headers=other_auth_headers,
        )

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert "only the creator" in response.json()["error"]
        assert len(await blogs_in_db()) == 2

        users = await users_in_db()
        assert len(_user_named(users, "root").blogs) == 2
        assert _user_named(users, "hellas").blogs == []

    @mark.asyncio
    async def test_malformed_id_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.delete("/api/blogs/123456789", headers=auth_headers)

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "malformatted id"}

    @mark.asyncio
    async def test_unknown_id_is_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        non_existing_id: str,
    ) -> None:
        response = await client.delete(f"/api/blogs/{non_existing_id}", headers=auth_headers)

        assert response.status_code == HTTP_404_NOT_FOUND

    @mark.asyncio
    async def test_missing_token_is_rejected(
        self,
        client: AsyncClient,
        blogs_in_db: BlogsReader,
        root_user: UserDB,
    ) -> None:
        blog = (await blogs_in_db())[0]

        response = await client.delete(f"/api/blogs/{blog.id}")

        assert response.status_code == HTTP_401_UNAUTHORIZED
        assert len(await blogs_in_db()) == 2


class TestUpdateBlog:
    """PUT /api/blogs/{id}."""

    @mark.asyncio
    async def test_owner_can_update_likes(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        blog = next(b for b in await blogs_in_db() if b.title == "Test Blog 1")

        response = await client.put(
            f"/api/blogs/{blog.id}",
            json={"likes": 50},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_200_OK
        body = response.json()
        assert body["likes"] == 50
        assert body["title"] == "Test Blog 1"
        assert body["url"] == "http://www.testblog1.com"

    @mark.asyncio
    async def test_all_mutable_fields_are_replaced(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        blog = (await blogs_in_db())[0]

        response = await client.put(f"/api/blogs/{blog.id}", json=NEW_BLOG, headers=auth_headers)

        assert response.status_code == HTTP_200_OK
        stored = next(b for b in await blogs_in_db() if b.id == blog.id)
        assert stored.title == NEW_BLOG["title"]
        assert stored.author == NEW_BLOG["author"]
        assert stored.url == NEW_BLOG["url"]
        assert stored.likes == NEW_BLOG["likes"]

    @mark.asyncio
    async def test_non_integer_likes_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        blog = (await blogs_in_db())[0]

        response = await client.put(
            f"/api/blogs/{blog.id}",
            json={"likes": ["50"]},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_400_BAD_REQUEST

    @mark.asyncio
    @mark.parametrize("likes", [-5, 2**31, 2**70])
    async def test_out_of_range_likes_update_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
        likes: int,
    ) -> None:
        blog = next(b for b in await blogs_in_db() if b.title == "Test Blog 1")

        response = await client.put(
            f"/api/blogs/{blog.id}",
            json={"likes": likes},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
        stored = next(b for b in await blogs_in_db() if b.id == blog.id)
        assert stored.likes == 1

    @mark.asyncio
    async def test_non_owner_cannot_update(
        self,
        client: AsyncClient,
        root_user: UserDB,
        other_auth_headers: dict[str, str],
        blogs_in_db: BlogsReader,
    ) -> None:
        blog = next(b for b in await blogs_in_db() if b.title == "Test Blog 1")

        response = await client.put(
            f"/api/blogs/{blog.id}",
            json={"likes": 999},
            headers=other_auth_headers,
        )

        assert response.status_code == HTTP_401_UNAUTHORIZED
        stored = next(b for b in await blogs_in_db() if b.id == blog.id)
        assert stored.likes == 1

    @mark.asyncio
    async def test_update_requires_token(
        self,
        client: AsyncClient,
        blogs_in_db: BlogsReader,
        root_user: UserDB,
    ) -> None:
        blog = (await blogs_in_db())[0]

        response = await client.put(f"/api/blogs/{blog.id}", json={"likes": 10})

        assert response.status_code == HTTP_401_UNAUTHORIZED

    @mark.asyncio
    async def test_malformed_id_is_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.put(
            "/api/blogs/123456789",
            json={"likes": 10},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "malformatted id"}

    @mark.asyncio
    async def test_unknown_id_is_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        non_existing_id: str,
    ) -> None:
        response = await client.put(
            f"/api/blogs/{non_existing_id}",
            json={"likes": 10},
            headers=auth_headers,
        )

        assert response.status_code == HTTP_404_NOT_FOUND
