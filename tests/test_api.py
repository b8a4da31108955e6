"""End-to-end tests of the blog endpoints over an in-memory store."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest
from assertions import assert_has_header, assert_ok, assert_reason
from httpx import ASGITransport, AsyncClient

from blogspec.api import CORRELATION_HEADER, create_app
from blogspec.bootstrap import build_container
from blogspec.config import AppConfig
from blogspec.persistence.database import DEMO_BLOG_URL, DEMO_POST_TITLE
from blogspec.primitives.exceptions import HandlerError
from blogspec.specifications import IncludeRequiredError

if TYPE_CHECKING:
    from blogspec.bootstrap import Container

TEST_BLOG = {"BlogId": -1, "Url": "my.test.blog", "Posts": []}


@pytest.mark.asyncio
async def test_post_blog_returns_matching_blog(client: AsyncClient) -> None:
    response = await client.post("/Blog", json={"Url": "my.test.blog"})

    assert_ok(response)
    assert response.json() == [TEST_BLOG]


@pytest.mark.asyncio
async def test_put_blog_returns_matching_blog(client: AsyncClient) -> None:
    response = await client.put("/Blog", json={"Url": "my.test.blog"})

    assert_ok(response)
    assert response.json() == [TEST_BLOG]


@pytest.mark.asyncio
async def test_unknown_url_returns_empty_list(client: AsyncClient) -> None:
    response = await client.post("/Blog", json={"Url": "nobody.blog"})

    assert_ok(response)
    assert response.json() == []


@pytest.mark.asyncio
async def test_snake_case_body_is_accepted(client: AsyncClient) -> None:
    response = await client.post("/Blog", json={"url": "my.test.blog"})

    assert_ok(response)
    assert response.json() == [TEST_BLOG]


@pytest.mark.asyncio
async def test_missing_url_is_rejected(client: AsyncClient) -> None:
    response = await client.post("/Blog", json={})

    assert_reason(response, 422)


@pytest.mark.asyncio
async def test_get_on_collection_is_not_allowed(client: AsyncClient) -> None:
    response = await client.get("/Blog")

    assert_reason(response, 405)


@pytest.mark.asyncio
async def test_unknown_route_is_not_found(client: AsyncClient) -> None:
    response = await client.get("/Blogs")

    assert_reason(response, 404)


@pytest.mark.asyncio
async def test_get_blog_by_id(client: AsyncClient) -> None:
    response = await client.get("/Blog/-1")

    assert_ok(response)
    assert response.json() == [TEST_BLOG]


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient) -> None:
    response = await client.post(
        "/Blog", json={"Url": "my.test.blog"}, headers={CORRELATION_HEADER: "req-1"}
    )

    assert_has_header(response, CORRELATION_HEADER, "req-1")


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client: AsyncClient) -> None:
    response = await client.post("/Blog", json={"Url": "my.test.blog"})

    assert_has_header(response, CORRELATION_HEADER)
    assert response.headers[CORRELATION_HEADER]


@pytest.mark.asyncio
async def test_create_blog_add_posts_and_read_back(client: AsyncClient) -> None:
    created = await client.post("/Blog/new", json={"Url": "new.blog"})
    assert_reason(created, 201)
    blog_id = created.json()["BlogId"]

    for title in ("One", "Two"):
        post = await client.post(
            f"/Blog/{blog_id}/posts", json={"Title": title, "Content": title.lower()}
        )
        assert_reason(post, 201)
        assert post.json()["BlogId"] == blog_id

    response = await client.post("/Blog", json={"Url": "new.blog"})

    assert_ok(response)
    body = response.json()
    assert len(body) == 1
    assert [p["Title"] for p in body[0]["Posts"]] == ["One", "Two"]
    assert set(body[0]["Posts"][0]) == {"PostId", "Title", "Content", "BlogId"}


@pytest.mark.asyncio
async def test_update_blog_url(client: AsyncClient) -> None:
    response = await client.patch("/Blog/-1", json={"Url": "moved.blog"})

    assert_ok(response)
    assert response.json()["Url"] == "moved.blog"
    old = await client.post("/Blog", json={"Url": "my.test.blog"})
    assert old.json() == []


@pytest.mark.asyncio
async def test_delete_blog(client: AsyncClient) -> None:
    response = await client.delete("/Blog/-1")

    assert_reason(response, 204)
    remaining = await client.post("/Blog", json={"Url": "my.test.blog"})
    assert remaining.json() == []


@pytest.mark.asyncio
async def test_missing_blog_writes_are_not_found(client: AsyncClient) -> None:
    patched = await client.patch("/Blog/999", json={"Url": "x"})
    posted = await client.post("/Blog/999/posts", json={"Title": "t", "Content": "c"})
    deleted = await client.delete("/Blog/999")

    assert_reason(patched, 404, "NOT_FOUND")
    assert_reason(posted, 404, "NOT_FOUND")
    assert_reason(deleted, 404, "NOT_FOUND")


@pytest.mark.asyncio
async def test_empty_post_title_is_rejected(client: AsyncClient) -> None:
    response = await client.post("/Blog/-1/posts", json={"Title": "", "Content": "c"})

    assert_reason(response, 422)



@pytest.mark.asyncio
async def test_lifespan_creates_schema_and_seeds_demo_blog() -> None:
    config = AppConfig(
        database_url="sqlite+aiosqlite:///:memory:", create_schema=True, seed_demo=True
    )
    app = create_app(build_container(config))

    async with app.router.lifespan_context(app), AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.post("/Blog", json={"Url": DEMO_BLOG_URL})

    assert_ok(response)
    [blog] = response.json()
    assert [p["Title"] for p in blog["Posts"]] == [DEMO_POST_TITLE]


@pytest.mark.asyncio
async def test_unreachable_store_is_service_unavailable() -> None:
    config = AppConfig(
        database_url="sqlite+aiosqlite:////nonexistent_dir/blogging.db",
        create_schema=False,
    )
    container = build_container(config)
    app = create_app(container)

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.post("/Blog", json={"Url": "my.test.blog"})
    finally:
        await container.database.dispose()

    assert_reason(response, 503, "STORAGE_UNAVAILABLE")


@pytest.mark.asyncio
async def test_specification_errors_are_bad_requests(
    seeded: Container, client: AsyncClient
) -> None:
    error = IncludeRequiredError("posts", "posts.title", [])

    with patch.object(seeded.blogs, "list", AsyncMock(side_effect=error)):
        response = await client.post("/Blog", json={"Url": "my.test.blog"})

    assert_reason(response, 400, "INCLUDE_REQUIRED")
    assert response.json()["relation"] == "posts"


@pytest.mark.asyncio
async def test_other_blogspec_errors_are_internal(
    seeded: Container, client: AsyncClient
) -> None:
    error = HandlerError("handler blew up")

    with patch.object(seeded.blogs, "list", AsyncMock(side_effect=error)):
        response = await client.post("/Blog", json={"Url": "my.test.blog"})

    assert response.status_code == 500
    assert response.json() == {"error": "HandlerError", "message": "handler blew up"}
