"""Shared fixtures: an in-memory store with one known blog, and an HTTP client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from blogspec.api import create_app
from blogspec.bootstrap import build_container
from blogspec.config import AppConfig
from blogspec.persistence import BlogModel, PostModel

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from blogspec.bootstrap import Container

TEST_BLOG_ID = -1
TEST_BLOG_URL = "my.test.blog"


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        database_url="sqlite+aiosqlite:///:memory:",
        create_schema=False,
        seed_demo=False,
    )


@pytest.fixture
async def container(config: AppConfig) -> AsyncIterator[Container]:
    container = build_container(config)
    await container.database.create_schema()
    yield container
    await container.database.drop_schema()
    await container.database.dispose()


@pytest.fixture
async def seeded(container: Container) -> Container:
    """The container with blog -1 (``my.test.blog``, no posts) stored."""
    async with container.database.session_factory() as session, session.begin():
        session.add(BlogModel(blog_id=TEST_BLOG_ID, url=TEST_BLOG_URL))
    return container


@pytest.fixture
async def seeded_with_posts(seeded: Container) -> Container:
    """Adds two posts to blog -1 and an unrelated second blog."""
    async with seeded.database.session_factory() as session, session.begin():
        session.add_all(
            [
                PostModel(title="First", content="one", blog_id=TEST_BLOG_ID),
                PostModel(title="Second", content="two", blog_id=TEST_BLOG_ID),
                BlogModel(
                    url="other.blog",
                    posts=[PostModel(title="Elsewhere", content="three")],
                ),
            ]
        )
    return seeded


@pytest.fixture
async def client(seeded: Container) -> AsyncIterator[AsyncClient]:
    # ASGITransport does not run the lifespan; the fixtures above own the schema.
    app = create_app(seeded)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
