"""Async engine, session factory and schema management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..primitives.exceptions import StorageUnavailableError
from .models import Base, BlogModel, PostModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

    from ..config import AppConfig

logger = logging.getLogger(__name__)

DEMO_BLOG_URL = "https://devblogs.microsoft.com/dotnet"
DEMO_POST_TITLE = "Hello World"
DEMO_POST_CONTENT = "I wrote an app using EF Core!"


def is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return False
    return parsed.database in (None, "", ":memory:") or parsed.query.get("mode") == "memory"


class Database:
    """
    Owns the async engine and the session factory built on it.

    An in-memory SQLite URL gets a ``StaticPool`` so every session sees the
    same database.
    """

    def __init__(self, config: AppConfig) -> None:
        self.url = config.database_url
        kwargs: dict[str, object] = {}
        if is_memory_sqlite(self.url):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        self.engine: AsyncEngine = create_async_engine(self.url, **kwargs)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    async def create_schema(self) -> None:
        """Create any missing tables."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError(
                f"Cannot create schema on {self.engine.url!r}: {exc}"
            ) from exc
        logger.info(
            "Schema ready on %s", self.engine.url.render_as_string(hide_password=True)
        )

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.debug("Engine disposed")


async def seed_demo_data(database: Database) -> bool:
    """
    Insert the demo blog and its first post unless a blog with the demo URL
    already exists. Returns whether anything was inserted.
    """
    async with database.session_factory() as session, session.begin():
        count = await session.scalar(
            select(func.count())
            .select_from(BlogModel)
            .where(BlogModel.url == DEMO_BLOG_URL)
        )
        if count:
            return False
        session.add(
            BlogModel(
                url=DEMO_BLOG_URL,
                posts=[PostModel(title=DEMO_POST_TITLE, content=DEMO_POST_CONTENT)],
            )
        )
    logger.info("Seeded demo blog %s", DEMO_BLOG_URL)
    return True
