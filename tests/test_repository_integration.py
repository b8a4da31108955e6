"""
Integration tests for the SQLAlchemy repository against in-memory SQLite.

Covers:
- Specification criteria and includes (posts loaded in insertion order)
- Include validation before any SQL runs
- Writes inside a Unit of Work (add / get / delete, cascade)
- Store failures surfacing as StorageUnavailableError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import inspect as sa_inspect

from blogspec.config import AppConfig
from blogspec.domain import Blog, BlogWithItemsSpecification, Post
from blogspec.persistence import (
    Database,
    SQLAlchemyRepository,
    SQLAlchemyUnitOfWork,
    seed_demo_data,
)
from blogspec.persistence.database import (
    DEMO_BLOG_URL,
    DEMO_POST_CONTENT,
    DEMO_POST_TITLE,
)
from blogspec.persistence.models import BlogModel
from blogspec.primitives.exceptions import (
    SessionManagementError,
    StorageUnavailableError,
    UnitOfWorkError,
)
from blogspec.specifications import (
    AttributeCondition,
    BaseSpecification,
    FieldNotFoundError,
    IncludeRequiredError,
    OrCondition,
)

if TYPE_CHECKING:
    from blogspec.bootstrap import Container


@pytest.mark.asyncio
async def test_list_by_url_returns_blog_without_posts(seeded: Container) -> None:
    result = await seeded.blogs.list(BlogWithItemsSpecification(url="my.test.blog"))

    assert result == [Blog(blog_id=-1, url="my.test.blog", posts=[])]


@pytest.mark.asyncio
async def test_list_misses_on_url_prefix_and_unknown_id(seeded: Container) -> None:
    assert await seeded.blogs.list(BlogWithItemsSpecification(url="my.test")) == []
    assert await seeded.blogs.list(BlogWithItemsSpecification(blog_id=999)) == []


@pytest.mark.asyncio
async def test_list_loads_posts_in_insertion_order(seeded_with_posts: Container) -> None:
    result = await seeded_with_posts.blogs.list(
        BlogWithItemsSpecification(url="my.test.blog")
    )

    assert len(result) == 1
    assert [p.title for p in result[0].posts] == ["First", "Second"]
    assert all(p.blog_id == -1 for p in result[0].posts)


@pytest.mark.asyncio
async def test_relations_not_included_are_empty(seeded_with_posts: Container) -> None:
    spec = BaseSpecification[Blog](AttributeCondition("url", "=", "my.test.blog"))

    result = await seeded_with_posts.blogs.list(spec)

    assert len(result) == 1
    assert result[0].posts == []


@pytest.mark.asyncio
async def test_criteria_through_included_posts_use_exists(
    seeded_with_posts: Container,
) -> None:
    spec = BaseSpecification[Blog](
        AttributeCondition("posts.title", "=", "Elsewhere"), includes=["posts"]
    )

    result = await seeded_with_posts.blogs.list(spec)

    assert [b.url for b in result] == ["other.blog"]
    assert [p.title for p in result[0].posts] == ["Elsewhere"]


@pytest.mark.asyncio
async def test_criteria_through_unincluded_posts_raise(seeded: Container) -> None:
    spec = BaseSpecification[Blog](AttributeCondition("posts.title", "=", "First"))

    with pytest.raises(IncludeRequiredError):
        await seeded.blogs.list(spec)


@pytest.mark.asyncio
async def test_unknown_include_raises_before_querying(seeded: Container) -> None:
    spec = BaseSpecification[Blog](AttributeCondition("url", "=", "x"), includes=["post"])

    with pytest.raises(FieldNotFoundError):
        await seeded.blogs.list(spec)


@pytest.mark.asyncio
async def test_empty_or_selects_nothing(seeded: Container) -> None:
    assert await seeded.blogs.list(BaseSpecification[Blog](OrCondition())) == []


@pytest.mark.asyncio
async def test_add_get_and_delete_inside_unit_of_work(seeded: Container) -> None:
    factory = seeded.database.session_factory

    async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
        blog = await seeded.blogs.add(Blog(url="new.blog"), uow)
        post = await seeded.posts.add(
            Post(title="Hi", content="there", blog_id=blog.blog_id), uow
        )

    assert blog.blog_id is not None
    assert post.post_id is not None

    async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
        loaded = await seeded.blogs.get(blog.blog_id, uow)
        assert loaded is not None
        assert [p.title for p in loaded.posts] == ["Hi"]
        assert await seeded.blogs.delete(blog.blog_id, uow) is True
        assert await seeded.blogs.delete(12345, uow) is False

    assert await seeded.blogs.list(BlogWithItemsSpecification(url="new.blog")) == []
    async with factory() as session:
        assert await session.get(BlogModel, -1) is not None


@pytest.mark.asyncio
async def test_update_keeps_posts(seeded_with_posts: Container) -> None:
    factory = seeded_with_posts.database.session_factory

    async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
        blog = await seeded_with_posts.blogs.get(-1, uow)
        assert blog is not None
        updated = await seeded_with_posts.blogs.add(
            blog.model_copy(update={"url": "renamed.blog"}), uow
        )

    assert updated.url == "renamed.blog"
    result = await seeded_with_posts.blogs.list(
        BlogWithItemsSpecification(url="renamed.blog")
    )
    assert [p.title for p in result[0].posts] == ["First", "Second"]


@pytest.mark.asyncio
async def test_rollback_discards_writes(seeded: Container) -> None:
    factory = seeded.database.session_factory

    with pytest.raises(RuntimeError):
        async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
            await seeded.blogs.add(Blog(url="doomed.blog"), uow)
            raise RuntimeError("abort")

    assert await seeded.blogs.list(BlogWithItemsSpecification(url="doomed.blog")) == []


@pytest.mark.asyncio
async def test_writes_outside_unit_of_work_raise(seeded: Container) -> None:
    with pytest.raises(UnitOfWorkError):
        await seeded.blogs.add(Blog(url="x"))


def test_unit_of_work_needs_exactly_one_session_source() -> None:
    with pytest.raises(SessionManagementError):
        SQLAlchemyUnitOfWork()


@pytest.mark.asyncio
async def test_unreachable_store_raises_storage_unavailable() -> None:
    database = Database(
        AppConfig(database_url="sqlite+aiosqlite:////nonexistent_dir/blogging.db")
    )
    blogs = SQLAlchemyRepository(Blog, BlogModel, database.session_factory)

    try:
        with pytest.raises(StorageUnavailableError):
            await blogs.list(BlogWithItemsSpecification(url="my.test.blog"))
    finally:
        await database.dispose()


@pytest.mark.asyncio
async def test_seed_demo_data_is_idempotent(container: Container) -> None:
    assert await seed_demo_data(container.database) is True
    assert await seed_demo_data(container.database) is False

    result = await container.blogs.list(BlogWithItemsSpecification(url=DEMO_BLOG_URL))

    assert len(result) == 1
    assert [(p.title, p.content) for p in result[0].posts] == [
        (DEMO_POST_TITLE, DEMO_POST_CONTENT)
    ]


@pytest.mark.asyncio
async def test_include_order_and_repeats_do_not_change_rows(
    seeded_with_posts: Container,
) -> None:
    criteria = AttributeCondition("url", "in", ["my.test.blog", "other.blog"])
    once = BaseSpecification[Blog](criteria, includes=["posts"])
    twice = BaseSpecification[Blog](criteria, includes=["posts", "posts"])

    first = await seeded_with_posts.blogs.list(once)
    second = await seeded_with_posts.blogs.list(twice)

    assert first == second
    assert [b.url for b in first] == ["my.test.blog", "other.blog"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("op", "val"),
    [
        ("contains", "BLOG"),
        ("contains", "blog"),
        ("contains", ""),
        ("like", "my.%"),
        ("like", "MY.%"),
        ("like", "%_est.%"),
        ("like", "a*%"),
        ("startswith", "My."),
        ("startswith", "my."),
        ("endswith", ".blog"),
        ("endswith", ".BLOG"),
        ("endswith", "a-much-longer-suffix.blog"),
        ("ilike", "MY.%"),
        ("icontains", "TEST"),
    ],
)
async def test_string_operators_return_exactly_the_satisfying_rows(
    seeded_with_posts: Container, op: str, val: str
) -> None:
    factory = seeded_with_posts.database.session_factory
    async with factory() as session, session.begin():
        session.add_all([BlogModel(url="My.Test.Blog"), BlogModel(url="a*b.blog")])
    everything = await seeded_with_posts.blogs.list(
        BaseSpecification[Blog](AttributeCondition("url", "is_not_null"))
    )
    spec = BaseSpecification[Blog](AttributeCondition("url", op, val))

    result = await seeded_with_posts.blogs.list(spec)

    assert all(spec.is_satisfied_by(blog) for blog in result)
    assert result == [blog for blog in everything if spec.is_satisfied_by(blog)]


@pytest.mark.asyncio
async def test_url_lookup_is_case_sensitive(seeded: Container) -> None:
    assert await seeded.blogs.list(BlogWithItemsSpecification(url="MY.TEST.BLOG")) == []
    assert await seeded.blogs.list(
        BaseSpecification[Blog](AttributeCondition("url", "contains", "BLOG"))
    ) == []


@pytest.mark.asyncio
async def test_drop_schema_removes_tables(container: Container) -> None:
    def table_names(connection: Any) -> list[str]:
        return sa_inspect(connection).get_table_names()

    await container.database.drop_schema()
    async with container.database.engine.connect() as conn:
        assert await conn.run_sync(table_names) == []

    await container.database.create_schema()
    async with container.database.engine.connect() as conn:
        assert sorted(await conn.run_sync(table_names)) == ["blogs", "posts"]
