from __future__ import annotations

import pytest

from blogspec.adapters.memory import InMemoryRepository
from blogspec.application import (
    AddPostCommand,
    AddPostHandler,
    CreateBlogCommand,
    CreateBlogHandler,
    DeleteBlogCommand,
    DeleteBlogHandler,
    UpdateBlogUrlCommand,
    UpdateBlogUrlHandler,
)
from blogspec.domain import Blog, Post
from blogspec.primitives.exceptions import EntityNotFoundError


@pytest.fixture
def blogs() -> InMemoryRepository[Blog]:
    return InMemoryRepository(Blog, id_field="blog_id", relationships=["posts"])


@pytest.fixture
def posts() -> InMemoryRepository[Post]:
    return InMemoryRepository(Post, id_field="post_id")


@pytest.mark.asyncio
async def test_create_blog(blogs: InMemoryRepository[Blog]) -> None:
    response = await CreateBlogHandler(blogs).handle(CreateBlogCommand(url="new.blog"))

    assert response.result == Blog(blog_id=1, url="new.blog")
    assert len(blogs) == 1


@pytest.mark.asyncio
async def test_update_blog_url(blogs: InMemoryRepository[Blog]) -> None:
    blog = await blogs.add(Blog(url="old.blog"))

    response = await UpdateBlogUrlHandler(blogs).handle(
        UpdateBlogUrlCommand(blog_id=blog.blog_id, url="new.blog")
    )

    assert response.result.url == "new.blog"
    assert (await blogs.get(blog.blog_id)) == response.result


@pytest.mark.asyncio
async def test_update_missing_blog_raises(blogs: InMemoryRepository[Blog]) -> None:
    with pytest.raises(EntityNotFoundError, match="Blog with id=9 not found"):
        await UpdateBlogUrlHandler(blogs).handle(UpdateBlogUrlCommand(blog_id=9, url="x"))


@pytest.mark.asyncio
async def test_add_post(
    blogs: InMemoryRepository[Blog], posts: InMemoryRepository[Post]
) -> None:
    blog = await blogs.add(Blog(url="my.test.blog"))

    response = await AddPostHandler(blogs, posts).handle(
        AddPostCommand(blog_id=blog.blog_id, title="Hello World", content="c")
    )

    assert response.result == Post(
        post_id=1, title="Hello World", content="c", blog_id=blog.blog_id
    )


@pytest.mark.asyncio
async def test_add_post_to_missing_blog_raises(
    blogs: InMemoryRepository[Blog], posts: InMemoryRepository[Post]
) -> None:
    with pytest.raises(EntityNotFoundError):
        await AddPostHandler(blogs, posts).handle(
            AddPostCommand(blog_id=1, title="t", content="c")
        )
    assert len(posts) == 0


@pytest.mark.asyncio
async def test_delete_blog(blogs: InMemoryRepository[Blog]) -> None:
    blog = await blogs.add(Blog(url="my.test.blog"))
    handler = DeleteBlogHandler(blogs)

    response = await handler.handle(DeleteBlogCommand(blog_id=blog.blog_id))

    assert response.result == blog.blog_id
    with pytest.raises(EntityNotFoundError):
        await handler.handle(DeleteBlogCommand(blog_id=blog.blog_id))
