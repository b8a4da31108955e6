"""
Command handlers for blogs and posts.

Each runs inside the Unit of Work the mediator opened for the command, so
repositories are called without an explicit ``uow``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..cqrs.handler import CommandHandler
from ..cqrs.response import CommandResponse
from ..domain.entities import Blog, Post
from ..primitives.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from ..ports.repository import IWriteRepository
    from .commands import (
        AddPostCommand,
        CreateBlogCommand,
        DeleteBlogCommand,
        UpdateBlogUrlCommand,
    )

logger = logging.getLogger(__name__)


class CreateBlogHandler(CommandHandler[Blog]):
    def __init__(self, blogs: IWriteRepository[Blog, int]) -> None:
        self._blogs = blogs

    async def handle(self, command: CreateBlogCommand) -> CommandResponse[Blog]:  # type: ignore[override]
        blog = await self._blogs.add(Blog(url=command.url))
        logger.info("Created blog %s (%s)", blog.blog_id, blog.url)
        return CommandResponse(result=blog)


class UpdateBlogUrlHandler(CommandHandler[Blog]):
    def __init__(self, blogs: IWriteRepository[Blog, int]) -> None:
        self._blogs = blogs

    async def handle(self, command: UpdateBlogUrlCommand) -> CommandResponse[Blog]:  # type: ignore[override]
        blog = await self._blogs.get(command.blog_id)
        if blog is None:
            raise EntityNotFoundError("Blog", command.blog_id)
        updated = await self._blogs.add(blog.model_copy(update={"url": command.url}))
        logger.info("Blog %s url changed to %s", updated.blog_id, updated.url)
        return CommandResponse(result=updated)


class AddPostHandler(CommandHandler[Post]):
    def __init__(
        self,
        blogs: IWriteRepository[Blog, int],
        posts: IWriteRepository[Post, int],
    ) -> None:
        self._blogs = blogs
        self._posts = posts

    async def handle(self, command: AddPostCommand) -> CommandResponse[Post]:  # type: ignore[override]
        if await self._blogs.get(command.blog_id) is None:
            raise EntityNotFoundError("Blog", command.blog_id)
        post = await self._posts.add(
            Post(title=command.title, content=command.content, blog_id=command.blog_id)
        )
        logger.info("Added post %s to blog %s", post.post_id, command.blog_id)
        return CommandResponse(result=post)


class DeleteBlogHandler(CommandHandler[int]):
    def __init__(self, blogs: IWriteRepository[Blog, int]) -> None:
        self._blogs = blogs

    async def handle(self, command: DeleteBlogCommand) -> CommandResponse[int]:  # type: ignore[override]
        if not await self._blogs.delete(command.blog_id):
            raise EntityNotFoundError("Blog", command.blog_id)
        logger.info("Deleted blog %s", command.blog_id)
        return CommandResponse(result=command.blog_id)
