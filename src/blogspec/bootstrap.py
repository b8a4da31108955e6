"""Composition root: builds the object graph the API runs on."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass

from .application import (
    AddPostCommand,
    AddPostHandler,
    BlogByIdQuery,
    BlogByIdQueryHandler,
    BlogWithItemsQuery,
    BlogWithItemsQueryHandler,
    CreateBlogCommand,
    CreateBlogHandler,
    DeleteBlogCommand,
    DeleteBlogHandler,
    UpdateBlogUrlCommand,
    UpdateBlogUrlHandler,
)
from .config import AppConfig
from .cqrs import HandlerRegistry, Mediator
from .domain import Blog, Post
from .middleware import LoggingMiddleware
from .persistence import (
    BlogModel,
    Database,
    PostModel,
    SQLAlchemyRepository,
    SQLAlchemyUnitOfWork,
)

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Everything the application needs, wired once at startup."""

    config: AppConfig
    database: Database
    blogs: SQLAlchemyRepository[Blog]
    posts: SQLAlchemyRepository[Post]
    registry: HandlerRegistry
    mediator: Mediator


def build_registry(
    blogs: SQLAlchemyRepository[Blog], posts: SQLAlchemyRepository[Post]
) -> HandlerRegistry:
    registry = HandlerRegistry()
    registry.register(BlogWithItemsQuery, BlogWithItemsQueryHandler(blogs))
    registry.register(BlogByIdQuery, BlogByIdQueryHandler(blogs))
    registry.register(CreateBlogCommand, CreateBlogHandler(blogs))
    registry.register(UpdateBlogUrlCommand, UpdateBlogUrlHandler(blogs))
    registry.register(AddPostCommand, AddPostHandler(blogs, posts))
    registry.register(DeleteBlogCommand, DeleteBlogHandler(blogs))
    return registry


def build_container(config: AppConfig | None = None) -> Container:
    """Wire repositories, handlers and the mediator for *config*.

    Falls back to :meth:`AppConfig.from_env` when no config is given.
    """
    config = config or AppConfig.from_env()
    database = Database(config)
    blogs = SQLAlchemyRepository(Blog, BlogModel, database.session_factory)
    posts = SQLAlchemyRepository(Post, PostModel, database.session_factory)
    registry = build_registry(blogs, posts)
    mediator = Mediator(
        registry,
        uow_factory=functools.partial(
            SQLAlchemyUnitOfWork, session_factory=database.session_factory
        ),
        middlewares=[LoggingMiddleware()],
    )
    logger.debug("Container built: %s", registry.get_registered_handlers())
    return Container(
        config=config,
        database=database,
        blogs=blogs,
        posts=posts,
        registry=registry,
        mediator=mediator,
    )
