from .command_handlers import (
    AddPostHandler,
    CreateBlogHandler,
    DeleteBlogHandler,
    UpdateBlogUrlHandler,
)
from .commands import (
    AddPostCommand,
    CreateBlogCommand,
    DeleteBlogCommand,
    UpdateBlogUrlCommand,
)
from .queries import BlogByIdQuery, BlogWithItemsQuery
from .query_handlers import BlogByIdQueryHandler, BlogWithItemsQueryHandler

__all__ = [
    "AddPostCommand",
    "AddPostHandler",
    "BlogByIdQuery",
    "BlogByIdQueryHandler",
    "BlogWithItemsQuery",
    "BlogWithItemsQueryHandler",
    "CreateBlogCommand",
    "CreateBlogHandler",
    "DeleteBlogCommand",
    "DeleteBlogHandler",
    "UpdateBlogUrlCommand",
    "UpdateBlogUrlHandler",
]
