"""blogspec: a blog API built on specifications, a generic repository and a mediator."""

from .config import AppConfig
from .domain import Blog, BlogWithItemsSpecification, Post
from .primitives import BlogSpecError

__all__ = [
    "AppConfig",
    "Blog",
    "BlogSpecError",
    "BlogWithItemsSpecification",
    "Post",
]

__version__ = "0.1.0"
