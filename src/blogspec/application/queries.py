"""Read requests. Each builds its specification once, at construction."""

from __future__ import annotations

from typing import Any

from pydantic import PrivateAttr

from ..cqrs.query import Query
from ..domain.entities import Blog
from ..domain.specifications import BlogWithItemsSpecification


class BlogWithItemsQuery(Query[list[Blog]]):
    """Blogs whose URL equals ``url``, with their posts.

    ``BlogWithItemsQuery("my.test.blog")`` and
    ``BlogWithItemsQuery(url="my.test.blog")`` are the same request.
    """

    url: str

    _specification: BlogWithItemsSpecification = PrivateAttr()

    def __init__(self, url: str | None = None, /, **data: Any) -> None:
        if url is not None:
            data["url"] = url
        super().__init__(**data)

    def model_post_init(self, __context: Any) -> None:
        self._specification = BlogWithItemsSpecification(url=self.url)

    @property
    def specification(self) -> BlogWithItemsSpecification:
        return self._specification


class BlogByIdQuery(Query[list[Blog]]):
    """The blog with ``blog_id`` (zero or one), with its posts."""

    blog_id: int

    _specification: BlogWithItemsSpecification = PrivateAttr()

    def __init__(self, blog_id: int | None = None, /, **data: Any) -> None:
        if blog_id is not None:
            data["blog_id"] = blog_id
        super().__init__(**data)

    def model_post_init(self, __context: Any) -> None:
        self._specification = BlogWithItemsSpecification(blog_id=self.blog_id)

    @property
    def specification(self) -> BlogWithItemsSpecification:
        return self._specification
