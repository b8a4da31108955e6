"""Domain specifications for blogs."""

from __future__ import annotations

from ..specifications import AttributeCondition, BaseSpecification, ConditionOperator
from .entities import Blog


class BlogWithItemsSpecification(BaseSpecification[Blog]):
    """
    Blogs matched by exact URL or by id, with their posts loaded.

    Exactly one of ``url`` or ``blog_id`` must be given::

        BlogWithItemsSpecification(url="my.test.blog")
        BlogWithItemsSpecification(blog_id=1)
    """

    def __init__(self, *, url: str | None = None, blog_id: int | None = None) -> None:
        if (url is None) == (blog_id is None):
            raise TypeError(
                "BlogWithItemsSpecification takes exactly one of 'url' or 'blog_id'"
            )
        if url is not None:
            criteria = AttributeCondition("url", ConditionOperator.EQ, url)
        else:
            criteria = AttributeCondition("blog_id", ConditionOperator.EQ, blog_id)
        super().__init__(criteria)
        self._add_include("posts")
