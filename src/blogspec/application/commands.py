"""Write requests for blogs and posts."""

from __future__ import annotations

from ..cqrs.command import Command
from ..domain.entities import Blog, Post


class CreateBlogCommand(Command[Blog]):
    url: str


class UpdateBlogUrlCommand(Command[Blog]):
    blog_id: int
    url: str


class AddPostCommand(Command[Post]):
    blog_id: int
    title: str
    content: str


class DeleteBlogCommand(Command[int]):
    blog_id: int
