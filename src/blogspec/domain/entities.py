"""Blog and Post domain entities."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class Entity(BaseModel):
    """Base for domain entities.

    Python attributes are snake_case; the JSON wire names are PascalCase
    (``BlogId``, ``Url``). Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        from_attributes=True,
    )


class Post(Entity):
    """A post owned by a blog."""

    post_id: int | None = None
    title: str
    content: str
    blog_id: int | None = None


class Blog(Entity):
    """A blog and, when they were loaded, its posts in insertion order."""

    blog_id: int | None = None
    url: str
    posts: list[Post] = Field(default_factory=list)
