"""Request bodies accepted by the blog API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class RequestBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class UrlRequest(RequestBody):
    """``{"Url": "..."}``"""

    url: str


class PostRequest(RequestBody):
    """``{"Title": "...", "Content": "..."}``"""

    title: str = Field(min_length=1)
    content: str
