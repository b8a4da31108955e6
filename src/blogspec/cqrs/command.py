"""Command base class: immutable intent to change state."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

from ..correlation import get_correlation_id

TResult = TypeVar("TResult", default=None)


class Command(BaseModel, Generic[TResult]):
    """
    Base for all commands.

    Commands represent write operations. They are named with imperative verbs
    (``CreateBlog``, ``AddPost``) and run inside a Unit of Work opened by the
    Mediator.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)
