"""Query base class: immutable request for data."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

from ..correlation import get_correlation_id

TResult = TypeVar("TResult", default=None)


class Query(BaseModel, Generic[TResult]):
    """Base class for all Queries.

    Queries represent a request for data and **must** be immutable.

    The ``correlation_id`` is inherited from the current context (see
    :func:`~blogspec.correlation.get_correlation_id`). When none is active
    it stays ``None`` and the Mediator generates one at dispatch time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)
