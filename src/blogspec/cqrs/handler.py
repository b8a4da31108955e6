"""Handler base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .command import Command
    from .query import Query
    from .response import CommandResponse, QueryResponse

TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TResult]):
    """Base class for command handlers.

    Handler instances are registered explicitly with a ``HandlerRegistry``
    at startup.

    Usage::

        class CreateBlogHandler(CommandHandler[Blog]):
            async def handle(self, command: CreateBlogCommand) -> CommandResponse[Blog]:
                ...
    """

    @abstractmethod
    async def handle(self, command: Command[TResult]) -> CommandResponse[TResult]:
        """Execute the command and return a CommandResponse."""
        ...


class QueryHandler(ABC, Generic[TResult]):
    """Base class for query handlers.

    Usage::

        class BlogWithItemsQueryHandler(QueryHandler[list[Blog]]):
            async def handle(self, query: BlogWithItemsQuery) -> QueryResponse[list[Blog]]:
                ...
    """

    @abstractmethod
    async def handle(self, query: Query[TResult]) -> QueryResponse[TResult]:
        """Execute the query and return a QueryResponse."""
        ...
