"""Query handlers for blogs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..cqrs.handler import QueryHandler
from ..cqrs.response import QueryResponse
from ..domain.entities import Blog

if TYPE_CHECKING:
    from ..ports.repository import IGenericRepository
    from .queries import BlogByIdQuery, BlogWithItemsQuery

logger = logging.getLogger(__name__)


class BlogWithItemsQueryHandler(QueryHandler[list[Blog]]):
    """Hands the query's specification to the repository, result untouched."""

    def __init__(self, repository: IGenericRepository[Blog]) -> None:
        self._repository = repository

    async def handle(self, query: BlogWithItemsQuery) -> QueryResponse[list[Blog]]:  # type: ignore[override]
        blogs = await self._repository.list(query.specification)
        logger.debug("%d blog(s) match url=%r", len(blogs), query.url)
        return QueryResponse(result=blogs)


class BlogByIdQueryHandler(QueryHandler[list[Blog]]):
    def __init__(self, repository: IGenericRepository[Blog]) -> None:
        self._repository = repository

    async def handle(self, query: BlogByIdQuery) -> QueryResponse[list[Blog]]:  # type: ignore[override]
        return QueryResponse(result=await self._repository.list(query.specification))
