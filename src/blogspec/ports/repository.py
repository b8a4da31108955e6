"""Repository protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ..specifications.base import ISpecification
    from .unit_of_work import UnitOfWork

T = TypeVar("T")
ID = TypeVar("ID", str, int)


@runtime_checkable
class IGenericRepository(Protocol[T]):
    """
    Read side of a repository: materialise whatever a specification selects.

    Implementations apply the specification's includes, filter by its
    criteria and return the matching entities. No match is an empty list.
    Any object with an async ``list(spec)`` satisfies this protocol, so an
    ``AsyncMock`` keyed on specification equality can stand in for it::

        repo = AsyncMock(spec=IGenericRepository)
        repo.list.side_effect = lambda spec: results[spec]
    """

    async def list(self, spec: ISpecification[T]) -> list[T]: ...


@runtime_checkable
class IWriteRepository(Protocol[T, ID]):
    """
    Write side used by command handlers.

    Every method runs inside the given Unit of Work, or the ambient one
    opened by the mediator when ``uow`` is omitted.
    """

    async def add(self, entity: T, uow: UnitOfWork | None = None) -> T: ...

    async def get(self, entity_id: ID, uow: UnitOfWork | None = None) -> T | None: ...

    async def delete(self, entity_id: ID, uow: UnitOfWork | None = None) -> bool: ...
