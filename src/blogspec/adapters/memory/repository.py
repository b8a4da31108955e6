"""InMemoryRepository: dict-backed fake for unit tests."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from ...specifications.exceptions import FieldNotFoundError
from ...specifications.guards import ensure_includes_cover_criteria, is_covered

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

    from ...ports.unit_of_work import UnitOfWork
    from ...specifications.base import BaseSpecification

T = TypeVar("T", bound=BaseModel)


class InMemoryRepository(Generic[T]):
    """In-memory implementation of the generic and write repository protocols.

    Stores entities in a dict keyed by ``id_field`` and evaluates criteria
    in-process. Includes behave as they do against the store: paths must
    name one of ``relationships``, criteria may only cross included
    relations, and relations that were not included come back empty.

    Usage::

        blogs = InMemoryRepository(Blog, id_field="blog_id", relationships=["posts"])
        await blogs.add(Blog(url="my.test.blog", posts=[...]))
        await blogs.list(BlogWithItemsSpecification(url="my.test.blog"))
    """

    def __init__(
        self,
        entity_cls: type[T],
        *,
        id_field: str,
        relationships: Iterable[str] = (),
    ) -> None:
        self.entity_cls = entity_cls
        self._id_field = id_field
        self._relationships = frozenset(relationships)
        self._store: dict[Any, T] = {}
        self._ids = itertools.count(1)

    # -- read ---------------------------------------------------------------

    async def list(
        self,
        spec: BaseSpecification[T],
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> builtins.list[T]:
        includes = spec.includes
        for path in includes:
            self._check_include(path)
        ensure_includes_cover_criteria(spec, self._relationships.__contains__)

        matches = [
            entity
            for _, entity in sorted(self._store.items())
            if spec.is_satisfied_by(entity)
        ]
        blanked = {
            rel: []
            for rel in self._relationships
            if "." not in rel and not is_covered(rel, includes)
        }
        if not blanked:
            return matches
        return [entity.model_copy(update=blanked) for entity in matches]

    def _check_include(self, path: str) -> None:
        parts = path.split(".")
        for depth in range(1, len(parts) + 1):
            prefix = ".".join(parts[:depth])
            if prefix not in self._relationships:
                available = sorted(
                    {*self.entity_cls.model_fields, *self._relationships}
                )
                raise FieldNotFoundError(
                    parts[depth - 1], self.entity_cls.__name__, available, path
                )

    # -- write --------------------------------------------------------------

    async def add(
        self,
        entity: T,
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> T:
        if getattr(entity, self._id_field) is None:
            entity = entity.model_copy(update={self._id_field: next(self._ids)})
        self._store[getattr(entity, self._id_field)] = entity
        return entity

    async def get(
        self,
        entity_id: Any,
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> T | None:
        return self._store.get(entity_id)

    async def delete(
        self,
        entity_id: Any,
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> bool:
        return self._store.pop(entity_id, None) is not None

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
