"""SQLAlchemy generic repository driven by specifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

from ..cqrs.mediator import get_current_uow
from ..primitives.exceptions import (
    RepositoryError,
    StorageUnavailableError,
    UnitOfWorkError,
)
from ..specifications.guards import ensure_includes_cover_criteria
from .compiler import (
    build_load_options,
    build_sqla_filter,
    is_relationship_path,
    primary_key_columns,
    relationship_keys,
)
from .mapper import ModelMapper

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from ..ports.unit_of_work import UnitOfWork
    from ..specifications.base import BaseSpecification
    from .strategy import SQLAlchemyOperatorRegistry
    from .uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SQLAlchemyRepository(Generic[T]):
    """
    Generic repository over a SQLAlchemy model.

    Separates the domain entity type (``entity_cls``, a pydantic model) from
    the persistence model (``db_model_cls``). Mapping between the two is
    handled by a :class:`ModelMapper`.

    Reads (``list``) run on the given or ambient Unit of Work's session when
    there is one, otherwise on a short-lived session from
    ``session_factory``. Writes always need a Unit of Work::

        async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
            blog = await blogs.add(Blog(url="my.test.blog"), uow)

        found = await blogs.list(BlogWithItemsSpecification(url="my.test.blog"))
    """

    def __init__(
        self,
        entity_cls: type[T],
        db_model_cls: type[Any],
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self.entity_cls = entity_cls
        self.db_model_cls = db_model_cls
        self._session_factory = session_factory
        self._registry = registry
        self._mapper = ModelMapper(entity_cls, db_model_cls)

    # -- UoW helpers --------------------------------------------------------

    def _get_active_uow(self, uow: UnitOfWork | None = None) -> SQLAlchemyUnitOfWork | None:
        active = uow if uow is not None else get_current_uow()
        return cast("SQLAlchemyUnitOfWork | None", active)

    def _require_uow(self, uow: UnitOfWork | None = None) -> SQLAlchemyUnitOfWork:
        active = self._get_active_uow(uow)
        if active is None:
            raise UnitOfWorkError(
                f"{type(self).__name__}[{self.entity_cls.__name__}] write "
                "called outside a Unit of Work"
            )
        return active

    # -- mapping ------------------------------------------------------------

    def to_model(self, entity: T) -> Any:
        """Convert domain entity → SQLAlchemy model."""
        return self._mapper.to_model(entity)

    def from_model(self, model: Any) -> T:
        """Convert SQLAlchemy model → domain entity."""
        return self._mapper.from_model(model)

    # -- read ---------------------------------------------------------------

    def build_statement(self, spec: BaseSpecification[T]) -> Select[Any]:
        """
        Translate *spec* into a ``SELECT``.

        Includes are validated and applied before the criteria are compiled.

        Raises:
            FieldNotFoundError: An include or criteria path is unknown.
            RelationshipTraversalError: A path steps through a column.
            IncludeRequiredError: The criteria cross a relation that is
                not included.
        """
        model = self.db_model_cls
        stmt = select(model).options(*build_load_options(model, spec.includes))
        ensure_includes_cover_criteria(
            spec, lambda path: is_relationship_path(model, path)
        )
        where = build_sqla_filter(model, spec.criteria.to_dict(), registry=self._registry)
        return stmt.where(where).order_by(*primary_key_columns(model))

    async def list(
        self, spec: BaseSpecification[T], uow: UnitOfWork | None = None
    ) -> list[T]:
        """Return every entity *spec* selects, with its includes loaded."""
        stmt = self.build_statement(spec)
        active = self._get_active_uow(uow)
        try:
            if active is not None:
                return await self._fetch(active.session, stmt)
            if self._session_factory is None:
                raise UnitOfWorkError(
                    f"{type(self).__name__} has no session_factory and no active "
                    "Unit of Work"
                )
            async with self._session_factory() as session:
                return await self._fetch(session, stmt)
        except (OperationalError, InterfaceError) as exc:
            logger.error(
                "Store unavailable while listing %s: %s", self.entity_cls.__name__, exc
            )
            raise StorageUnavailableError(
                f"Store unavailable while listing {self.entity_cls.__name__}: {exc}"
            ) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(
                f"Failed to list {self.entity_cls.__name__}: {exc}"
            ) from exc

    async def _fetch(self, session: AsyncSession, stmt: Select[Any]) -> list[T]:
        result = await session.execute(stmt)
        models = result.scalars().unique().all()
        logger.debug("Loaded %d %s row(s)", len(models), self.db_model_cls.__name__)
        return [self.from_model(m) for m in models]

    # -- write --------------------------------------------------------------

    async def add(self, entity: T, uow: UnitOfWork | None = None) -> T:
        """
        Insert a new entity or update an existing one.

        An entity without a primary key is inserted and flushed, so the
        returned copy carries the store-assigned id.
        """
        session = self._require_uow(uow).session
        model = self.to_model(entity)
        try:
            if _has_identity(model):
                model = await session.merge(model)
            else:
                session.add(model)
            await session.flush()
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(
                f"Failed to save {self.entity_cls.__name__}: {exc}"
            ) from exc
        return self.from_model(model)

    async def get(self, entity_id: Any, uow: UnitOfWork | None = None) -> T | None:
        """Load one entity by primary key with all of its relations."""
        session = self._require_uow(uow).session
        try:
            model = await session.get(
                self.db_model_cls,
                entity_id,
                options=self._all_relations(),
                populate_existing=True,
            )
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(
                f"Failed to load {self.entity_cls.__name__} {entity_id!r}: {exc}"
            ) from exc
        return None if model is None else self.from_model(model)

    async def delete(self, entity_id: Any, uow: UnitOfWork | None = None) -> bool:
        """
        Delete one entity by primary key. Owned relations cascade.

        Returns ``False`` when nothing had that key.
        """
        session = self._require_uow(uow).session
        try:
            model = await session.get(
                self.db_model_cls,
                entity_id,
                options=self._all_relations(),
                populate_existing=True,
            )
            if model is None:
                return False
            await session.delete(model)
            await session.flush()
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(
                f"Failed to delete {self.entity_cls.__name__} {entity_id!r}: {exc}"
            ) from exc
        return True

    def _all_relations(self) -> Sequence[Any]:
        return build_load_options(self.db_model_cls, relationship_keys(self.db_model_cls))


def _has_identity(model: Any) -> bool:
    mapper = sa_inspect(type(model))
    return all(
        getattr(model, mapper.get_property_by_column(col).key, None) is not None
        for col in mapper.primary_key
    )
