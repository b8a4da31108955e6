"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

from sqlalchemy.exc import InterfaceError, OperationalError

from ..ports.unit_of_work import UnitOfWork
from ..primitives.exceptions import (
    SessionManagementError,
    StorageUnavailableError,
    UnitOfWorkError,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

    AsyncSessionFactory = Callable[[], AsyncSession]


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work implementation using SQLAlchemy ``AsyncSession``.

    Supports two usage patterns:

    1. **Caller-managed session**::

           async with SQLAlchemyUnitOfWork(session=session) as uow:
               ...

    2. **Self-managed session** (what the mediator's ``uow_factory`` uses)::

           async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
               ...

       The UoW creates the session on enter and closes it on exit.

    Exactly one of ``session`` or ``session_factory`` must be provided.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'."
            )
        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'."
            )

        self._session: AsyncSession | None = session
        self._session_factory = session_factory
        self._owns_session = session is None
        super().__init__()

    @property
    def session(self) -> AsyncSession:
        """Get the active session. Raises if session not yet created."""
        if self._session is None:
            raise UnitOfWorkError(
                "Session not yet created. Ensure __aenter__ was called."
            )
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """Begin a transaction, creating the session if a factory was given."""
        if self._owns_session and self._session_factory is not None:
            self._session = self._session_factory()
        try:
            if not self.session.in_transaction():
                await self.session.begin()
        except (OperationalError, InterfaceError) as e:
            raise StorageUnavailableError(f"Cannot begin transaction: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Commit or rollback via the base class, then close an owned session."""
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            if self._owns_session and self._session is not None:
                session, self._session = self._session, None
                await session.close()

    async def commit(self) -> None:
        """Commit the current transaction."""
        try:
            await self.session.commit()
        except (OperationalError, InterfaceError) as e:
            with contextlib.suppress(Exception):
                await self.rollback()
            raise StorageUnavailableError(f"Failed to commit transaction: {e}") from e
        except Exception as e:  # noqa: BLE001
            # Constraint violations and the like; roll back before reporting
            with contextlib.suppress(Exception):
                await self.rollback()
            raise UnitOfWorkError(f"Failed to commit transaction: {e}") from e

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        try:
            if self.session.in_transaction():
                await self.session.rollback()
        except Exception as e:  # noqa: BLE001
            raise UnitOfWorkError(f"Failed to rollback transaction: {e}") from e
