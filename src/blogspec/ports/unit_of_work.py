"""UnitOfWork: abstract base class for the Unit of Work pattern."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("blogspec.uow")


class UnitOfWork(ABC):
    """
    Abstract base class for Unit of Work implementations.

    Commit happens before post-commit hooks run, so a hook always sees the
    committed state. On error the transaction is rolled back and the hooks
    are discarded.

    Example::

        async with uow_factory() as uow:
            await blogs.add(Blog(url="my.test.blog"), uow)
        # committed here
    """

    def __init__(self) -> None:
        self._on_commit_hooks: deque[Callable[[], Awaitable[Any]]] = deque()

    def on_commit(self, callback: Callable[[], Awaitable[Any]]) -> None:
        """Register an async callback to be executed after a successful commit."""
        self._on_commit_hooks.append(callback)

    async def trigger_commit_hooks(self) -> None:
        """Execute all registered on_commit hooks.

        Called by ``__aexit__`` after commit completes. A failing hook is
        logged; the transaction is already committed at that point.
        """
        while self._on_commit_hooks:
            callback = self._on_commit_hooks.popleft()
            try:
                await callback()
            except Exception as exc:
                logger.error("Error in on_commit hook: %s", exc, exc_info=True)

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
            await self.trigger_commit_hooks()
        else:
            self._on_commit_hooks.clear()
            await self.rollback()
