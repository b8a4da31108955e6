"""Mediator: central dispatch point with ContextVar UoW scope."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from ..correlation import correlation_scope, generate_correlation_id
from ..middleware.pipeline import build_pipeline
from ..primitives.exceptions import HandlerNotFoundError, UnitOfWorkError
from .command import Command

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ..ports.middleware import IMiddleware
    from ..ports.unit_of_work import UnitOfWork
    from .registry import HandlerRegistry

logger = logging.getLogger(__name__)

#: ContextVar tracking the current UoW. ``None`` means we are not inside
#: any command scope yet (the root command will create one).
_current_uow: ContextVar[UnitOfWork | None] = ContextVar("current_uow", default=None)


def get_current_uow() -> UnitOfWork | None:
    """Return the active UoW (or *None* if outside a command scope)."""
    return _current_uow.get()


class Mediator:
    """Routes commands and queries through middleware to their handlers.

    **UoW scope detection:** a command dispatched while no UoW is active is a
    *root* command and gets a fresh UoW from ``uow_factory``, committed when
    the handler returns and rolled back when it raises. A command dispatched
    from inside another command's handler reuses the parent UoW. Queries
    never open one.

    Parameters
    ----------
    registry:
        :class:`~blogspec.cqrs.registry.HandlerRegistry` instance.
    uow_factory:
        Callable returning a ``UnitOfWork`` async context manager. Only
        needed when commands are dispatched.
    middlewares:
        Middleware applied around every handler, first = outermost.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        uow_factory: Callable[[], UnitOfWork] | None = None,
        *,
        middlewares: Sequence[IMiddleware] = (),
    ) -> None:
        self._registry = registry
        self._uow_factory = uow_factory
        self._middlewares = list(middlewares)

    async def send(self, message: Any) -> Any:
        """Dispatch *message* to the handler registered for its exact type.

        Raises:
            HandlerNotFoundError: No handler is registered for the type.
        """
        handler = self._registry.get(type(message))
        if handler is None:
            raise HandlerNotFoundError(type(message))

        # Use model_copy to keep the message immutable
        if not message.correlation_id:
            message = message.model_copy(
                update={"correlation_id": generate_correlation_id()}
            )

        if not isinstance(message, Command) or _current_uow.get() is not None:
            return await self._dispatch(message, handler)

        if self._uow_factory is None:
            raise UnitOfWorkError(
                f"Cannot dispatch {type(message).__name__}: no uow_factory configured"
            )

        async with self._uow_factory() as uow:
            token = _current_uow.set(uow)
            try:
                result = await self._dispatch(message, handler)
            finally:
                _current_uow.reset(token)

        return result

    async def _dispatch(self, message: Any, handler: Any) -> Any:
        """Build the middleware chain and invoke the handler."""

        async def _innermost(msg: Any) -> Any:
            return await handler.handle(msg)

        pipeline = build_pipeline(self._middlewares, _innermost)
        with correlation_scope(message.correlation_id):
            result = await pipeline(message)
        return self._propagate_ids(message, result)

    def _propagate_ids(self, message: Any, response: Any) -> Any:
        """Propagate correlation ID and causation ID from the message to the response."""
        correlation_id = getattr(response, "correlation_id", None) or getattr(
            message, "correlation_id", None
        )

        causation_id = getattr(response, "causation_id", None)
        if not causation_id:
            causation_id = getattr(message, "command_id", None) or getattr(
                message, "query_id", None
            )

        # CommandResponse and QueryResponse are frozen dataclasses
        return replace(
            response, correlation_id=correlation_id, causation_id=causation_id
        )
