"""Handler registry: message type to handler instance."""

from __future__ import annotations

import logging
from typing import Any

from ..primitives.exceptions import HandlerRegistrationError

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Explicit map from a message type to the handler instance serving it.

    Built once by the composition root. Lookup is by exact type: a subclass
    of a registered message does not inherit its handler.

    **Conflict detection:** registering a second, different handler for the
    same message type raises :class:`HandlerRegistrationError`. Registering
    the same instance again is a no-op.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Any], Any] = {}

    def register(self, message_type: type[Any], handler: Any) -> None:
        existing = self._handlers.get(message_type)
        if existing is not None and existing is not handler:
            msg = (
                f"Duplicate handler for {message_type.__name__}: "
                f"{type(existing).__name__} already registered, "
                f"cannot register {type(handler).__name__}"
            )
            raise HandlerRegistrationError(msg)
        self._handlers[message_type] = handler
        logger.debug(
            "Registered handler %s -> %s",
            message_type.__name__,
            type(handler).__name__,
        )

    def get(self, message_type: type[Any]) -> Any | None:
        return self._handlers.get(message_type)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._handlers

    def get_registered_handlers(self) -> dict[str, str]:
        """Return a snapshot of all registered handlers (for debugging)."""
        return {k.__name__: type(v).__name__ for k, v in self._handlers.items()}


__all__ = ["HandlerRegistry"]
