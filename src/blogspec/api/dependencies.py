"""FastAPI dependencies resolving collaborators from the application container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from ..cqrs.mediator import Mediator

if TYPE_CHECKING:
    from ..bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container  # type: ignore[no-any-return]


def get_mediator(request: Request) -> Mediator:
    """The mediator every route dispatches through."""
    return get_container(request).mediator


MediatorDep = Annotated[Mediator, Depends(get_mediator)]
