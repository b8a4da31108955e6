from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from blogspec.adapters.memory import InMemoryUnitOfWork
from blogspec.correlation import correlation_scope, get_correlation_id
from blogspec.cqrs import (
    Command,
    CommandHandler,
    CommandResponse,
    HandlerRegistry,
    Mediator,
    Query,
    QueryResponse,
    get_current_uow,
)
from blogspec.primitives.exceptions import (
    HandlerNotFoundError,
    HandlerRegistrationError,
    UnitOfWorkError,
)

# --- Mock Models ---


class MyCommand(Command[str]):
    name: str


class InnerCommand(Command[str]):
    name: str


class MyQuery(Query[str]):
    id: str


class UnregisteredQuery(Query[str]):
    pass


class RecordingHandler(CommandHandler[str]):
    """Remembers the UoW and correlation ID it ran under."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.seen_uow: Any = None
        self.seen_correlation_id: str | None = None

    async def handle(self, command: Any) -> CommandResponse[str]:
        self.seen_uow = get_current_uow()
        self.seen_correlation_id = get_correlation_id()
        if self.fail:
            raise ValueError("handler failed")
        return CommandResponse(result=command.name)


def _mediator(**handlers: Any) -> tuple[Mediator, list[InMemoryUnitOfWork]]:
    created: list[InMemoryUnitOfWork] = []

    def uow_factory() -> InMemoryUnitOfWork:
        uow = InMemoryUnitOfWork()
        created.append(uow)
        return uow

    registry = HandlerRegistry()
    for message_type, handler in handlers.values():
        registry.register(message_type, handler)
    return Mediator(registry, uow_factory=uow_factory), created


# --- Registry ---


def test_registry_rejects_a_second_handler() -> None:
    registry = HandlerRegistry()
    registry.register(MyCommand, RecordingHandler())

    with pytest.raises(HandlerRegistrationError):
        registry.register(MyCommand, RecordingHandler())


def test_registry_accepts_same_instance_twice() -> None:
    registry = HandlerRegistry()
    handler = RecordingHandler()

    registry.register(MyCommand, handler)
    registry.register(MyCommand, handler)

    assert MyCommand in registry
    assert registry.get_registered_handlers() == {"MyCommand": "RecordingHandler"}


def test_registry_lookup_is_by_exact_type() -> None:
    class SubCommand(MyCommand):
        pass

    registry = HandlerRegistry()
    registry.register(MyCommand, RecordingHandler())

    assert registry.get(SubCommand) is None
    assert SubCommand not in registry
    assert MyCommand in registry


# --- Dispatch ---


@pytest.mark.asyncio
async def test_unregistered_message_raises() -> None:
    mediator, _ = _mediator()

    with pytest.raises(HandlerNotFoundError, match="UnregisteredQuery"):
        await mediator.send(UnregisteredQuery())


@pytest.mark.asyncio
async def test_query_runs_without_unit_of_work() -> None:
    # Setup
    handler = AsyncMock()
    handler.handle.return_value = QueryResponse(result="found")
    mediator, created = _mediator(q=(MyQuery, handler))

    # Execute
    query = MyQuery(id="1")
    response = await mediator.send(query)

    # Verify
    assert response.result == "found"
    assert response.causation_id == query.query_id
    assert response.correlation_id is not None
    assert created == []
    handler.handle.assert_awaited_once()


@pytest.mark.asyncio
async def test_command_commits_on_success() -> None:
    handler = RecordingHandler()
    mediator, created = _mediator(c=(MyCommand, handler))

    cmd = MyCommand(name="test")
    response = await mediator.send(cmd)

    assert response.result == "test"
    assert response.causation_id == cmd.command_id
    assert len(created) == 1
    assert handler.seen_uow is created[0]
    assert created[0].committed and not created[0].rolled_back
    assert get_current_uow() is None


@pytest.mark.asyncio
async def test_command_rolls_back_on_failure() -> None:
    mediator, created = _mediator(c=(MyCommand, RecordingHandler(fail=True)))

    with pytest.raises(ValueError, match="handler failed"):
        await mediator.send(MyCommand(name="test"))

    assert created[0].rolled_back and not created[0].committed
    assert get_current_uow() is None


@pytest.mark.asyncio
async def test_cancelled_query_propagates_through_send() -> None:
    handler = AsyncMock()
    handler.handle.side_effect = asyncio.CancelledError()
    mediator, created = _mediator(q=(MyQuery, handler))

    with pytest.raises(asyncio.CancelledError):
        await mediator.send(MyQuery(id="1"))

    assert created == []


@pytest.mark.asyncio
async def test_cancelled_command_rolls_back() -> None:
    handler = AsyncMock()
    handler.handle.side_effect = asyncio.CancelledError()
    mediator, created = _mediator(c=(MyCommand, handler))

    with pytest.raises(asyncio.CancelledError):
        await mediator.send(MyCommand(name="test"))

    assert created[0].rolled_back and not created[0].committed
    assert get_current_uow() is None


@pytest.mark.asyncio
async def test_nested_command_reuses_parent_unit_of_work() -> None:
    inner = RecordingHandler()
    mediator: Mediator | None = None

    class OuterHandler(CommandHandler[str]):
        async def handle(self, command: Any) -> CommandResponse[str]:
            assert mediator is not None
            nested = await mediator.send(InnerCommand(name=command.name + "-inner"))
            return CommandResponse(result=nested.result)

    mediator, created = _mediator(
        outer=(MyCommand, OuterHandler()), inner=(InnerCommand, inner)
    )

    response = await mediator.send(MyCommand(name="outer"))

    assert response.result == "outer-inner"
    assert len(created) == 1
    assert inner.seen_uow is created[0]
    assert created[0].commit_count == 1


@pytest.mark.asyncio
async def test_command_without_uow_factory_raises() -> None:
    registry = HandlerRegistry()
    registry.register(MyCommand, RecordingHandler())
    mediator = Mediator(registry)

    with pytest.raises(UnitOfWorkError):
        await mediator.send(MyCommand(name="test"))


@pytest.mark.asyncio
async def test_correlation_id_is_inherited_from_context() -> None:
    handler = RecordingHandler()
    mediator, _ = _mediator(c=(MyCommand, handler))

    with correlation_scope("req-42"):
        cmd = MyCommand(name="test")
        response = await mediator.send(cmd)

    assert cmd.correlation_id == "req-42"
    assert handler.seen_correlation_id == "req-42"
    assert response.correlation_id == "req-42"


@pytest.mark.asyncio
async def test_correlation_id_is_generated_when_absent() -> None:
    handler = RecordingHandler()
    mediator, _ = _mediator(c=(MyCommand, handler))

    cmd = MyCommand(name="test")
    response = await mediator.send(cmd)

    assert cmd.correlation_id is None
    assert handler.seen_correlation_id is not None
    assert response.correlation_id == handler.seen_correlation_id


@pytest.mark.asyncio
async def test_middlewares_wrap_handler_outermost_first() -> None:
    calls: list[str] = []

    def make(name: str) -> Any:
        async def middleware(message: Any, next_handler: Any) -> Any:
            calls.append(f"{name}:before")
            result = await next_handler(message)
            calls.append(f"{name}:after")
            return result

        return middleware

    registry = HandlerRegistry()
    handler = MagicMock()
    handler.handle = AsyncMock(return_value=QueryResponse(result="ok"))
    registry.register(MyQuery, handler)
    mediator = Mediator(registry, middlewares=[make("outer"), make("inner")])

    await mediator.send(MyQuery(id="1"))

    assert calls == ["outer:before", "inner:before", "inner:after", "outer:after"]
