from .command import Command
from .handler import CommandHandler, QueryHandler
from .mediator import Mediator, get_current_uow
from .query import Query
from .registry import HandlerRegistry
from .response import CommandResponse, QueryResponse

__all__ = [
    "Command",
    "CommandHandler",
    "CommandResponse",
    "HandlerRegistry",
    "Mediator",
    "Query",
    "QueryHandler",
    "QueryResponse",
    "get_current_uow",
]
