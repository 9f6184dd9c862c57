from .handler_resolver import HandlerResolver
from .query_bus import Query, QueryHandler, QueryBus
from .command_bus import Command, CommandHandler, CommandBus

__all__ = [
    "HandlerResolver",
    "Query",
    "QueryHandler",
    "QueryBus",
    "Command",
    "CommandHandler",
    "CommandBus",
]
