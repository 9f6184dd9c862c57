from abc import ABC, abstractmethod
from typing import TypeVar, Generic

from .handler_resolver import HandlerResolver


class Command(ABC):
    """Base class for all commands."""
    pass


TCommand = TypeVar('TCommand', bound=Command)
TResult = TypeVar('TResult')


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class for all command handlers."""

    @abstractmethod
    def handle(self, command: TCommand) -> TResult:
        pass


class CommandBus(HandlerResolver):
    """Command bus that resolves handlers by convention."""

    def dispatch(self, command: Command) -> TResult:  # type: ignore
        return self._execute(command)
