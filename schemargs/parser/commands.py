# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Sub-command tables and the dispatcher that descends into them.

A command table maps names to handlers. Names are matched after case folding, so
a handler registered as `sendMessage` or `send_message` is reached by typing
`send-message`. Handlers receive the `ArgumentsParser` of the child level and may
be plain functions or coroutines:

    async def login(parser):
        options = await parser.options({"username": {"type": str, "required": True}})
        ...

    await ArgumentsParser().command({"login": login, "message": message})
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

from schemargs.case import convert
from schemargs.exceptions import (
    CommandFailedError,
    CommandNotFoundError,
    SchemaError,
    SchemargsError,
)
from schemargs.logger import logger
from schemargs.parser.context import ParserContext
from schemargs.parser.help import command_body
from schemargs.signals import HelpSignal
from schemargs.utils import ensure_async, first_doc_line

if TYPE_CHECKING:
    from schemargs.parser.arguments_parser import ArgumentsParser


@dataclass
class Command:
    """
    A named sub-command.

    Attributes:
        name (str): Name as registered; typed on the command line in kebab-case.
        handler (Callable): Called with the child `ArgumentsParser`.
        description (str | None): Help text. Defaults to the handler's `description`
            attribute, then to the first line of its docstring.
    """

    name: str
    handler: Callable[..., Any]
    description: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not convert(self.name):
            raise SchemaError(f"Invalid command name {self.name!r}")
        if not callable(self.handler):
            raise SchemaError(f"Handler for command '{self.name}' is not callable")
        if self.description is None:
            description = getattr(self.handler, "description", None)
            if not isinstance(description, str):
                description = first_doc_line(self.handler)
            self.description = description

    @property
    def key(self) -> str:
        return convert(self.name)

    @property
    def display_name(self) -> str:
        return convert(self.name, "kebab")


class CommandTable:
    """Commands keyed by their case-folded name."""

    def __init__(
        self, commands: Mapping[str, Callable[..., Any] | Command] | Iterable[Command]
    ) -> None:
        self._commands: dict[str, Command] = {}
        if isinstance(commands, Mapping):
            items: Iterable[Command] = (
                value
                if isinstance(value, Command)
                else Command(name=name, handler=value)
                for name, value in commands.items()
            )
        else:
            items = commands
        for command in items:
            if not isinstance(command, Command):
                raise SchemaError(f"Expected a Command, got {type(command).__name__}")
            self.add(command)

    def add(self, command: Command) -> None:
        if command.key in self._commands:
            existing = self._commands[command.key]
            raise SchemaError(
                f"Command '{command.name}' conflicts with '{existing.name}'"
            )
        self._commands[command.key] = command

    def get(self, token: str) -> Command | None:
        return self._commands.get(convert(token))

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.get(token) is not None


class CommandDispatcher:
    """
    Resolves the leading token of a level against a `CommandTable` and runs the
    matching handler one level deeper.
    """

    def __init__(
        self,
        context: ParserContext,
        table: CommandTable,
        parser_factory: Callable[[ParserContext], ArgumentsParser],
    ) -> None:
        self.table = table
        self.parser_factory = parser_factory
        context = context.with_usage(
            context.wrap(context.strings["commands.placeholder"])
        )
        self.context = context.with_help_body(command_body(table, context.strings))

    async def dispatch(self) -> Any:
        """
        Run the command named by the leading token and return its result.

        Raises:
            HelpSignal: If no command is given or `--help` is the leading token.
            CommandNotFoundError: If the leading token names no command.
            CommandFailedError: If the handler raised an unexpected exception.
        """
        args = self.context.remaining_args
        if not args or self.context.help_requested():
            raise HelpSignal(self.context.help_page())

        token = args[0]
        command = self.table.get(token)
        if command is None:
            message = self.context.strings.format("commands.not_found", command=token)
            raise CommandNotFoundError(message, self.context.help_page(message))

        child = self.parser_factory(self.context.child())
        logger.debug(
            "Dispatching '%s' at depth %d with %d argument(s)",
            command.name,
            child.depth,
            len(child.args),
        )
        handler = ensure_async(command.handler)
        try:
            return await handler(child)
        except SchemargsError:
            raise
        except Exception as error:
            logger.debug("Command '%s' failed: %r", command.name, error)
            raise CommandFailedError(
                command.name, f"Command '{command.display_name}' failed: {error}"
            ) from error
