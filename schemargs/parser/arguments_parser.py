# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentsParser`, the entry point for describing a command
line declaratively and getting validated values back.

One `ArgumentsParser` exists per level of the command tree. The root parser reads
`sys.argv[1:]`; every sub-command handler receives a child parser scoped to the
tokens after its command name. A level is resolved by exactly one of:

- `command(commands)`: dispatch to a sub-command handler.
- `options(schema, variadic)`: parse `--long` / `-s` options into a `ParsedResult`.
- `values(schema)`: bind positional arguments to an ordered schema of strings.
- `empty()`: accept nothing but `--help`.

Example Usage:
    async def login(parser: ArgumentsParser):
        options = await parser.options({
            "username": {"type": str, "required": True, "short": "u"},
            "password": {"type": str, "required": True, "len": "6-", "secret": True},
        })
        return options["username"]

    async def main(parser: ArgumentsParser):
        return await parser.command({"login": login})

    run(main)

User input errors are raised as `ParseError` subclasses and help requests as
`HelpSignal`, both carrying the help page of the level that raised them.
`schemargs.runner.run` turns them into output and an exit status; nothing in this
module ends the process.
"""
from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from schemargs.config import find_config, load_config
from schemargs.exceptions import UnexpectedArgumentError
from schemargs.parser.commands import Command, CommandDispatcher, CommandTable
from schemargs.parser.context import ParserContext
from schemargs.parser.help import HelpPage
from schemargs.parser.options import OptionResolver
from schemargs.parser.parser_types import ParsedResult, Variadic
from schemargs.parser.schema import Schema, formalize
from schemargs.parser.values import ValuesResolver
from schemargs.signals import HelpSignal
from schemargs.strings import StringTable
from schemargs.utils import get_program_invocation


class ArgumentsParser:
    """
    Schema-driven parser for one level of a command tree.

    Args:
        args (Sequence[str] | None): Tokens to parse. Defaults to `sys.argv[1:]`.
        placeholder (str): Characters wrapped around usage placeholders.
        strings (Mapping | StringTable | None): Message template overrides.
        program (str | None): Displayed program name. Defaults to the invocation
            name of the running script.
        context (ParserContext | None): Use an existing context instead; the other
            arguments are ignored.
    """

    def __init__(
        self,
        args: Sequence[str] | None = None,
        *,
        placeholder: str = "<>",
        strings: Mapping[str, Any] | StringTable | None = None,
        program: str | None = None,
        context: ParserContext | None = None,
    ) -> None:
        if context is None:
            if args is None:
                args = sys.argv[1:]
            if not isinstance(strings, StringTable):
                strings = StringTable(strings)
            context = ParserContext(
                remaining_args=tuple(args),
                program=program or get_program_invocation(),
                placeholder=placeholder,
                strings=strings,
            )
        self.context: ParserContext = context

    @classmethod
    def from_config(
        cls,
        path: str | Path | None = None,
        args: Sequence[str] | None = None,
        program: str | None = None,
    ) -> ArgumentsParser:
        """Create a root parser using the placeholder and strings of a config file.

        Without `path`, the first config found by `find_config()` is used, if any.
        """
        if path is None:
            path = find_config()
        if path is None:
            return cls(args, program=program)
        config = load_config(path)
        return cls(
            args,
            placeholder=config.placeholder,
            strings=config.strings,
            program=program,
        )

    @property
    def args(self) -> list[str]:
        """Tokens left for this level."""
        return list(self.context.remaining_args)

    @property
    def depth(self) -> int:
        return self.context.depth

    @property
    def base(self) -> str:
        """Displayed invocation name of this level, e.g. `chat login`."""
        return self.context.base

    @property
    def strings(self) -> StringTable:
        return self.context.strings

    def help_page(self) -> HelpPage:
        """Help page of this level before any resolver registered."""
        return self.context.help_page()

    async def command(
        self,
        commands: Mapping[str, Callable[..., Any] | Command] | Iterable[Command],
    ) -> Any:
        """
        Run the sub-command named by the first argument and return its result.

        Raises:
            SchemaError: If two command names fold to the same key.
            HelpSignal: If no command is given or help is requested.
            CommandNotFoundError: If no command matches.
            CommandFailedError: If the handler raised an unexpected exception.
        """
        table = commands if isinstance(commands, CommandTable) else CommandTable(commands)
        dispatcher = CommandDispatcher(self.context, table, self._child)
        return await dispatcher.dispatch()

    async def options(
        self,
        schema: Mapping[str, Any] | Schema,
        variadic: Variadic | str = Variadic.DENY,
    ) -> ParsedResult:
        """
        Parse the remaining arguments as options described by `schema`.

        Raises:
            SchemaError: If the schema is invalid.
            HelpSignal: If `--help` is the first argument.
            ParseError: If the arguments do not match the schema.
        """
        resolver = OptionResolver(self.context, formalize(schema), variadic)
        return await resolver.resolve()

    async def values(self, schema: Mapping[str, Any] | Schema) -> dict[str, Any]:
        """
        Bind the remaining arguments, in order, to the fields of `schema`.

        Raises:
            SchemaError: If the schema is not an object of strings with required
                fields first.
            HelpSignal: If `--help` is the first argument.
            ParseError: If a value is missing, invalid or unexpected.
        """
        resolver = ValuesResolver(self.context, formalize(schema))
        return await resolver.resolve()

    async def empty(self) -> None:
        """
        Accept no arguments at this level.

        Raises:
            HelpSignal: If `--help` is the first argument.
            UnexpectedArgumentError: If any argument is left.
        """
        if self.context.help_requested():
            raise HelpSignal(self.context.help_page())
        if self.context.remaining_args:
            token = self.context.remaining_args[0]
            message = self.strings.format("options.unexpected_argument", argument=token)
            raise UnexpectedArgumentError(message, self.context.help_page(message))

    def _child(self, context: ParserContext) -> ArgumentsParser:
        return type(self)(context=context)

    def __str__(self) -> str:
        return (
            f"ArgumentsParser(base={self.base!r}, depth={self.depth}, "
            f"args={self.args!r})"
        )

    def __repr__(self) -> str:
        return str(self)
