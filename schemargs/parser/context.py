# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParserContext`, the immutable state of one parser level.

A context is created for the root level from the process arguments and a new one
is derived for every sub-command the dispatcher descends into. Resolvers never
mutate a context; they derive a new one carrying their usage fragment and help
body, so the help page of a level always reflects exactly what ran at that level.

    root = ParserContext(remaining_args=("login", "--user", "ann"), program="chat")
    root.base                 -> "chat"
    child = root.child()
    child.base                -> "chat login"
    child.remaining_args      -> ("--user", "ann")
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from schemargs.exceptions import SchemaError
from schemargs.parser.help import HelpBody, HelpPage
from schemargs.strings import StringTable
from schemargs.utils import get_program_invocation


@dataclass(frozen=True)
class ParserContext:
    """
    State threaded through one recursion level of the parser.

    Attributes:
        remaining_args (tuple[str, ...]): Tokens not consumed by an ancestor level.
        depth (int): Recursion level, 0 for the root.
        program (str): Name the program was invoked with.
        command_path (tuple[str, ...]): Command tokens consumed by ancestor levels.
        placeholder (str): Opening and closing characters around usage placeholders.
        strings (StringTable): Message templates.
        usage (tuple[str, ...]): Usage line fragments registered so far.
        help_body (HelpBody | None): Listing registered by the resolver of this level.
    """

    remaining_args: tuple[str, ...] = ()
    depth: int = 0
    program: str = field(default_factory=get_program_invocation)
    command_path: tuple[str, ...] = ()
    placeholder: str = "<>"
    strings: StringTable = field(default_factory=StringTable)
    usage: tuple[str, ...] = ()
    help_body: HelpBody | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.placeholder, str) or len(self.placeholder) != 2:
            raise SchemaError(
                f"placeholder must be exactly two characters, got {self.placeholder!r}"
            )
        if not self.usage:
            object.__setattr__(self, "usage", (self.strings["help.usage"], self.base))

    @property
    def base(self) -> str:
        """The displayed invocation name of this level."""
        return " ".join((self.program, *self.command_path))

    def wrap(self, name: str) -> str:
        """Wrap a usage placeholder name in the placeholder characters."""
        opening, closing = self.placeholder
        return f"{opening}{name}{closing}"

    def with_usage(self, *fragments: str) -> ParserContext:
        return replace(self, usage=self.usage + fragments)

    def with_help_body(self, body: HelpBody) -> ParserContext:
        if self.help_body is not None:
            raise SchemaError("A parser level can only register one help listing")
        return replace(self, help_body=body)

    def child(self) -> ParserContext:
        """Return the context of the sub-command named by the leading token."""
        if not self.remaining_args:
            raise SchemaError("Cannot descend into a command without a command token")
        return ParserContext(
            remaining_args=self.remaining_args[1:],
            depth=self.depth + 1,
            program=self.program,
            command_path=self.command_path + (self.remaining_args[0],),
            placeholder=self.placeholder,
            strings=self.strings,
        )

    def help_requested(self) -> bool:
        return bool(self.remaining_args) and self.remaining_args[0] == "--help"

    def help_page(self, message: str | None = None) -> HelpPage:
        """Compose the help page of this level, with an error line for `message`."""
        error = None
        if message is not None:
            error = self.strings.format("help.error", message=message, base=self.base)
        return HelpPage(usage=" ".join(self.usage), body=self.help_body, error=error)
