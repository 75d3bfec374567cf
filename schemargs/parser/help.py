# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help page composition.

A `HelpPage` is plain data: the usage line, an optional `HelpBody` (a titled
two-column listing of commands, options or positional arguments) and an optional
error line. Resolvers build their body when they register with a parser level,
and the page is only rendered (see `schemargs.printer`) when help is requested or
a user-facing error ends the parse.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from schemargs.parser.schema import Kind, OptionSpec, Schema
from schemargs.strings import StringTable

if TYPE_CHECKING:
    from schemargs.parser.commands import Command

# The key column is the indent, the longest key, then at least two spaces.
KEY_INDENT = 2
KEY_GAP = 2


@dataclass(frozen=True)
class HelpRow:
    key: str
    description: str


@dataclass(frozen=True)
class HelpBody:
    """A titled listing rendered below the usage line."""

    title: str
    rows: tuple[HelpRow, ...] = field(default=())

    @property
    def key_width(self) -> int:
        """Width of the key column shared by every row."""
        longest = max((len(row.key) for row in self.rows), default=0)
        return longest + KEY_INDENT + KEY_GAP


@dataclass(frozen=True)
class HelpPage:
    usage: str
    body: HelpBody | None = None
    error: str | None = None


def command_body(commands: Iterable[Command], strings: StringTable) -> HelpBody:
    """List commands sorted by their kebab-case name."""
    rows = sorted(
        (
            HelpRow(
                command.display_name,
                command.description or strings["commands.no_description"],
            )
            for command in commands
        ),
        key=lambda row: row.key,
    )
    return HelpBody(strings["commands.available"], tuple(rows))


def _default_text(spec: OptionSpec, strings: StringTable) -> str:
    if spec.kind == Kind.BOOLEAN and spec.default_description is None:
        return strings["options.enabled" if spec.default else "options.disabled"]
    shown = spec.default_description if spec.default_description is not None else spec.default
    return f"`{shown}`"


def describe(spec: OptionSpec, strings: StringTable) -> str:
    """
    Build the help description of a field.

    The description is followed by the allowed enum values and by one addition:
    "(allows multiple)" for arrays, else "(required)", else the default value
    unless the field is secret. It always ends with a period.
    """
    description = spec.description or strings["options.no_description"]
    if spec.enum:
        description += f" ({', '.join(f'`{value}`' for value in spec.enum)})"

    addition = None
    if spec.kind == Kind.ARRAY:
        addition = strings["options.allows_multiple"]
    elif spec.required:
        addition = strings["options.required"]
    elif spec.default is not None and not spec.secret:
        addition = strings.format("options.default", default=_default_text(spec, strings))

    if addition:
        description += f" {addition}"
    return f"{description}."


def option_key(spec: OptionSpec) -> str:
    if spec.short:
        return f"-{spec.short}, {spec.long_flag}"
    return spec.long_flag


def option_body(schema: Schema, strings: StringTable) -> HelpBody:
    rows = tuple(
        HelpRow(option_key(spec), describe(spec, strings)) for spec in schema.leaves()
    )
    return HelpBody(strings["options.title"], rows)


def values_body(schema: Schema, strings: StringTable, placeholder: str) -> HelpBody:
    opening, closing = placeholder
    rows = tuple(
        HelpRow(f"{opening}{spec.flag_name}{closing}", describe(spec, strings))
        for spec in schema.leaves()
    )
    return HelpBody(strings["values.title"], rows)
