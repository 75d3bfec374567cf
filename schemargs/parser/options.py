# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `OptionResolver`, which turns an option token stream into validated
data for a schema.

Scanning rules:
- Tokens not starting with `-` (and a lone `-`) are collected in `rest`.
- `--name` is a long option; its kebab form is looked up in the schema.
- `-x` is the short alias `x`. A single dash never matches a long name and a
  double dash never matches a short alias.
- Booleans take the value `True` without consuming the next token.
- Other options consume exactly one following token, which must exist and must
  not start with `--`.
- Repeated options accumulate: a scalar, then a two-element list, then appends.

The raw data is validated afterwards; the validator, not the scanner, decides
whether several values are acceptable for a field.
"""
from __future__ import annotations

from typing import Any, Sequence

from schemargs.case import convert
from schemargs.exceptions import (
    MissingArgumentError,
    SchemaError,
    SchemaValidationError,
    UnexpectedArgumentError,
    UnknownOptionError,
    ValidationFailedError,
)
from schemargs.logger import logger
from schemargs.parser.context import ParserContext
from schemargs.parser.help import option_body
from schemargs.parser.parser_types import ParsedResult, Variadic
from schemargs.parser.schema import OptionSpec, Schema
from schemargs.parser.tokenizer import is_long_option, is_short_option, split_non_options
from schemargs.parser.validator import ValidationEntry, validate
from schemargs.signals import HelpSignal
from schemargs.strings import StringTable


def accumulate(data: dict[str, Any], key_path: tuple[str, ...], value: Any) -> None:
    """Store `value` at `key_path`, turning repeated keys into a list."""
    target = data
    for segment in key_path[:-1]:
        target = target.setdefault(segment, {})
    key = key_path[-1]
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def validation_message(entries: Sequence[ValidationEntry]) -> str:
    """Join validation entries, each prefixed with its top-level key in kebab-case."""
    messages = []
    for entry in entries:
        if entry.key_path:
            name = convert(entry.key_path[0], "kebab")
            messages.append(f"{name}: {entry.message}")
        else:
            messages.append(entry.message)
    return "; ".join(messages)


class OptionResolver:
    """
    Resolves `--long` and `-s` options of one parser level against a schema.

    The resolver registers `<options>` on the usage line and the option listing as
    the help body of its context when it is created.
    """

    def __init__(
        self,
        context: ParserContext,
        schema: Schema,
        variadic: Variadic | str = Variadic.DENY,
    ) -> None:
        self.schema = schema
        try:
            self.variadic = Variadic(variadic)
        except ValueError as error:
            raise SchemaError(str(error)) from error
        context = context.with_usage(
            context.wrap(context.strings["options.placeholder"])
        )
        if schema.leaves():
            context = context.with_help_body(option_body(schema, context.strings))
        self.context = context

    @property
    def strings(self) -> StringTable:
        return self.context.strings

    def resolve_option(self, token: str) -> OptionSpec:
        """Return the schema leaf for an option token."""
        spec = None
        if is_long_option(token):
            spec = self.schema.get_flag(token[2:])
        elif is_short_option(token) and len(token) == 2:
            spec = self.schema.get_short(token[1])
        if spec is None:
            message = self.strings.format("options.unknown_option", option=token)
            raise UnknownOptionError(message, self.context.help_page(message))
        return spec

    def scan(self, tokens: Sequence[str]) -> tuple[dict[str, Any], list[str]]:
        """Scan `tokens` into raw nested data and leftover positional tokens."""
        data: dict[str, Any] = {}
        rest: list[str] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if not token.startswith("-") or token == "-":
                rest.append(token)
                index += 1
                continue

            spec = self.resolve_option(token)
            if spec.is_flag:
                value: Any = True
            else:
                if index + 1 >= len(tokens) or is_long_option(tokens[index + 1]):
                    message = self.strings.format("options.missing_argument", option=token)
                    raise MissingArgumentError(message, self.context.help_page(message))
                index += 1
                value = tokens[index]
            logger.debug("Resolved %s to '%s'", token, ".".join(spec.key_path))
            accumulate(data, spec.key_path, value)
            index += 1
        return data, rest

    def check_rest(self, rest: list[str]) -> list[str]:
        if not rest:
            return rest
        if self.variadic == Variadic.ALLOW:
            return rest
        if self.variadic == Variadic.IGNORE:
            logger.debug("Ignoring %d leftover argument(s): %s", len(rest), rest)
            return []
        message = self.strings.format("options.unexpected_argument", argument=rest[0])
        raise UnexpectedArgumentError(message, self.context.help_page(message))

    async def resolve(self, args: Sequence[str] | None = None) -> ParsedResult:
        """
        Parse `args` (the context's remaining args by default) into a `ParsedResult`.

        Raises:
            UnknownOptionError: If an option is not in the schema.
            MissingArgumentError: If a value-taking option has no value.
            UnexpectedArgumentError: If leftover tokens are denied.
            ValidationFailedError: If the values do not satisfy the schema.
        """
        if args is None:
            args = self.context.remaining_args
        tokens, non_options = split_non_options(args)
        if tokens and tokens[0] == "--help":
            raise HelpSignal(self.context.help_page())
        raw, rest = self.scan(tokens)
        rest = self.check_rest(rest)
        try:
            data = await validate(raw, self.schema)
        except SchemaValidationError as error:
            message = validation_message(error.errors)
            raise ValidationFailedError(
                message, self.context.help_page(message), errors=error.errors
            ) from error
        return ParsedResult(data=data, rest=rest, non_options=non_options)
