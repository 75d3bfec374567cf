# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `ValuesResolver`, which binds positional arguments to the fields of a
flat schema of strings by declaration order.

    resolver = ValuesResolver(context, formalize({
        "name": {"type": str, "required": True},
        "greeting": {"type": str, "default": "Hello"},
    }))
    await resolver.resolve(["Ann"])  -> {"name": "Ann", "greeting": "Hello"}

Required fields must come before optional ones; a schema breaking that rule, or
declaring anything but strings (plain or enumerated), is rejected when the
resolver is created. Tokens beyond the declared fields are ignored.
"""
from __future__ import annotations

from typing import Any, Sequence

from schemargs.exceptions import (
    SchemaError,
    SchemaValidationError,
    ValidationFailedError,
)
from schemargs.logger import logger
from schemargs.parser.context import ParserContext
from schemargs.parser.help import values_body
from schemargs.parser.options import validation_message
from schemargs.parser.schema import Kind, Schema
from schemargs.parser.validator import validate
from schemargs.signals import HelpSignal


def check_positional_schema(schema: Schema) -> None:
    """
    Check that a schema can be bound to positional arguments.

    Raises:
        SchemaError: If a field is not a string or string enum, or a required
            field follows an optional one.
    """
    last_required = -1
    for index, spec in enumerate(schema.fields):
        if spec.kind not in (Kind.STRING, Kind.ENUM) or spec.type is not str:
            raise SchemaError("Schema must be an object of strings.")
        if spec.required:
            if index > last_required + 1:
                raise SchemaError("Required arguments must come first.")
            last_required = index


class ValuesResolver:
    """Resolves positional values of one parser level against a schema."""

    def __init__(self, context: ParserContext, schema: Schema) -> None:
        check_positional_schema(schema)
        self.schema = schema
        context = context.with_usage(
            *(context.wrap(spec.flag_name) for spec in schema.fields)
        )
        if schema.fields:
            context = context.with_help_body(
                values_body(schema, context.strings, context.placeholder)
            )
        self.context = context

    async def resolve(self, args: Sequence[str] | None = None) -> dict[str, Any]:
        """
        Bind `args` (the context's remaining args by default) to the schema fields.

        Raises:
            ValidationFailedError: If a required value is missing or invalid.
        """
        if args is None:
            args = self.context.remaining_args
        args = list(args)
        if args and args[0] == "--help":
            raise HelpSignal(self.context.help_page())

        fields = self.schema.fields
        if len(args) > len(fields):
            logger.debug("Ignoring surplus argument(s): %s", args[len(fields) :])

        raw = {spec.name: value for spec, value in zip(fields, args)}
        logger.debug("Bound %d positional value(s): %s", len(raw), list(raw))
        try:
            return await validate(raw, self.schema)
        except SchemaValidationError as error:
            message = validation_message(error.errors)
            raise ValidationFailedError(
                message, self.context.help_page(message), errors=error.errors
            ) from error
