# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by schemargs.

Exception Hierarchy:
- SchemargsError
    ├── SchemaError
    ├── ConfigError
    ├── AbortError
    ├── CommandFailedError
    ├── SchemaValidationError
    └── ParseError
        ├── UnknownOptionError
        ├── MissingArgumentError
        ├── UnexpectedArgumentError
        ├── CommandNotFoundError
        └── ValidationFailedError

`SchemaError` and `ConfigError` signal mistakes made by the CLI author and are
never turned into help output. `ParseError` subclasses are user-facing: they carry
the help page of the parser level that raised them so the runner can show the
user how to fix the invocation next to what went wrong.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemargs.parser.help import HelpPage
    from schemargs.parser.validator import ValidationEntry


class SchemargsError(Exception):
    """Base exception for schemargs."""


class SchemaError(SchemargsError):
    """Exception raised when a schema or command table is declared incorrectly."""


class ConfigError(SchemargsError):
    """Exception raised when a config file cannot be read or is invalid."""


class AbortError(SchemargsError):
    """Exception raised to report a failure to the user and end with status 1."""


class CommandFailedError(SchemargsError):
    """Exception raised when a command handler fails unexpectedly.

    The original exception is always available as `__cause__`.
    """

    def __init__(self, command: str, message: str) -> None:
        super().__init__(message)
        self.command = command


class ParseError(SchemargsError):
    """Exception raised when the user's arguments cannot be parsed."""

    def __init__(self, message: str, help_page: HelpPage | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.help_page = help_page


class UnknownOptionError(ParseError):
    """Exception raised when an option does not match the schema."""


class MissingArgumentError(ParseError):
    """Exception raised when a value-taking option has no value."""


class UnexpectedArgumentError(ParseError):
    """Exception raised when leftover positional arguments are not allowed."""


class CommandNotFoundError(ParseError):
    """Exception raised when no sub-command matches the given name."""


class ValidationFailedError(ParseError):
    """Exception raised when parsed values do not satisfy the schema."""

    def __init__(
        self,
        message: str,
        help_page: HelpPage | None = None,
        errors: list[ValidationEntry] | None = None,
    ) -> None:
        super().__init__(message, help_page)
        self.errors = errors or []


class SchemaValidationError(SchemargsError):
    """Exception raised by the validator with one entry per failing key path."""

    def __init__(self, errors: list[ValidationEntry]) -> None:
        super().__init__("; ".join(str(entry) for entry in errors))
        self.errors = errors
