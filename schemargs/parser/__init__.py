"""
schemargs

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arguments_parser import ArgumentsParser
from .commands import Command, CommandTable
from .context import ParserContext
from .help import HelpBody, HelpPage, HelpRow
from .parser_types import ParsedResult, Variadic
from .schema import Kind, OptionSpec, Schema, formalize

__all__ = [
    "ArgumentsParser",
    "Command",
    "CommandTable",
    "ParserContext",
    "HelpBody",
    "HelpPage",
    "HelpRow",
    "ParsedResult",
    "Variadic",
    "Kind",
    "OptionSpec",
    "Schema",
    "formalize",
]
