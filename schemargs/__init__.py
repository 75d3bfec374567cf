"""
schemargs

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .parser import ArgumentsParser, Command, ParsedResult, Variadic
from .runner import run

logger = logging.getLogger("schemargs")


__all__ = [
    "ArgumentsParser",
    "Command",
    "ParsedResult",
    "Variadic",
    "run",
]
