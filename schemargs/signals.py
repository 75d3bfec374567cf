# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by schemargs.

Signals interrupt parsing to show information to the user without being treated
as errors. They subclass `BaseException` so that the catch-all around command
handlers never intercepts them.

Signals:
- HelpSignal: Help was requested (or no sub-command was given) and the help page
  should be shown before ending with a success status.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemargs.parser.help import HelpPage


class FlowSignal(BaseException):
    """Base class for all flow control signals in schemargs.

    These are not errors. They're used to unwind a parse that has nothing left
    to do except show output to the user.
    """


class HelpSignal(FlowSignal):
    """Raised to display the help page of the current parser level."""

    def __init__(
        self, help_page: HelpPage, message: str = "Help signal received."
    ) -> None:
        super().__init__(message)
        self.help_page = help_page
