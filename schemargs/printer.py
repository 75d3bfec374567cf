# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders help pages and failures with rich.

Layout of a help page:

    <blank>
    Usage: chat login <options>
    <blank>
    Options:
      -u, --username    Name of the account (required).
      --password        No description (required).
    <blank>
    Error: Unknown option: --user.
    <blank>

Listing keys are indented by two spaces and padded to a column shared by every
row; long descriptions wrap inside their own column.
"""
from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.traceback import Traceback

from schemargs.console import console as default_console
from schemargs.console import error_console as default_error_console
from schemargs.parser.help import KEY_INDENT, HelpBody, HelpPage
from schemargs.themes import get_theme


def render_body(body: HelpBody, console: Console) -> None:
    console.print()
    console.print(Text(body.title, style="help.title"))
    table = Table.grid()
    table.add_column(width=body.key_width, no_wrap=True)
    table.add_column(overflow="fold")
    for row in body.rows:
        table.add_row(
            Text(" " * KEY_INDENT + row.key, style="help.key"), Text(row.description)
        )
    console.print(table)


def render_help(page: HelpPage, console: Console | None = None) -> None:
    """Print a help page: usage line, listing, then the error line if any."""
    console = console or default_console
    console.print()
    console.print(Text(page.usage, style="help.usage"))
    if page.body is not None:
        render_body(page.body, console)
    if page.error is not None:
        console.print()
        console.print(Text(page.error, style="help.error"))
    console.print()


def help_to_text(page: HelpPage, width: int = 80) -> str:
    """Render a help page to plain text."""
    console = Console(
        file=StringIO(),
        width=width,
        theme=get_theme(),
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    with console.capture() as capture:
        render_help(page, console)
    return capture.get()


def print_error(message: str, console: Console | None = None) -> None:
    console = console or default_error_console
    console.print(Text(message, style="help.error"))


def print_failure(error: BaseException, console: Console | None = None) -> None:
    """Print the full traceback of the exception behind `error`, then `error`."""
    console = console or default_error_console
    cause = error.__cause__ or error
    console.print(Traceback.from_exception(type(cause), cause, cause.__traceback__))
    console.print(Text(str(error), style="help.error"))
