# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The process shell around `ArgumentsParser`.

`run()` is the only place in schemargs that ends the process. It runs an async
entry point with a root parser and maps the outcome to an exit status:

- `HelpSignal`: help page printed, status 0.
- `ParseError`: help page with the error line printed, status 1.
- `AbortError`: error line printed, status 1.
- `CommandFailedError`: traceback of the failing handler printed, status 1.

`SchemaError` and `ConfigError` are not caught: they are mistakes in the program,
not in the user's input.
"""
from __future__ import annotations

import asyncio
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence, Union

from rich.console import Console

from schemargs.config import load_config
from schemargs.exceptions import AbortError, CommandFailedError, ParseError
from schemargs.logger import logger
from schemargs.parser.arguments_parser import ArgumentsParser
from schemargs.printer import print_error, print_failure, render_help
from schemargs.signals import HelpSignal
from schemargs.utils import ensure_async, setup_logging

Entry = Union[Callable[[ArgumentsParser], Awaitable[Any]], Mapping[str, Any]]


async def execute(entry: Entry, parser: ArgumentsParser) -> Any:
    """Run `entry` with `parser`; a mapping is dispatched as a command table."""
    if isinstance(entry, Mapping):
        return await parser.command(entry)
    return await ensure_async(entry)(parser)


def run(
    entry: Entry,
    args: Sequence[str] | None = None,
    *,
    placeholder: str = "<>",
    strings: Mapping[str, Any] | None = None,
    program: str | None = None,
    config: str | Path | None = None,
    console: Console | None = None,
    error_console: Console | None = None,
) -> Any:
    """
    Parse the process arguments with `entry` and return its result.

    Args:
        entry: A coroutine function taking the root `ArgumentsParser`, or a
            mapping of command names to handlers.
        args: Tokens to parse. Defaults to `sys.argv[1:]`.
        placeholder: Characters wrapped around usage placeholders.
        strings: Message template overrides.
        program: Displayed program name.
        config: Config file providing `placeholder`, `strings` and `log_mode`;
            explicit `placeholder` and `strings` arguments are then ignored.
        console: Console for help output.
        error_console: Console for failures.

    Returns:
        Any: The value returned by `entry`. The process exits instead when help
        is shown or the arguments are rejected.
    """
    if config is not None:
        parser_config = load_config(config)
        if parser_config.log_mode:
            setup_logging(parser_config.log_mode)
        parser = ArgumentsParser(
            args,
            placeholder=parser_config.placeholder,
            strings=parser_config.strings,
            program=program,
        )
    else:
        parser = ArgumentsParser(
            args, placeholder=placeholder, strings=strings, program=program
        )

    try:
        return asyncio.run(execute(entry, parser))
    except HelpSignal as signal:
        render_help(signal.help_page, console)
        sys.exit(0)
    except ParseError as error:
        logger.debug("Parse failed: %s", error)
        if error.help_page is not None:
            render_help(error.help_page, console)
        else:
            print_error(error.message, error_console)
        sys.exit(1)
    except AbortError as error:
        print_error(str(error), error_console)
        sys.exit(1)
    except CommandFailedError as error:
        print_failure(error, error_console)
        sys.exit(1)
