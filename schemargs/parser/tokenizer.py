# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""Splits argument lists into the option stream and the non-option tail."""
from __future__ import annotations

from typing import Sequence

NON_OPTIONS_SEPARATOR = "--"


def split_non_options(args: Sequence[str]) -> tuple[list[str], str | None]:
    """
    Split `args` at the first literal `--`.

    Returns:
        tuple[list[str], str | None]: The tokens before the separator, and the
        tokens after it joined by single spaces (None if there is no separator).
    """
    args = list(args)
    if NON_OPTIONS_SEPARATOR not in args:
        return args, None
    index = args.index(NON_OPTIONS_SEPARATOR)
    return args[:index], " ".join(args[index + 1 :])


def is_long_option(token: str) -> bool:
    return token.startswith("--")


def is_short_option(token: str) -> bool:
    return token.startswith("-") and not token.startswith("--") and len(token) > 1