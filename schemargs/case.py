# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Case conversion between the kebab-case used on the command line and the
snake_case keys used in schemas and command tables.

`convert` splits its input into words on case changes, underscores, dashes,
dots and whitespace, so `sendMessage`, `send_message`, `Send-Message` and
`SEND_MESSAGE` all convert to the same key:

    convert("sendMessage")           -> "send_message"
    convert("send-message")          -> "send_message"
    convert("send_message", "kebab") -> "send-message"
"""
from __future__ import annotations

import re
from typing import Literal

CaseStyle = Literal["snake", "kebab"]

_WORDS = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")
_SEPARATORS: dict[str, str] = {"snake": "_", "kebab": "-"}


def split_words(key: str) -> list[str]:
    """Split a key into its lowercase words."""
    return [word.lower() for word in _WORDS.findall(key)]


def convert(key: str, style: CaseStyle = "snake") -> str:
    """Convert `key` to `style` ("snake" or "kebab")."""
    try:
        separator = _SEPARATORS[style]
    except KeyError:
        raise ValueError(
            f"Invalid case style '{style}'. Must be one of: {', '.join(_SEPARATORS)}"
        ) from None
    return separator.join(split_words(key))
