# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Message templates used in usage lines, help listings and error lines.

Every template has a default and can be overridden with a flat dotted mapping
(`{"commands.not_found": "No such command: <command>"}`) or the equivalent nested
mapping (`{"commands": {"not_found": "..."}}`), which is what YAML and TOML config
files produce. Placeholders such as `<message>` or `<option>` are substituted by
plain replacement when a template is formatted.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schemargs.exceptions import SchemaError

DEFAULT_STRINGS: dict[str, str] = {
    "help.usage": "Usage:",
    "help.error": "Error: <message>",
    "commands.placeholder": "command",
    "commands.available": "Available commands:",
    "commands.no_description": "No description",
    "commands.not_found": "<command>: Command not found",
    "options.placeholder": "options",
    "options.title": "Options:",
    "options.no_description": "No description",
    "options.allows_multiple": "(allows multiple)",
    "options.required": "(required)",
    "options.default": "(default: <default>)",
    "options.enabled": "enabled",
    "options.disabled": "disabled",
    "options.unknown_option": "Unknown option: <option>.",
    "options.missing_argument": "Argument missing for option: <option>.",
    "options.unexpected_argument": "Unexpected argument: <argument>.",
    "values.title": "Arguments:",
}


def flatten(strings: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys."""
    flat: dict[str, str] = {}
    for key, value in strings.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, f"{dotted}."))
        elif isinstance(value, str):
            flat[dotted] = value
        else:
            raise SchemaError(
                f"String override '{dotted}' must be a string, got {type(value).__name__}"
            )
    return flat


class StringTable:
    """Templates keyed by dotted names, with defaults for every key."""

    def __init__(self, overrides: Mapping[str, Any] | None = None) -> None:
        flat = flatten(overrides or {})
        unknown = set(flat) - set(DEFAULT_STRINGS)
        if unknown:
            raise SchemaError(f"Unknown string key(s): {', '.join(sorted(unknown))}")
        self._strings: dict[str, str] = {**DEFAULT_STRINGS, **flat}
        self.overrides: dict[str, str] = flat

    def __getitem__(self, key: str) -> str:
        return self._strings[key]

    def format(self, key: str, **values: Any) -> str:
        """Return the template `key` with `<name>` placeholders replaced."""
        text = self._strings[key]
        for name, value in values.items():
            text = text.replace(f"<{name}>", str(value))
        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringTable):
            return False
        return self._strings == other._strings

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._strings.items())))

    def __repr__(self) -> str:
        return f"StringTable(overrides={self.overrides!r})"
