# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Types returned by or passed to the parser.

Contents:
- `Variadic`: Policy for leftover positional tokens after option scanning.
- `ParsedResult`: Validated options together with `rest` and `non_options`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, NoReturn

from schemargs.exceptions import AbortError


class Variadic(Enum):
    """
    Defines what happens to positional tokens left over after option scanning.

    Members:
        ALLOW: Keep them in `ParsedResult.rest`.
        IGNORE: Discard them silently.
        DENY: Report the first one as an unexpected argument (default).

    Example:
        Variadic("allow") → Variadic.ALLOW
        Variadic("Deny")  → Variadic.DENY
    """

    ALLOW = "allow"
    IGNORE = "ignore"
    DENY = "deny"

    @classmethod
    def _missing_(cls, value: object) -> Variadic:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass
class ParsedResult:
    """
    The result of `ArgumentsParser.options()`.

    Validated values are available by key (`result["username"]`) or by attribute
    (`result.username`). `rest` holds leftover positional tokens (empty unless the
    variadic policy is `allow`) and `non_options` the text after a `--` separator.
    """

    data: dict[str, Any] = field(default_factory=dict)
    rest: list[str] = field(default_factory=list)
    non_options: str | None = None

    def on_error(self, error: BaseException | str) -> NoReturn:
        """Report `error` to the user and end the program with a failure status."""
        if isinstance(error, BaseException):
            raise AbortError(str(error)) from error
        raise AbortError(error)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getattr__(self, name: str) -> Any:
        data = self.__dict__.get("data", {})
        if name in data:
            return data[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return the data merged with `rest` and `non_options`."""
        return {**self.data, "rest": list(self.rest), "non_options": self.non_options}
