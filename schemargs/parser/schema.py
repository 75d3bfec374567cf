# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionSpec` and `Schema`, the formalized form of a declared schema.

CLI authors declare a schema as a mapping of field name to a declaration:

    {
        "username": {"type": str, "required": True, "short": "u"},
        "retries": {"type": int, "default": 3, "range": "0-10"},
        "verbose": bool,
        "tags": {"type": list, "description": "Tags to attach"},
        "level": {"enum": ["debug", "info"], "default": "info"},
        "server": {"type": dict, "schema": {"host": str, "port": int}},
    }

`formalize()` turns that into a `Schema` of `OptionSpec` entries tagged by `Kind`,
checking everything once: unknown attributes, unsupported types, malformed length
or range bounds, short alias collisions and flag name collisions all raise
`SchemaError` immediately.

Nested objects are flattened into leaf key paths; the flag name of a leaf is the
kebab form of its key path segments joined with `-` (`server.host` -> `--server-host`).
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterator

from schemargs.case import convert
from schemargs.exceptions import SchemaError


class Kind(Enum):
    """The tag of an `OptionSpec`."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    ENUM = "enum"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


_TYPE_NAMES: dict[str, type] = {
    "string": str,
    "str": str,
    "number": float,
    "float": float,
    "integer": int,
    "int": int,
    "boolean": bool,
    "bool": bool,
    "array": list,
    "list": list,
    "object": dict,
    "dict": dict,
}

_SCALAR_TYPES = (str, int, float, bool)

_ATTRIBUTES = {
    "type",
    "items",
    "required",
    "default",
    "default_description",
    "enum",
    "short",
    "secret",
    "description",
    "len",
    "length",
    "range",
    "pattern",
    "schema",
}

Bounds = tuple[float | None, float | None]


@dataclass(frozen=True)
class OptionSpec:
    """
    Represents one formalized schema field.

    Attributes:
        key_path (tuple[str, ...]): Segments from the schema root to this field.
        kind (Kind): The tag deciding how the field is parsed and validated.
        type (type): The python value type (`str`, `int`, `float`, `bool`, `list`, `dict`).
        items (type): The python type of array items.
        required (bool): True if the field must be provided.
        default (Any): The value used when the field is not provided.
        default_description (str | None): Text shown in help instead of the default.
        enum (tuple[Any, ...]): Allowed values, in declared order.
        short (str | None): Single character alias used as `-x`.
        secret (bool): True to hide the default value in help.
        description (str): Help text.
        length (Bounds | None): Min/max length of strings and arrays.
        range (Bounds | None): Min/max of numbers.
        pattern (str | None): Regular expression strings must match.
        children (tuple[OptionSpec, ...]): Fields of an object.
    """

    key_path: tuple[str, ...]
    kind: Kind = Kind.STRING
    type: Any = str
    items: Any = str
    required: bool = False
    default: Any = None
    default_description: str | None = None
    enum: tuple[Any, ...] = ()
    short: str | None = None
    secret: bool = False
    description: str = ""
    length: Bounds | None = None
    range: Bounds | None = None
    pattern: str | None = None
    children: tuple[OptionSpec, ...] = field(default=())

    @property
    def name(self) -> str:
        return self.key_path[-1]

    @property
    def flag_name(self) -> str:
        """Kebab name of the field as typed after `--`."""
        return "-".join(convert(segment, "kebab") for segment in self.key_path)

    @property
    def long_flag(self) -> str:
        return f"--{self.flag_name}"

    @property
    def is_flag(self) -> bool:
        """True if the field takes no value on the command line."""
        return self.kind == Kind.BOOLEAN

    def leaves(self) -> Iterator[OptionSpec]:
        if self.kind == Kind.OBJECT:
            for child in self.children:
                yield from child.leaves()
        else:
            yield self


@dataclass(frozen=True)
class Schema:
    """A formalized schema: top-level fields plus flag and alias lookups."""

    fields: tuple[OptionSpec, ...]
    flags: dict[str, OptionSpec] = field(default_factory=dict, compare=False)
    shorts: dict[str, OptionSpec] = field(default_factory=dict, compare=False)
    # pydantic model built by the validator on first use
    model: Any = field(default=None, init=False, repr=False, compare=False)

    def leaves(self) -> list[OptionSpec]:
        return [leaf for spec in self.fields for leaf in spec.leaves()]

    def objects(self) -> list[tuple[str, ...]]:
        """Key paths of every object field, parents before children."""
        paths: list[tuple[str, ...]] = []

        def collect(specs: tuple[OptionSpec, ...]) -> None:
            for spec in specs:
                if spec.kind == Kind.OBJECT:
                    paths.append(spec.key_path)
                    collect(spec.children)

        collect(self.fields)
        return paths

    def get_flag(self, name: str) -> OptionSpec | None:
        """Return the leaf for a long option name (without the leading `--`)."""
        return self.flags.get(convert(name, "kebab"))

    def get_short(self, alias: str) -> OptionSpec | None:
        return self.shorts.get(alias)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self.fields)


def _resolve_type(value: Any, key: str) -> type:
    if isinstance(value, str):
        try:
            return _TYPE_NAMES[value.strip().lower()]
        except KeyError:
            valid = ", ".join(sorted(_TYPE_NAMES))
            raise SchemaError(
                f"Invalid type '{value}' for '{key}'. Must be one of: {valid}"
            ) from None
    if value in (str, int, float, bool, list, dict):
        return value
    raise SchemaError(f"Unsupported type {value!r} for '{key}'")


def _parse_bounds(value: Any, key: str, attribute: str) -> Bounds | None:
    """Parse `"6-"`, `"-10"`, `"3-8"`, `5` or `(3, 8)` into (min, max)."""
    if value is None:
        return None

    def number(text: str) -> float | None:
        text = text.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            raise SchemaError(
                f"Invalid {attribute} {value!r} for '{key}': '{text}' is not a number"
            ) from None
        return int(parsed) if parsed.is_integer() else parsed

    if isinstance(value, bool):
        raise SchemaError(f"Invalid {attribute} {value!r} for '{key}'")
    if isinstance(value, (int, float)):
        return value, value
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return value[0], value[1]
    if isinstance(value, str):
        text = value.strip()
        # a leading dash on a digit is a negative bound, not an open minimum
        head, dash, tail = text.partition("-")
        if not head and dash and tail[:1].isdigit() and "-" in tail:
            head, _, tail = tail.partition("-")
            head = f"-{head}"
        if not dash:
            bound = number(text)
            return bound, bound
        return number(head), number(tail)
    raise SchemaError(f"Invalid {attribute} {value!r} for '{key}'")


def _declaration_to_dict(declaration: Any, key: str) -> dict[str, Any]:
    if isinstance(declaration, OptionSpec):
        attributes = {
            spec_field.name: getattr(declaration, spec_field.name)
            for spec_field in fields(declaration)
            if spec_field.name not in ("key_path", "kind", "children")
        }
        if not declaration.enum:
            attributes["enum"] = None
        if declaration.kind == Kind.OBJECT:
            attributes["schema"] = {
                child.name: child for child in declaration.children
            }
        return attributes
    if isinstance(declaration, Mapping):
        unknown = set(declaration) - _ATTRIBUTES
        if unknown:
            raise SchemaError(
                f"Unknown schema attribute(s) for '{key}': {', '.join(sorted(map(str, unknown)))}"
            )
        return dict(declaration)
    if isinstance(declaration, (type, str)):
        return {"type": declaration}
    raise SchemaError(
        f"Invalid declaration for '{key}': expected a mapping, a type or an OptionSpec"
    )


def _normalize_enum(enum: Any, key: str) -> tuple[Any, ...]:
    if enum is None:
        return ()
    if isinstance(enum, Mapping):
        values = tuple(enum.keys())
    elif isinstance(enum, type) and issubclass(enum, Enum):
        values = tuple(member.value for member in enum)
    elif isinstance(enum, (str, bytes)):
        raise SchemaError(f"enum for '{key}' must be a list of values, not a string")
    else:
        try:
            values = tuple(enum)
        except TypeError:
            raise SchemaError(
                f"enum for '{key}' must be iterable (like list, tuple, or mapping)"
            ) from None
    if not values:
        raise SchemaError(f"enum for '{key}' must not be empty")
    return values


def _build_spec(name: Any, declaration: Any, parent: tuple[str, ...]) -> OptionSpec:
    if not isinstance(name, str) or not convert(name):
        raise SchemaError(f"Invalid field name {name!r}")
    key_path = parent + (name,)
    key = ".".join(key_path)
    attributes = _declaration_to_dict(declaration, key)

    children_declaration = attributes.get("schema")
    enum = _normalize_enum(attributes.get("enum"), key)
    raw_type = attributes.get("type")
    if raw_type is None:
        if children_declaration is not None:
            raw_type = dict
        elif enum:
            raw_type = type(enum[0]) if type(enum[0]) in _SCALAR_TYPES else str
        else:
            raw_type = str
    value_type = _resolve_type(raw_type, key)
    items = _resolve_type(attributes.get("items") or str, key)
    if items not in _SCALAR_TYPES:
        raise SchemaError(f"Array items of '{key}' must be a scalar type")

    if value_type is dict:
        kind = Kind.OBJECT
    elif value_type is list:
        kind = Kind.ARRAY
    elif enum:
        kind = Kind.ENUM
    elif value_type is bool:
        kind = Kind.BOOLEAN
    elif value_type in (int, float):
        kind = Kind.NUMBER
    else:
        kind = Kind.STRING

    short = attributes.get("short")
    if short is not None:
        if not isinstance(short, str) or len(short) != 1 or short == "-":
            raise SchemaError(
                f"Short alias {short!r} for '{key}' must be a single character"
            )

    default = attributes.get("default")
    if enum and default is not None and kind != Kind.ARRAY and default not in enum:
        raise SchemaError(
            f"Default value {default!r} for '{key}' not in allowed values: {list(enum)}"
        )

    length = _parse_bounds(attributes.get("length", attributes.get("len")), key, "length")
    value_range = _parse_bounds(attributes.get("range"), key, "range")
    if length is not None and kind not in (Kind.STRING, Kind.ARRAY):
        raise SchemaError(f"length can only be used with strings and arrays ('{key}')")
    if value_range is not None and kind != Kind.NUMBER:
        raise SchemaError(f"range can only be used with numbers ('{key}')")
    pattern = attributes.get("pattern")
    if pattern is not None and kind != Kind.STRING:
        raise SchemaError(f"pattern can only be used with strings ('{key}')")

    children: tuple[OptionSpec, ...] = ()
    if kind == Kind.OBJECT:
        if not isinstance(children_declaration, Mapping) or not children_declaration:
            raise SchemaError(f"Object '{key}' must declare a non-empty 'schema' mapping")
        if short is not None or default is not None:
            raise SchemaError(f"Object '{key}' cannot have a short alias or a default")
        children = tuple(
            _build_spec(child_name, child, key_path)
            for child_name, child in children_declaration.items()
        )
    elif children_declaration is not None:
        raise SchemaError(f"'schema' can only be used with objects ('{key}')")

    return OptionSpec(
        key_path=key_path,
        kind=kind,
        type=value_type,
        items=items,
        required=bool(attributes.get("required", False)),
        default=default,
        default_description=attributes.get("default_description"),
        enum=enum,
        short=short,
        secret=bool(attributes.get("secret", False)),
        description=attributes.get("description") or "",
        length=length,
        range=value_range,
        pattern=pattern,
        children=children,
    )


def formalize(schema: Mapping[str, Any] | Schema) -> Schema:
    """
    Validate a declared schema and return its formalized `Schema`.

    Raises:
        SchemaError: If the schema is not a mapping, declares an invalid field,
            or two fields claim the same flag name or short alias.
    """
    if isinstance(schema, Schema):
        return schema
    if not isinstance(schema, Mapping):
        raise SchemaError("Schema must be an object.")

    specs = tuple(_build_spec(name, declaration, ()) for name, declaration in schema.items())
    flags: dict[str, OptionSpec] = {}
    shorts: dict[str, OptionSpec] = {}
    for leaf in (leaf for spec in specs for leaf in spec.leaves()):
        if leaf.flag_name in flags:
            existing = ".".join(flags[leaf.flag_name].key_path)
            raise SchemaError(
                f"Flag '{leaf.long_flag}' is already used by '{existing}'"
            )
        flags[leaf.flag_name] = leaf
        if leaf.short is not None:
            if leaf.short in shorts:
                existing = ".".join(shorts[leaf.short].key_path)
                raise SchemaError(
                    f"Short alias '-{leaf.short}' is already used by '{existing}'"
                )
            shorts[leaf.short] = leaf
    return Schema(fields=specs, flags=flags, shorts=shorts)
