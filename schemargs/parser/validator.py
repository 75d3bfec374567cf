# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Validates raw parsed data against a formalized `Schema` using pydantic.

A pydantic model is generated once per schema: each `OptionSpec` becomes a model
field (aliased to the declared field name), nested objects become nested models,
and constraints map onto pydantic's own:

- `length` -> `min_length` / `max_length`
- `range` -> `ge` / `le`
- `pattern` -> `pattern`
- `enum` -> an after-validator checking membership

Array fields accept a single value and wrap it in a list, so `--tag a` and
`--tag a --tag b` both validate. Failures are reported as `SchemaValidationError`
with one `ValidationEntry` per pydantic error, in pydantic's order.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    create_model,
)
from pydantic_core import PydanticCustomError

from schemargs.exceptions import SchemaValidationError
from schemargs.logger import logger
from schemargs.parser.schema import Kind, OptionSpec, Schema

@dataclass(frozen=True)
class ValidationEntry:
    """One validation failure: the key path of the field and the reason."""

    key_path: tuple[str, ...]
    message: str

    def __str__(self) -> str:
        if not self.key_path:
            return self.message
        return f"{'.'.join(self.key_path)}: {self.message}"


def _as_list(value: Any) -> Any:
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _one_of(values: tuple[Any, ...]) -> Callable[[Any], Any]:
    allowed = ", ".join(f"`{value}`" for value in values)

    def check(value: Any) -> Any:
        if value not in values:
            raise PydanticCustomError(
                "enum", "Input should be one of {allowed}", {"allowed": allowed}
            )
        return value

    return check


def _annotation(spec: OptionSpec) -> Any:
    if spec.kind == Kind.OBJECT:
        return build_model(spec.children, name="_".join(spec.key_path))
    if spec.kind == Kind.ARRAY:
        item: Any = spec.items
        if spec.enum:
            item = Annotated[spec.items, AfterValidator(_one_of(spec.enum))]
        return Annotated[list[item], BeforeValidator(_as_list)]  # type: ignore[valid-type]
    if spec.kind == Kind.ENUM:
        return Annotated[spec.type, AfterValidator(_one_of(spec.enum))]
    return spec.type


def _field(spec: OptionSpec) -> tuple[Any, Any]:
    constraints: dict[str, Any] = {}
    if spec.length is not None:
        constraints["min_length"], constraints["max_length"] = spec.length
    if spec.range is not None:
        constraints["ge"], constraints["le"] = spec.range
    if spec.pattern is not None:
        constraints["pattern"] = spec.pattern
    constraints = {key: value for key, value in constraints.items() if value is not None}

    annotation = _annotation(spec)
    if spec.kind == Kind.OBJECT:
        # objects are always present in the raw data, see `_with_objects`
        return annotation, Field(..., alias=spec.name)
    if spec.default is not None:
        default = spec.default
        return annotation, Field(
            default_factory=lambda: deepcopy(default), alias=spec.name, **constraints
        )
    if spec.required:
        return annotation, Field(..., alias=spec.name, **constraints)
    return Optional[annotation], Field(None, alias=spec.name, **constraints)


def build_model(specs: tuple[OptionSpec, ...], name: str = "Options") -> type[BaseModel]:
    """Create a pydantic model for a tuple of sibling `OptionSpec` entries."""
    definitions = {f"field_{index}": _field(spec) for index, spec in enumerate(specs)}
    return create_model(  # type: ignore[call-overload]
        name or "Options",
        __config__=ConfigDict(extra="forbid", populate_by_name=False),
        **definitions,
    )


def get_model(schema: Schema) -> type[BaseModel]:
    """Return the pydantic model of a schema, building it on first use."""
    if schema.model is None:
        object.__setattr__(schema, "model", build_model(schema.fields))
    return schema.model


def _with_objects(raw: dict[str, Any], schema: Schema) -> dict[str, Any]:
    data = deepcopy(raw)
    for key_path in schema.objects():
        target = data
        for segment in key_path:
            value = target.setdefault(segment, {})
            if not isinstance(value, dict):
                break
            target = value
    return data


def _entries(error: ValidationError) -> list[ValidationEntry]:
    entries = []
    for detail in error.errors():
        key_path: list[str] = []
        for segment in detail["loc"]:
            if not isinstance(segment, str):
                break
            key_path.append(segment)
        entries.append(ValidationEntry(tuple(key_path), detail["msg"]))
    return entries


async def validate(raw: dict[str, Any], schema: Schema) -> dict[str, Any]:
    """
    Validate raw parsed data against `schema`.

    Returns:
        dict[str, Any]: Coerced data with defaults applied, keyed by declared names.

    Raises:
        SchemaValidationError: If any field fails validation.
    """
    model = get_model(schema)
    try:
        instance = model.model_validate(_with_objects(raw, schema))
    except ValidationError as error:
        entries = _entries(error)
        logger.debug("Validation failed with %d error(s): %s", len(entries), entries)
        raise SchemaValidationError(entries) from error
    return instance.model_dump(by_alias=True)
