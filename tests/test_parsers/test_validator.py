import gc
import weakref

import pytest

from schemargs.exceptions import SchemaValidationError
from schemargs.parser import ArgumentsParser, formalize
from schemargs.parser.options import accumulate, validation_message
from schemargs.parser.validator import ValidationEntry, get_model, validate


@pytest.mark.asyncio
async def test_validate_applies_defaults_and_coercion():
    schema = formalize(
        {
            "port": {"type": int, "default": 8080},
            "ratio": float,
            "tags": {"type": list, "default": ["a"]},
        }
    )
    data = await validate({"ratio": "0.25"}, schema)
    assert data == {"port": 8080, "ratio": 0.25, "tags": ["a"]}


@pytest.mark.asyncio
async def test_defaults_are_copied():
    schema = formalize({"tags": {"type": list, "default": ["a"]}})
    first = await validate({}, schema)
    first["tags"].append("b")
    second = await validate({}, schema)
    assert second == {"tags": ["a"]}


@pytest.mark.asyncio
async def test_single_value_becomes_list():
    schema = formalize({"tags": list})
    assert await validate({"tags": "x"}, schema) == {"tags": ["x"]}


@pytest.mark.asyncio
async def test_array_length():
    schema = formalize({"tags": {"type": list, "len": "-2"}})
    with pytest.raises(SchemaValidationError) as exc_info:
        await validate({"tags": ["a", "b", "c"]}, schema)
    assert exc_info.value.errors[0].key_path == ("tags",)


@pytest.mark.asyncio
async def test_array_enum_items():
    schema = formalize({"colors": {"type": list, "enum": ["red", "blue"]}})
    assert await validate({"colors": ["red"]}, schema) == {"colors": ["red"]}
    with pytest.raises(SchemaValidationError) as exc_info:
        await validate({"colors": ["red", "green"]}, schema)
    assert exc_info.value.errors == [
        ValidationEntry(("colors",), "Input should be one of `red`, `blue`")
    ]


@pytest.mark.asyncio
async def test_multiple_errors_are_reported_in_order():
    schema = formalize(
        {
            "name": {"type": str, "required": True},
            "server": {"schema": {"port": {"type": int, "required": True}}},
        }
    )
    with pytest.raises(SchemaValidationError) as exc_info:
        await validate({}, schema)
    errors = exc_info.value.errors
    assert [entry.key_path for entry in errors] == [("name",), ("server", "port")]
    assert str(errors[1]) == "server.port: Field required"
    assert validation_message(errors) == (
        "name: Field required; server: Field required"
    )


def test_model_is_cached_per_schema():
    schema = formalize({"name": str})
    assert schema.model is None
    model = get_model(schema)
    assert get_model(schema) is model
    assert schema.model is model


@pytest.mark.asyncio
async def test_models_are_released_with_their_schema():
    references = []
    for _ in range(5):
        parser = ArgumentsParser(["--name", "ann"], program="chat")
        schema = formalize({"name": str})
        assert (await parser.options(schema))["name"] == "ann"
        assert schema.model is not None
        references.append(weakref.ref(schema))
        del schema
    gc.collect()
    assert all(reference() is None for reference in references)


def test_accumulate():
    data = {}
    accumulate(data, ("tag",), "a")
    assert data == {"tag": "a"}
    accumulate(data, ("tag",), "b")
    assert data == {"tag": ["a", "b"]}
    accumulate(data, ("tag",), "c")
    assert data == {"tag": ["a", "b", "c"]}
    accumulate(data, ("server", "host"), "x")
    assert data["server"] == {"host": "x"}
