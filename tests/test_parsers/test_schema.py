from enum import Enum

import pytest

from schemargs.exceptions import SchemaError
from schemargs.parser import Kind, OptionSpec, formalize


class Color(Enum):
    RED = "red"
    BLUE = "blue"


def test_kinds():
    schema = formalize(
        {
            "name": str,
            "count": "integer",
            "ratio": "number",
            "verbose": bool,
            "tags": list,
            "level": {"enum": ["debug", "info"]},
            "server": {"schema": {"host": str}},
        }
    )
    kinds = {spec.name: spec.kind for spec in schema}
    assert kinds == {
        "name": Kind.STRING,
        "count": Kind.NUMBER,
        "ratio": Kind.NUMBER,
        "verbose": Kind.BOOLEAN,
        "tags": Kind.ARRAY,
        "level": Kind.ENUM,
        "server": Kind.OBJECT,
    }
    assert len(schema) == 7
    assert schema.fields[1].type is int
    assert schema.fields[2].type is float


def test_enum_sources():
    assert formalize({"c": {"enum": Color}}).fields[0].enum == ("red", "blue")
    assert formalize({"c": {"enum": {"a": 1, "b": 2}}}).fields[0].enum == ("a", "b")
    assert formalize({"n": {"enum": [1, 2]}}).fields[0].type is int


def test_flag_names_and_lookup():
    schema = formalize(
        {
            "maxRetries": int,
            "server": {"type": dict, "schema": {"hostName": str}},
            "user": {"type": str, "short": "u"},
        }
    )
    assert [leaf.long_flag for leaf in schema.leaves()] == [
        "--max-retries",
        "--server-host-name",
        "--user",
    ]
    assert schema.get_flag("max-retries").key_path == ("maxRetries",)
    assert schema.get_flag("server-host-name").key_path == ("server", "hostName")
    assert schema.get_short("u").name == "user"
    assert schema.get_short("x") is None
    assert schema.objects() == [("server",)]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("6-", (6, None)),
        ("-10", (None, 10)),
        ("3-8", (3, 8)),
        ("5", (5, 5)),
        (4, (4, 4)),
        ((1, 2), (1, 2)),
        ("-5-5", (-5, 5)),
        ("0.5-1.5", (0.5, 1.5)),
    ],
)
def test_bounds(value, expected):
    assert formalize({"x": {"type": float, "range": value}}).fields[0].range == expected


def test_length_alias():
    assert formalize({"p": {"type": str, "len": "6-"}}).fields[0].length == (6, None)
    assert formalize({"p": {"type": str, "length": "-3"}}).fields[0].length == (None, 3)


def test_option_spec_declaration():
    spec = OptionSpec(key_path=("ignored",), kind=Kind.NUMBER, type=int, default=2)
    formalized = formalize({"retries": spec}).fields[0]
    assert formalized.key_path == ("retries",)
    assert formalized.kind == Kind.NUMBER
    assert formalized.default == 2


def test_formalize_is_idempotent():
    schema = formalize({"a": str})
    assert formalize(schema) is schema


@pytest.mark.parametrize(
    "schema, message",
    [
        ("not a schema", "Schema must be an object."),
        ({"a": {"kind": str}}, "Unknown schema attribute"),
        ({"a": {"type": "uuid"}}, "Invalid type 'uuid'"),
        ({"a": {"type": set}}, "Unsupported type"),
        ({"a": {"type": str, "short": "ab"}}, "must be a single character"),
        ({"a": {"enum": ["x"], "default": "y"}}, "not in allowed values"),
        ({"a": {"enum": "xy"}}, "not a string"),
        ({"a": {"enum": []}}, "must not be empty"),
        ({"a": {"type": int, "len": 3}}, "length can only be used"),
        ({"a": {"type": str, "range": 3}}, "range can only be used"),
        ({"a": {"type": int, "pattern": "x"}}, "pattern can only be used"),
        ({"a": {"type": str, "range": "a-b"}}, "is not a number"),
        ({"a": {"type": dict}}, "non-empty 'schema'"),
        ({"a": {"type": str, "schema": {"b": str}}}, "'schema' can only be used"),
        ({"a": {"schema": {"b": str}, "short": "a"}}, "cannot have a short alias"),
        ({"a": {"type": list, "items": list}}, "must be a scalar type"),
        ({"a": 42}, "Invalid declaration"),
        ({"max_retries": int, "maxRetries": int}, "Flag '--max-retries' is already used"),
        (
            {"a": {"type": str, "short": "x"}, "b": {"type": str, "short": "x"}},
            "Short alias '-x' is already used by 'a'",
        ),
        ({"server": {"schema": {"host": str}}, "server_host": str}, "already used"),
    ],
)
def test_invalid_schemas(schema, message):
    with pytest.raises(SchemaError, match=message.replace("(", r"\(")):
        formalize(schema)
