import pytest

from schemargs.exceptions import (
    MissingArgumentError,
    SchemaError,
    UnexpectedArgumentError,
    UnknownOptionError,
    ValidationFailedError,
)
from schemargs.parser import ArgumentsParser, Variadic
from schemargs.signals import HelpSignal

LOGIN_SCHEMA = {
    "username": {"type": str, "required": True},
    "password": {"type": str, "required": True, "len": "6-"},
}


def make_parser(args):
    return ArgumentsParser(args, program="chat")


@pytest.mark.asyncio
async def test_login_options():
    parser = make_parser(["--username", "alice", "--password", "secret1"])
    result = await parser.options(LOGIN_SCHEMA)
    assert result.data == {"username": "alice", "password": "secret1"}
    assert result.rest == []
    assert result.non_options is None
    assert result.to_dict() == {
        "username": "alice",
        "password": "secret1",
        "rest": [],
        "non_options": None,
    }
    assert result["username"] == "alice"
    assert result.password == "secret1"
    assert "username" in result


@pytest.mark.asyncio
async def test_missing_required_option():
    parser = make_parser(["--username", "alice"])
    with pytest.raises(ValidationFailedError) as exc_info:
        await parser.options(LOGIN_SCHEMA)

    error = exc_info.value
    assert error.message == "password: Field required"
    assert [entry.key_path for entry in error.errors] == [("password",)]
    assert error.help_page.usage == "Usage: chat <options>"
    assert error.help_page.error == "Error: password: Field required"


@pytest.mark.asyncio
async def test_password_too_short():
    parser = make_parser(["--username", "alice", "--password", "abc"])
    with pytest.raises(ValidationFailedError) as exc_info:
        await parser.options(LOGIN_SCHEMA)
    assert exc_info.value.message.startswith("password: String should have at least 6")


@pytest.mark.asyncio
async def test_unexpected_argument_is_first_leftover():
    parser = make_parser(["extra1", "--verbose", "extra2"])
    with pytest.raises(UnexpectedArgumentError) as exc_info:
        await parser.options({"verbose": bool}, variadic="deny")
    assert exc_info.value.message == "Unexpected argument: extra1."


@pytest.mark.asyncio
async def test_variadic_allow_keeps_rest():
    parser = make_parser(["extra1", "--verbose", "extra2"])
    result = await parser.options({"verbose": bool}, variadic=Variadic.ALLOW)
    assert result["verbose"] is True
    assert result.rest == ["extra1", "extra2"]


@pytest.mark.asyncio
async def test_variadic_ignore_discards_rest():
    parser = make_parser(["extra1", "--verbose"])
    result = await parser.options({"verbose": bool}, variadic="IGNORE")
    assert result["verbose"] is True
    assert result.rest == []


@pytest.mark.asyncio
async def test_invalid_variadic_policy():
    parser = make_parser([])
    with pytest.raises(SchemaError):
        await parser.options({"verbose": bool}, variadic="sometimes")


@pytest.mark.asyncio
async def test_boolean_does_not_consume_next_token():
    parser = make_parser(["--verbose", "--name", "ann"])
    result = await parser.options({"verbose": bool, "name": str})
    assert result.data == {"verbose": True, "name": "ann"}

    parser = make_parser(["--verbose", "file.txt"])
    result = await parser.options({"verbose": bool}, variadic="allow")
    assert result["verbose"] is True
    assert result.rest == ["file.txt"]


@pytest.mark.asyncio
async def test_boolean_defaults():
    parser = make_parser([])
    result = await parser.options({"verbose": bool, "color": {"type": bool, "default": True}})
    assert result.data == {"verbose": None, "color": True}


@pytest.mark.asyncio
async def test_non_options_are_never_parsed():
    parser = make_parser(["--verbose", "--", "--not-an-option", "-x", "text"])
    result = await parser.options({"verbose": bool})
    assert result["verbose"] is True
    assert result.non_options == "--not-an-option -x text"
    assert result.rest == []


@pytest.mark.asyncio
async def test_empty_non_options():
    parser = make_parser(["--"])
    result = await parser.options({"verbose": bool})
    assert result.non_options == ""


@pytest.mark.asyncio
async def test_unknown_option():
    parser = make_parser(["--user", "alice"])
    with pytest.raises(UnknownOptionError) as exc_info:
        await parser.options(LOGIN_SCHEMA)
    assert exc_info.value.message == "Unknown option: --user."
    assert exc_info.value.help_page.body is not None


@pytest.mark.asyncio
async def test_missing_argument_at_end():
    parser = make_parser(["--username"])
    with pytest.raises(MissingArgumentError) as exc_info:
        await parser.options(LOGIN_SCHEMA)
    assert exc_info.value.message == "Argument missing for option: --username."


@pytest.mark.asyncio
async def test_missing_argument_before_long_option():
    parser = make_parser(["--username", "--password", "secret1"])
    with pytest.raises(MissingArgumentError):
        await parser.options(LOGIN_SCHEMA)


@pytest.mark.asyncio
async def test_value_may_start_with_single_dash():
    parser = make_parser(["--offset", "-5"])
    result = await parser.options({"offset": int})
    assert result["offset"] == -5


@pytest.mark.asyncio
async def test_short_aliases():
    schema = {
        "username": {"type": str, "short": "u"},
        "verbose": {"type": bool, "short": "v"},
    }
    parser = make_parser(["-v", "-u", "alice"])
    result = await parser.options(schema)
    assert result.data == {"username": "alice", "verbose": True}


@pytest.mark.asyncio
async def test_unknown_short_alias_and_bundles():
    schema = {"verbose": {"type": bool, "short": "v"}, "quiet": {"type": bool, "short": "q"}}
    with pytest.raises(UnknownOptionError):
        await make_parser(["-x"]).options(schema)
    with pytest.raises(UnknownOptionError):
        await make_parser(["-vq"]).options(schema)


@pytest.mark.asyncio
async def test_short_alias_does_not_match_long_name():
    schema = {"v": bool, "verbose": {"type": bool, "short": "x"}}
    result = await make_parser(["-x"]).options(schema)
    assert result.data == {"v": None, "verbose": True}
    with pytest.raises(UnknownOptionError):
        await make_parser(["--x"]).options(schema)


@pytest.mark.asyncio
async def test_repeated_option_rejected_for_scalar():
    parser = make_parser(["--name", "a", "--name", "b"])
    with pytest.raises(ValidationFailedError) as exc_info:
        await parser.options({"name": str})
    assert exc_info.value.message.startswith("name: Input should be a valid string")


@pytest.mark.asyncio
async def test_repeated_option_accumulates_for_array():
    parser = make_parser(["--tag", "a", "--tag", "b", "--tag", "c"])
    result = await parser.options({"tag": list})
    assert result["tag"] == ["a", "b", "c"]

    parser = make_parser(["--tag", "a"])
    result = await parser.options({"tag": list})
    assert result["tag"] == ["a"]


@pytest.mark.asyncio
async def test_typed_array_items():
    parser = make_parser(["--port", "80", "--port", "443"])
    result = await parser.options({"port": {"type": list, "items": int}})
    assert result["port"] == [80, 443]


@pytest.mark.asyncio
async def test_numbers_are_coerced():
    parser = make_parser(["--retries", "5", "--ratio", "0.5"])
    result = await parser.options(
        {"retries": {"type": int, "default": 3}, "ratio": "number"}
    )
    assert result.data == {"retries": 5, "ratio": 0.5}


@pytest.mark.asyncio
async def test_number_out_of_range():
    parser = make_parser(["--retries", "50"])
    with pytest.raises(ValidationFailedError) as exc_info:
        await parser.options({"retries": {"type": int, "range": "0-10"}})
    assert exc_info.value.message.startswith("retries: Input should be less than")


@pytest.mark.asyncio
async def test_enum_values():
    schema = {"level": {"enum": ["debug", "info"], "default": "info"}}
    result = await make_parser([]).options(schema)
    assert result["level"] == "info"

    result = await make_parser(["--level", "debug"]).options(schema)
    assert result["level"] == "debug"

    with pytest.raises(ValidationFailedError) as exc_info:
        await make_parser(["--level", "warn"]).options(schema)
    assert exc_info.value.message == "level: Input should be one of `debug`, `info`"


@pytest.mark.asyncio
async def test_kebab_case_option_names():
    parser = make_parser(["--max-retries", "2"])
    result = await parser.options({"max_retries": int})
    assert result.data == {"max_retries": 2}


@pytest.mark.asyncio
async def test_validation_error_uses_kebab_name():
    parser = make_parser(["--max-retries", "many"])
    with pytest.raises(ValidationFailedError) as exc_info:
        await parser.options({"max_retries": int})
    assert exc_info.value.message.startswith("max-retries: ")


@pytest.mark.asyncio
async def test_nested_options():
    schema = {
        "server": {
            "type": dict,
            "schema": {
                "host": {"type": str, "default": "localhost"},
                "port": {"type": int, "default": 6667},
            },
        }
    }
    result = await make_parser([]).options(schema)
    assert result["server"] == {"host": "localhost", "port": 6667}

    parser = make_parser(["--server-host", "example.com", "--server-port", "8080"])
    result = await parser.options(schema)
    assert result["server"] == {"host": "example.com", "port": 8080}


@pytest.mark.asyncio
async def test_nested_required_option():
    schema = {"server": {"type": dict, "schema": {"host": {"type": str, "required": True}}}}
    with pytest.raises(ValidationFailedError) as exc_info:
        await make_parser([]).options(schema)
    assert exc_info.value.message == "server: Field required"
    assert exc_info.value.errors[0].key_path == ("server", "host")


@pytest.mark.asyncio
async def test_help_option():
    parser = make_parser(["--help", "--username", "alice"])
    with pytest.raises(HelpSignal) as exc_info:
        await parser.options(LOGIN_SCHEMA)
    page = exc_info.value.help_page
    assert page.usage == "Usage: chat <options>"
    assert page.error is None
    assert [row.key for row in page.body.rows] == ["--username", "--password"]


@pytest.mark.asyncio
async def test_help_only_as_first_token():
    parser = make_parser(["--username", "alice", "--help"])
    with pytest.raises(UnknownOptionError):
        await parser.options(LOGIN_SCHEMA)


@pytest.mark.asyncio
async def test_on_error_aborts():
    from schemargs.exceptions import AbortError

    result = await make_parser(["--username", "a", "--password", "secret1"]).options(
        LOGIN_SCHEMA
    )
    with pytest.raises(AbortError) as exc_info:
        result.on_error(ValueError("Login refused"))
    assert str(exc_info.value) == "Login refused"
    assert isinstance(exc_info.value.__cause__, ValueError)
