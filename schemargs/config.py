# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for schemargs parsers.

A config file customizes the placeholder characters and message templates of a
command line without code changes. YAML and TOML are supported:

    # schemargs.yaml
    placeholder: "[]"
    log_mode: cli
    strings:
      help:
        usage: "Utilisation :"
      commands:
        not_found: "<command> : commande introuvable"
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from schemargs.exceptions import ConfigError, SchemaError
from schemargs.logger import logger
from schemargs.strings import StringTable, flatten


class ParserConfig(BaseModel):
    """Validated contents of a schemargs config file."""

    model_config = ConfigDict(extra="forbid")

    placeholder: str = "<>"
    strings: dict[str, Any] = Field(default_factory=dict)
    log_mode: Literal["cli", "json"] | None = None

    @field_validator("placeholder")
    @classmethod
    def validate_placeholder(cls, value: str) -> str:
        if len(value) != 2:
            raise ValueError("placeholder must be exactly two characters")
        return value

    @field_validator("strings")
    @classmethod
    def validate_strings(cls, value: dict[str, Any]) -> dict[str, Any]:
        try:
            StringTable(value)
        except SchemaError as error:
            raise ValueError(str(error)) from error
        return flatten(value)


def find_config() -> Path | None:
    candidates = [
        Path.cwd() / "schemargs.yaml",
        Path.cwd() / "schemargs.toml",
        Path.cwd() / ".schemargs.yaml",
        Path.cwd() / ".schemargs.toml",
    ]
    if os.environ.get("SCHEMARGS_CONFIG"):
        candidates.append(Path(os.environ["SCHEMARGS_CONFIG"]))
    candidates.extend(
        [
            Path.home() / ".config" / "schemargs" / "schemargs.yaml",
            Path.home() / ".config" / "schemargs" / "schemargs.toml",
        ]
    )
    return next((path for path in candidates if path.is_file()), None)


def load_config(path: str | Path) -> ParserConfig:
    """
    Load a YAML or TOML config file.

    Raises:
        ConfigError: If the file is missing, unreadable, of an unknown type, or
            does not describe a valid `ParserConfig`.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config file type: {path.suffix}")
    except (OSError, yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not read config file {path}: {error}") from error

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = ParserConfig.model_validate(raw)
    except ValidationError as error:
        raise ConfigError(f"Invalid config file {path}:\n{error}") from error
    logger.debug("Loaded config from %s", path)
    return config
