from __future__ import annotations

import json
from datetime import UTC, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ssr_import.models.config_models import (
    DEFAULT_FAMILY,
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_DIRECTORY,
    DatabaseConfig,
    ImportConfig,
)

"""Config loader.

Responsibilities:
- Load YAML (config/import.yml by default)
- Validate against the packaged JSON schema (unknown keys rejected)
- Apply defaults (family=public_health, timezone=UTC, ...)
"""

DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _load_schema() -> dict[str, Any]:
    try:
        return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config schema missing from the package: {SCHEMA_PATH}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"config schema is not valid JSON: {e}") from e


def _check_against_schema(data: dict[str, Any]) -> None:
    """Reject unknown keys and wrong value types before any default applies."""
    try:
        jsonschema.validate(data, _load_schema())
    except ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"config validation failed at {where}: {e.message}") from e


def resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name}") from e


def config_from_dict(data: dict[str, Any]) -> ImportConfig:
    _check_against_schema(data)

    # schema guarantees only DatabaseConfig field names appear here
    db = DatabaseConfig(**(data.get("database") or {}))
    tz = data.get("timezone", "UTC")
    resolve_timezone(tz)

    year = data.get("year")
    return ImportConfig(
        family=data.get("family", DEFAULT_FAMILY),
        sheet=data.get("sheet", 0),
        title=data.get("title"),
        year=str(year) if year is not None else None,
        input_file=data.get("input_file", DEFAULT_INPUT_FILE),
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        timezone=tz,
        database=db,
    )


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return config_from_dict(data)


def load_config_or_default(path: Path | None) -> ImportConfig:
    """Explicit paths must exist; the default path is optional."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportConfig()
