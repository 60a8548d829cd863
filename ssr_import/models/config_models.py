from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the SSR spreadsheet importer.

These are produced by ``ssr_import.config.loader.load_config`` after schema
validation; everything optional has a default so a run can proceed without a
config file at all.
"""

DEFAULT_FAMILY = "public_health"
DEFAULT_INPUT_FILE = "publichealth.xlsx"
DEFAULT_OUTPUT_DIRECTORY = "."


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    family: str = DEFAULT_FAMILY  # document family (column layout, regexes, categories)
    sheet: str | int = 0  # sheet name or index, first sheet by default
    title: str | None = None  # overrides the family title
    year: str | None = None  # overrides the family year
    input_file: str = DEFAULT_INPUT_FILE
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    timezone: str = "UTC"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
