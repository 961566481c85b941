"""Environment-driven settings for dbfixture.

``FixtureSettings`` holds the handful of knobs an application or the CLI
needs around the loader: which dialect to use, where the SQLite database
lives, how to decode fixture files and how to log.

Examples:
    >>> from dbfixture.settings import FixtureSettings
    >>> settings = FixtureSettings()
    >>> settings.dialect
    'sqlite'

Environment variables use the ``DBFIXTURE_`` prefix
(``DBFIXTURE_DIALECT``, ``DBFIXTURE_LOG_LEVEL``, ...) and may also be placed
in a ``.env`` file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FixtureSettings(BaseSettings):
    """Settings shared by the CLI and embedding applications.

    Fields
    ──────
    dialect    : Registered driver name used when none is given explicitly
    database   : SQLite database file used by the CLI
    encoding   : Text encoding of fixture files
    log_level  : Structlog log level
    json_logs  : Render logs as JSON instead of console output
    """

    model_config = SettingsConfigDict(
        env_prefix="DBFIXTURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dialect: str = "sqlite"
    database: Path = Field(
        default=Path("dbfixture.db"),
        description="SQLite database file used by the CLI",
    )
    encoding: str = "utf-8"

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool = False

    @field_validator("dialect")
    @classmethod
    def _lower_dialect(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level
