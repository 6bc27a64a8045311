"""
Configuration Management for Pocket Ledger

Settings come from LEDGER_* and APP_* environment variables (or a .env
file) through pydantic-settings.

DESIGN DECISION: The ledger file path is configuration, not a global.
Every store is constructed with an explicit path taken from here (or
passed in directly), so tests and embedding callers can point the core
at any file.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Flat-file ledger storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    file_path: Path = Field(
        default=Path("transactions.csv"),
        description="Path of the pipe-delimited ledger file"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding of the ledger file"
    )

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v: Path) -> Path:
        """A directory can never be a ledger file."""
        if v.is_dir():
            raise ValueError(f"Ledger path {v} is a directory")
        return v


class AppSettings(BaseSettings):
    """
    Behaviour of the shell and the query layer.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for log output (DEBUG, INFO, WARNING, ...)"
    )

    # Presentation
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol printed in front of totals"
    )

    # Query behaviour
    amount_tolerance: Decimal = Field(
        default=Decimal("0.0001"),
        ge=0,
        description="Absolute tolerance for exact-amount searches"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unknown log level: {v}. Allowed: {sorted(allowed)}")
        return level


class Settings(BaseSettings):
    """
    Root settings object; each section is re-read on access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Process-wide settings instance.

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Load every settings section once, collecting failures.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for each section that failed.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except ValueError as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
