"""
Configuration Management for the Subscription Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see which storage backend is in use and
ensures configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Persistence collaborator configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUBTRACK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["json", "memory"] = Field(
        default="json",
        description="Storage backend: a JSON file or an in-memory key-value store"
    )
    data_path: Path = Field(
        default=Path("subscriptions.json"),
        description="Path of the JSON file for the 'json' backend"
    )
    key: str = Field(
        default="subscriptions",
        min_length=1,
        description="Key the collection is stored under in key-value backends"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a file write is attempted before giving up"
    )

    @field_validator('data_path')
    @classmethod
    def validate_data_path(cls, v: Path) -> Path:
        """Warn if the data directory doesn't exist (it is created on first save)."""
        if not v.parent.exists():
            import warnings
            warnings.warn(
                f"Data directory {v.parent} does not exist yet. "
                "It will be created on the first save."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency: str = Field(
        default="₽",
        min_length=1,
        max_length=10,
        description="Currency used when a draft does not name one"
    )
    urgent_threshold_days: int = Field(
        default=3,
        ge=0,
        le=365,
        description="Payments due within this many days are flagged as urgent"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )
    audit_history_size: int = Field(
        default=100,
        ge=0,
        description="How many recent audit events are kept in memory"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
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
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing failures.
    """
    results = {}

    settings = get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "app": lambda: settings.app,
    }
    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
