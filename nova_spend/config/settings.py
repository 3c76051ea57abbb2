"""
Configuration Management for Nova Spend

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Where data lives, what the records are called and how loud the logs are
can all be changed without touching the services.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NOVA_SPEND_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".nova-spend",
        description="Directory holding the store file and backups"
    )
    file_name: str = Field(
        default="storage.json",
        min_length=1,
        description="Name of the JSON store file inside data_dir"
    )
    key_prefix: str = Field(
        default="app",
        description="Prefix for record keys (appSettings, appStats, ...)"
    )

    @field_validator('key_prefix')
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        """Record keys are camelCase, so the prefix must not contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Key prefix cannot contain whitespace")
        return v

    @property
    def store_path(self) -> Path:
        """Full path of the JSON store file."""
        return self.data_dir / self.file_name


class RuntimeSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOVA_SPEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = Field(
        default="nova-spend",
        min_length=1,
        description="Application name, used for the backup filename"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False renders for the console)"
    )

    # Budget notifications
    budget_warn_at_percent: int = Field(
        default=80,
        ge=1,
        le=100,
        description="Warn when this percentage of the monthly budget is spent"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def backup_filename(self) -> str:
        """Filename used for exported backups."""
        return f"{self.app_name}-backup.json"

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class TrackerConfig(BaseSettings):
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
    def runtime(self) -> RuntimeSettings:
        return RuntimeSettings()


@lru_cache()
def get_config() -> TrackerConfig:
    """
    Get application configuration (cached).

    Call get_config.cache_clear() to reload if needed.
    """
    return TrackerConfig()
