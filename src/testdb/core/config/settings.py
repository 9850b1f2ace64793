"""
Application configuration management.

Handles loading the tool's own configuration from environment variables and
an optional .env file. Test database overrides themselves live in the
property store, not here.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ApplicationSettings(BaseSettings):
    """Application configuration."""

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        v = str(v).upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}")
        return str(v)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


class PropertySourceSettings(BaseSettings):
    """Where the test database properties are read from."""

    properties_file: Path = Field(
        default=Path("application-test.yaml"),
        alias="TESTDB_PROPERTIES_FILE",
        description="YAML or .properties file holding ebean.test.* overrides",
    )
    ignore_missing_file: bool = Field(
        default=True, alias="TESTDB_IGNORE_MISSING_FILE"
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings class that combines all configuration sections."""

    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    properties: PropertySourceSettings = Field(
        default_factory=PropertySourceSettings
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def load_settings() -> Settings:
    """
    Load settings from environment variables and .env file.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get cached settings instance (singleton pattern).

    Returns:
        Settings: Cached settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
