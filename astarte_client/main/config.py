"""
Client Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings come from environment variables, .env files and default values;
the AppEngine token may also be read from a secret file (ASTARTE_TOKEN_FILE).
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from astarte_client.shared import DEFAULT_PAGE_SIZE, EnumEnvironment, EnumLogLevel
from astarte_client.shared.env import load_secret_file_variables


class AppEngineSettings(BaseSettings):
    """AppEngine connection settings."""

    appengine_url: str = Field(
        default="http://localhost:4002", description="AppEngine API base URL"
    )
    realm: str = Field(default="test", description="Realm every request targets")
    token: str = Field(default="", description="Bearer token for AppEngine")
    timeout: float = Field(
        default=30.0, gt=0, description="HTTP request timeout in seconds"
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=0,
        description="Default page size for datastream and device paginators",
    )

    model_config = SettingsConfigDict(
        env_prefix="ASTARTE_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    json_output: Optional[bool] = Field(
        default=None,
        description="Force JSON (true) or console (false) rendering",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main client settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Client environment"
    )

    appengine: AppEngineSettings = Field(default_factory=AppEngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get client settings instance Factory.

    Secret files are resolved first so that ASTARTE_TOKEN_FILE is honoured.
    Mocked in tests to provide settings per environment.
    """
    load_secret_file_variables()
    return AppSettings()
