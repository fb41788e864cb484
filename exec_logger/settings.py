"""Environment-driven logger settings.

Reads EXEC_LOGGER_* variables (optionally from a .env file) and turns them
into a LoggerConfiguration:

    EXEC_LOGGER_LOG_DIR=/var/log/myapp
    EXEC_LOGGER_FILE_EXTENSION=log
    EXEC_LOGGER_DAYS_STORED=7
    EXEC_LOGGER_EXECUTIONS_STORED=20
    EXEC_LOGGER_FILTER_LEVEL=info
    EXEC_LOGGER_MESSAGE_FORMAT="{TIMESTAMP} {LEVEL} {MESSAGE}"
    EXEC_LOGGER_TIMESTAMP_FORMAT="%H:%M:%S"
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exec_logger.config import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_LOG_DIR,
    LoggerConfiguration,
)
from exec_logger.identity import IdentitySource
from exec_logger.levels import LogLevel


class LoggerSettings(BaseSettings):
    """Logger settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="EXEC_LOGGER_", extra="ignore")

    log_dir: Path = DEFAULT_LOG_DIR
    file_extension: str = DEFAULT_FILE_EXTENSION
    days_stored: int | None = Field(default=None, ge=0)
    executions_stored: int | None = Field(default=None, ge=0)
    filter_level: str | None = None
    message_format: str | None = None
    timestamp_format: str | None = None

    @field_validator("filter_level")
    @classmethod
    def validate_filter_level(cls, v: str | None) -> str | None:
        """Accept only built-in level names."""
        if v is None or not v.strip():
            return None
        return LogLevel.from_name(v).name

    def to_configuration(
        self, identity_source: IdentitySource | None = None
    ) -> LoggerConfiguration:
        """Build a LoggerConfiguration from these settings.

        Raises:
            InvalidFormatError: If a configured template is rejected.
        """
        config = LoggerConfiguration.create(
            self.log_dir,
            self.file_extension,
            days_stored=self.days_stored,
            executions_stored=self.executions_stored,
            filter_level=LogLevel.from_name(self.filter_level) if self.filter_level else None,
            identity_source=identity_source,
        )
        if self.message_format:
            config.set_message_format(self.message_format)
        if self.timestamp_format:
            config.set_timestamp_format(self.timestamp_format)
        return config


@lru_cache
def get_settings(env_file: str | None = None) -> LoggerSettings:
    """Load .env (if present) and return cached settings.

    Variables already set in the environment take precedence over the file.
    """
    load_dotenv(env_file)
    return LoggerSettings()
