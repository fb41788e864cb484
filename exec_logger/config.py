"""Logger configuration.

A `LoggerConfiguration` bundles where run folders live, how long they are
kept, which levels are shown and how each line is rendered. Identity fields
(executable, host, user) are resolved once when the configuration is built.

Usage:
    from exec_logger import LoggerConfiguration, LogLevel

    config = LoggerConfiguration.create(
        "logs", "log", days_stored=7, executions_stored=5, filter_level=LogLevel.INFO
    )
    config.set_message_format("{TIMESTAMP} | {LEVEL} | {MESSAGE}")
    config.set_timestamp_format("%H:%M:%S")

Only the filter level and the two templates can change after construction,
and the templates only through their validating setters.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    InstanceOf,
    ValidationError,
    field_validator,
)

from exec_logger.errors import InvalidFormatError
from exec_logger.identity import UNKNOWN, IdentitySource, resolve_identity
from exec_logger.levels import LogLevel

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path("./logs")
DEFAULT_FILE_EXTENSION = "txt"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S%z"
DEFAULT_MESSAGE_FORMAT = (
    "{TIMESTAMP} | {EXE_NAME} | {SYSTEM_NAME} | {USER_NAME} | {LEVEL} | {MESSAGE}"
)

# Placeholders that must appear in every message template, checked in order
REQUIRED_PLACEHOLDERS = ("{MESSAGE}", "{LEVEL}")


def render_timestamp(template: str, when: datetime | None = None) -> str:
    """Render a local, offset-aware timestamp with a strftime template."""
    when = when or datetime.now()
    if when.tzinfo is None:
        when = when.astimezone()
    return when.strftime(template)


def _first_validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    message = errors[0].get("msg", str(exc))
    # pydantic prefixes ValueError messages raised in validators
    return message.removeprefix("Value error, ")


class LoggerConfiguration(BaseModel):
    """Settings for one logger run."""

    model_config = ConfigDict(validate_assignment=True)

    log_dir: Path = Field(default=DEFAULT_LOG_DIR, frozen=True)
    file_extension: str = Field(default=DEFAULT_FILE_EXTENSION, frozen=True)
    days_stored: int | None = Field(default=None, ge=0, frozen=True)
    executions_stored: int | None = Field(default=None, ge=0, frozen=True)
    filter_level: InstanceOf[LogLevel] | None = None
    exe_name: str = Field(default=UNKNOWN, frozen=True)
    system_name: str = Field(default=UNKNOWN, frozen=True)
    user_name: str = Field(default=UNKNOWN, frozen=True)
    message_template: str | None = None
    timestamp_template: str | None = None

    def __init__(self, identity_source: IdentitySource | None = None, **data: Any):
        # Identity fields the caller passed win; the rest are looked up
        if not {"exe_name", "system_name", "user_name"} <= data.keys():
            identity = resolve_identity(identity_source)
            data.setdefault("exe_name", identity.exe_name)
            data.setdefault("system_name", identity.system_name)
            data.setdefault("user_name", identity.user_name)
        super().__init__(**data)

    @field_validator("message_template")
    @classmethod
    def validate_message_template(cls, v: str | None) -> str | None:
        """Require {MESSAGE} and {LEVEL} in the template."""
        if v is None:
            return None
        for placeholder in REQUIRED_PLACEHOLDERS:
            if placeholder not in v:
                raise ValueError(f"Message format must contain {placeholder}")
        return v

    @field_validator("timestamp_template")
    @classmethod
    def validate_timestamp_template(cls, v: str | None) -> str | None:
        """Require the template to render the current time."""
        if v is None:
            return None
        try:
            render_timestamp(v)
        except (ValueError, TypeError, UnicodeError) as e:
            raise ValueError(f"Invalid timestamp format: {e}") from e
        return v

    @classmethod
    def create(
        cls,
        log_dir: str | Path = DEFAULT_LOG_DIR,
        file_extension: str = DEFAULT_FILE_EXTENSION,
        days_stored: int | None = None,
        executions_stored: int | None = None,
        filter_level: LogLevel | None = None,
        *,
        identity_source: IdentitySource | None = None,
    ) -> "LoggerConfiguration":
        """Build a configuration, resolving identity from `identity_source`.

        Args:
            log_dir: Root directory holding one folder per run
            file_extension: Extension of each run's log file (without dot)
            days_stored: Delete run folders older than this many days (None keeps all)
            executions_stored: Keep at most this many runs, including the new one
            filter_level: Suppress messages less severe than this (None shows all)
            identity_source: Identity provider (default: the running process)

        Returns:
            A new LoggerConfiguration. Does not touch the filesystem.
        """
        return cls(
            identity_source=identity_source,
            log_dir=Path(log_dir),
            file_extension=file_extension,
            days_stored=days_stored,
            executions_stored=executions_stored,
            filter_level=filter_level,
        )

    def set_filter_level(self, level: LogLevel) -> None:
        """Suppress messages whose severity is below `level`."""
        self.filter_level = level

    def set_message_format(self, template: str) -> None:
        """Set the message template.

        Recognized placeholders: {TIMESTAMP}, {EXE_NAME}, {SYSTEM_NAME},
        {USER_NAME}, {LEVEL}, {MESSAGE}. Only {LEVEL} and {MESSAGE} are
        mandatory.

        Raises:
            InvalidFormatError: If the template is not a string or {MESSAGE}
                or {LEVEL} is missing. The previous template is kept.
        """
        if not isinstance(template, str):
            details = f"Message format must be a string, got {type(template).__name__}"
            logger.error(f"{details}. Message format is unchanged")
            raise InvalidFormatError(details)
        try:
            self.message_template = template
        except ValidationError as e:
            details = _first_validation_message(e)
            logger.error(f"{details}. Message format is unchanged")
            raise InvalidFormatError(details) from e

    def set_timestamp_format(self, template: str) -> None:
        """Set the strftime template used for {TIMESTAMP} (local time).

        Raises:
            InvalidFormatError: If the template is not a string or cannot
                render the current time. The previous template is kept.
        """
        if not isinstance(template, str):
            details = f"Timestamp format must be a string, got {type(template).__name__}"
            logger.error(f"{details}. Timestamp format is unchanged")
            raise InvalidFormatError(details)
        try:
            self.timestamp_template = template
        except ValidationError as e:
            details = _first_validation_message(e)
            logger.error(f"{details}. Timestamp format is unchanged")
            raise InvalidFormatError(details) from e

    @property
    def message_format(self) -> str:
        return self.message_template or DEFAULT_MESSAGE_FORMAT

    @property
    def timestamp_format(self) -> str:
        return self.timestamp_template or DEFAULT_TIMESTAMP_FORMAT

    @property
    def log_file_name(self) -> str:
        return f"execution_log.{self.file_extension}"
