"""Per-execution logging with automatic housekeeping.

Each run of a process gets its own timestamped folder holding one log file.
Old run folders are removed by age and/or count when a new run starts.

Usage:
    import exec_logger
    from exec_logger import LoggerConfiguration, LogLevel

    config = LoggerConfiguration.create(
        "logs", "log", days_stored=7, executions_stored=5, filter_level=LogLevel.INFO
    )
    exec_logger.initialize(config)

    exec_logger.info("Started")
    stat = exec_logger.create_custom_level("STAT", 35)
    exec_logger.custom("1200 rows loaded", stat)

Log files are created as:
    logs/2024-05-01 09_30_00/execution_log.log
"""

from exec_logger.config import (
    DEFAULT_MESSAGE_FORMAT,
    DEFAULT_TIMESTAMP_FORMAT,
    LoggerConfiguration,
)
from exec_logger.errors import ExecLoggerError, InvalidFormatError
from exec_logger.handlers import ExecLoggerHandler, install_handler
from exec_logger.identity import EnvironmentIdentity, Identity, IdentitySource
from exec_logger.levels import LogLevel
from exec_logger.logger import RunLogger
from exec_logger.registry import (
    LoggerRegistry,
    create_custom_level,
    current_logger,
    custom,
    debug,
    error,
    get_log_file_path,
    get_registry,
    info,
    initialize,
    trace,
    warn,
)
from exec_logger.settings import LoggerSettings, get_settings

__all__ = [
    "initialize",
    "info",
    "error",
    "warn",
    "debug",
    "trace",
    "custom",
    "create_custom_level",
    "get_log_file_path",
    "current_logger",
    "get_registry",
    "LoggerRegistry",
    "RunLogger",
    "LoggerConfiguration",
    "LoggerSettings",
    "get_settings",
    "LogLevel",
    "ExecLoggerHandler",
    "install_handler",
    "IdentitySource",
    "EnvironmentIdentity",
    "Identity",
    "ExecLoggerError",
    "InvalidFormatError",
    "DEFAULT_MESSAGE_FORMAT",
    "DEFAULT_TIMESTAMP_FORMAT",
]
