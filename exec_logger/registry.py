"""Active-logger registry and module-level logging functions.

A `LoggerRegistry` holds the currently active `RunLogger`. Creating and
installing a new logger happens under a writer lock; readers take a
snapshot of the reference without locking, so a caller that fetched the old
logger keeps using it consistently after a swap.

Usage:
    import exec_logger

    exec_logger.initialize(exec_logger.LoggerConfiguration.create("logs", "log"))
    exec_logger.info("Hello")

    # Long-running processes can start a fresh run folder at any time:
    exec_logger.initialize(config)

Calls made before any successful `initialize` log "Logger not initialized"
on the diagnostics logger and do nothing else.
"""

import logging
import threading
from pathlib import Path

from exec_logger.config import LoggerConfiguration
from exec_logger.levels import LogLevel
from exec_logger.logger import RunLogger

logger = logging.getLogger(__name__)

NOT_INITIALIZED = "Logger not initialized"


class LoggerRegistry:
    """Application context owning the active RunLogger."""

    def __init__(self, diagnostics: logging.Logger | None = None):
        self._current: RunLogger | None = None
        self._swap_lock = threading.Lock()
        self._diagnostics = diagnostics

    def initialize(self, config: LoggerConfiguration, **logger_kwargs) -> RunLogger:
        """Start a new run and make it the active logger.

        Args:
            config: Configuration for the new run
            **logger_kwargs: Passed through to RunLogger (stream, now, ...)

        Returns:
            The newly installed RunLogger.

        Raises:
            OSError: If the run could not be created. The previously active
                logger, if any, stays installed.
        """
        if self._diagnostics is not None:
            logger_kwargs.setdefault("diagnostics", self._diagnostics)
        # Writers take turns so the last run created is the one left active;
        # readers never take this lock
        with self._swap_lock:
            run_logger = RunLogger(config, **logger_kwargs)
            self._current = run_logger
        return run_logger

    def current(self) -> RunLogger | None:
        """Return the active logger, or None if never initialized."""
        return self._current

    def _require(self) -> RunLogger | None:
        run_logger = self._current
        if run_logger is None:
            (self._diagnostics or logger).error(NOT_INITIALIZED)
        return run_logger

    def get_log_file_path(self) -> Path | None:
        run_logger = self._require()
        if run_logger is None:
            return None
        return run_logger.log_file_path

    def log(self, message: str, level: LogLevel) -> None:
        run_logger = self._require()
        if run_logger is not None:
            run_logger.log(message, level)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def warn(self, message: str) -> None:
        self.log(message, LogLevel.WARN)

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def trace(self, message: str) -> None:
        self.log(message, LogLevel.TRACE)

    def custom(self, message: str, level: LogLevel) -> None:
        self.log(message, level)


# Process-wide default registry behind the module-level functions
_default_registry = LoggerRegistry()


def get_registry() -> LoggerRegistry:
    """Return the process-wide default registry."""
    return _default_registry


def initialize(config: LoggerConfiguration, **logger_kwargs) -> RunLogger:
    """Start a new run on the default registry, replacing any active one."""
    return _default_registry.initialize(config, **logger_kwargs)


def current_logger() -> RunLogger | None:
    return _default_registry.current()


def get_log_file_path() -> Path | None:
    """Return the active run's log file path, or None if not initialized."""
    return _default_registry.get_log_file_path()


def info(message: str) -> None:
    _default_registry.info(message)


def error(message: str) -> None:
    _default_registry.error(message)


def warn(message: str) -> None:
    _default_registry.warn(message)


def debug(message: str) -> None:
    _default_registry.debug(message)


def trace(message: str) -> None:
    _default_registry.trace(message)


def custom(message: str, level: LogLevel) -> None:
    _default_registry.custom(message, level)


def create_custom_level(name: str, severity: int) -> LogLevel:
    """Define a level with its own name and severity. Pure constructor."""
    return LogLevel.custom_level(name, severity)
