"""Bridge from the standard `logging` module into the active run.

`ExecLoggerHandler` forwards stdlib log records to whichever RunLogger is
currently installed in a registry, so libraries that use
`logging.getLogger(__name__)` end up in the same run folder.

Usage:
    from exec_logger.handlers import install_handler

    install_handler()  # root logger
    logging.getLogger("httpx").warning("retrying")  # -> WARN line in the run log

Records are dropped while no logger is installed. Records from exec_logger
itself are skipped, and so is any record emitted while this handler is
already forwarding on the same thread, so write failures reported by a
RunLogger cannot loop back into it.
"""

import logging
import threading

from exec_logger.levels import LogLevel
from exec_logger.registry import LoggerRegistry, get_registry

# Diagnostics from this package are never forwarded into a run
PACKAGE_LOGGER = "exec_logger"

# Checked in order: first threshold the record reaches wins
_LEVEL_MAP = (
    (logging.ERROR, LogLevel.ERROR),
    (logging.WARNING, LogLevel.WARN),
    (logging.INFO, LogLevel.INFO),
    (logging.DEBUG, LogLevel.DEBUG),
)


def level_for_record(levelno: int) -> LogLevel:
    """Map a stdlib level number to a LogLevel.

    CRITICAL and ERROR map to ERROR; anything below DEBUG maps to TRACE.
    """
    for threshold, level in _LEVEL_MAP:
        if levelno >= threshold:
            return level
    return LogLevel.TRACE


class ExecLoggerHandler(logging.Handler):
    """Handler writing records through a registry's active RunLogger.

    The default formatter renders the message only; timestamp, identity and
    level come from the run's own message template.
    """

    def __init__(self, registry: LoggerRegistry | None = None, level: int = logging.NOTSET):
        """Initialize the handler.

        Args:
            registry: Registry to resolve the active logger from
                (default: the process-wide registry at emit time)
            level: Minimum stdlib level handled
        """
        super().__init__(level)
        self._registry = registry
        self._forwarding = threading.local()
        self.setFormatter(logging.Formatter("%(message)s"))

    @property
    def registry(self) -> LoggerRegistry:
        return self._registry or get_registry()

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a record to the active logger, if any."""
        if record.name.partition(".")[0] == PACKAGE_LOGGER:
            return
        if getattr(self._forwarding, "active", False):
            return
        self._forwarding.active = True
        try:
            run_logger = self.registry.current()
            if run_logger is None:
                return
            run_logger.log(self.format(record), level_for_record(record.levelno))
        except Exception:
            self.handleError(record)
        finally:
            self._forwarding.active = False


def install_handler(
    logger_name: str | None = None,
    registry: LoggerRegistry | None = None,
    level: int = logging.NOTSET,
) -> ExecLoggerHandler:
    """Attach an ExecLoggerHandler to a stdlib logger.

    Safe to call multiple times: an existing handler on that logger is
    returned instead of adding a second one.

    Args:
        logger_name: Stdlib logger to attach to (default: root)
        registry: Registry passed to the handler
        level: Minimum stdlib level handled

    Returns:
        The attached handler.
    """
    target = logging.getLogger(logger_name)
    for handler in target.handlers:
        if isinstance(handler, ExecLoggerHandler):
            return handler

    handler = ExecLoggerHandler(registry, level)
    target.addHandler(handler)
    return handler
