"""Per-run logger.

A `RunLogger` owns one run: on construction it prunes old run folders,
creates `<log_dir>/<YYYY-MM-DD HH_MM_SS>/` and points at
`execution_log.<ext>` inside it. Each message is formatted once and written
to standard output and appended to that file.

Note on failures:
    Only construction can fail (the run folder could not be created or the
    log directory could not be listed). After that, write failures are
    reported on the diagnostics logger and never reach the caller.
"""

import logging
import sys
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, TextIO

from exec_logger.config import LoggerConfiguration, render_timestamp
from exec_logger.levels import LogLevel, is_filtered, padded
from exec_logger.retention import prune, run_folder_name

logger = logging.getLogger(__name__)

# Upper bound on one-second steps taken to find an unused run-folder name
MAX_FOLDER_NAME_ATTEMPTS = 3600

# One lock per resolved log root; guards prune + folder creation + startup line
_root_locks: dict[Path, threading.Lock] = {}
_root_locks_guard = threading.Lock()


def _lock_for_root(log_dir: Path) -> threading.Lock:
    key = log_dir.resolve()
    with _root_locks_guard:
        return _root_locks.setdefault(key, threading.Lock())


class RunLogger:
    """Logger bound to a single run folder.

    Instances are never reconfigured. Re-initializing produces a new
    RunLogger; an old one stays usable by anyone still holding it.

    Usage:
        run = RunLogger(LoggerConfiguration.create("logs", "log"))
        run.info("Started")
        run.custom("42 rows", LogLevel.custom_level("STAT", 25))
    """

    def __init__(
        self,
        config: LoggerConfiguration,
        *,
        stream: TextIO | None = None,
        diagnostics: logging.Logger | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        """Prune old runs, create this run's folder and log the startup line.

        Args:
            config: Configuration to snapshot for this run
            stream: Console stream (default: sys.stdout at write time)
            diagnostics: Logger for retention and write failures
            now: Clock returning naive local time (default: datetime.now)

        Raises:
            OSError: If the log directory cannot be listed or the run
                folder cannot be created.
        """
        self._config = config.model_copy(deep=True)
        self._stream = stream
        self._diagnostics = diagnostics or logger
        self._now = now or datetime.now
        self._lock = threading.Lock()

        # Runs starting under the same root in this process take turns, so one
        # run's retention pass never removes a folder another is still setting up
        with _lock_for_root(self._config.log_dir):
            started = self._now()
            prune(self._config, now=started, diagnostics=self._diagnostics)

            self._run_folder = self._create_run_folder(started)
            self._log_file_path = self._run_folder / self._config.log_file_name

            self.info("Logger initialized")

    def __repr__(self) -> str:
        return f"RunLogger(log_file_path={str(self._log_file_path)!r})"

    @property
    def config(self) -> LoggerConfiguration:
        return self._config

    @property
    def run_folder(self) -> Path:
        return self._run_folder

    @property
    def log_file_path(self) -> Path:
        return self._log_file_path

    def get_log_file_path(self) -> Path:
        return self._log_file_path

    def _create_run_folder(self, started: datetime) -> Path:
        """Create a uniquely named run folder.

        When another run already owns the name for this second, the
        timestamp is advanced one second at a time so the name stays a
        valid run-folder name.
        """
        log_dir = self._config.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        for offset in range(MAX_FOLDER_NAME_ATTEMPTS):
            candidate = log_dir / run_folder_name(started + timedelta(seconds=offset))
            try:
                candidate.mkdir()
            except FileExistsError:
                continue
            return candidate

        raise FileExistsError(f"No free run folder name under {log_dir} near {started}")

    def format_message(self, message: str, level: LogLevel) -> str:
        """Render `message` with the configured template.

        Placeholders are substituted in a fixed order with {MESSAGE} last,
        each value computed only when its placeholder is present. The
        result always ends with exactly one newline added by the formatter.
        """
        config = self._config
        substitutions: tuple[tuple[str, Callable[[], str]], ...] = (
            ("{TIMESTAMP}", lambda: render_timestamp(config.timestamp_format, self._now())),
            ("{EXE_NAME}", lambda: config.exe_name),
            ("{SYSTEM_NAME}", lambda: config.system_name),
            ("{USER_NAME}", lambda: config.user_name),
            ("{LEVEL}", lambda: padded(level)),
            ("{MESSAGE}", lambda: message),
        )

        text = config.message_format
        for placeholder, value in substitutions:
            if placeholder in text:
                text = text.replace(placeholder, value())

        if not text.endswith("\n"):
            text += "\n"
        return text

    def log(self, message: str, level: LogLevel) -> None:
        """Write one message to the console and the run's log file.

        Messages below the configured filter level are dropped before
        formatting. Never raises for I/O problems.
        """
        if is_filtered(level, self._config.filter_level):
            return

        line = self.format_message(message, level)

        with self._lock:
            failures = [
                failure
                for failure in (self._write_console(line), self._append_to_file(line))
                if failure
            ]

        # Reported after releasing the lock: diagnostics may route back here
        for failure in failures:
            self._diagnostics.error(failure)

    def _write_console(self, line: str) -> str | None:
        stream = self._stream or sys.stdout
        try:
            stream.write(line)
            stream.flush()
        except (OSError, ValueError) as e:
            return f"Unable to write log message to console: {e}"
        return None

    def _append_to_file(self, line: str) -> str | None:
        try:
            with self._log_file_path.open(
                "a", encoding="utf-8", errors="backslashreplace"
            ) as log_file:
                log_file.write(line)
        except (OSError, ValueError) as e:
            return f"Unable to write log message to log file {self._log_file_path}: {e}"
        return None

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
        """Log with a caller-supplied level."""
        self.log(message, level)
