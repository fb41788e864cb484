"""
Pytest configuration for exec_logger tests.

Every test gets a fresh process-wide registry so module-level functions
(`exec_logger.info`, ...) start uninitialized, plus helpers for building a
log root with pre-existing run folders.

Usage:
    pytest testing/
    pytest testing/test_retention.py -k count
"""

from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest

from exec_logger import registry
from exec_logger.config import LoggerConfiguration
from exec_logger.registry import LoggerRegistry
from exec_logger.retention import run_folder_name

SETTINGS_ENV_VARS = (
    "EXEC_LOGGER_LOG_DIR",
    "EXEC_LOGGER_FILE_EXTENSION",
    "EXEC_LOGGER_DAYS_STORED",
    "EXEC_LOGGER_EXECUTIONS_STORED",
    "EXEC_LOGGER_FILTER_LEVEL",
    "EXEC_LOGGER_MESSAGE_FORMAT",
    "EXEC_LOGGER_TIMESTAMP_FORMAT",
)


class FixedIdentity:
    """Identity source with predictable values."""

    def exe_name(self) -> str:
        return "app.py"

    def hostname(self) -> str:
        return "build-host"

    def username(self) -> str:
        return "alice"


@pytest.fixture(autouse=True)
def fresh_registry(monkeypatch: pytest.MonkeyPatch) -> Generator[LoggerRegistry, None, None]:
    """Replace the process-wide registry for the duration of a test."""
    fresh = LoggerRegistry()
    monkeypatch.setattr(registry, "_default_registry", fresh)
    yield fresh


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset EXEC_LOGGER_* variables and remove anything a test sets later."""
    for name in SETTINGS_ENV_VARS:
        # setenv first so teardown deletes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def identity() -> FixedIdentity:
    return FixedIdentity()


@pytest.fixture
def log_root(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def make_config(log_root: Path, identity: FixedIdentity) -> Callable[..., LoggerConfiguration]:
    """Factory for configurations rooted at the test's log directory."""

    def _make(**kwargs) -> LoggerConfiguration:
        kwargs.setdefault("log_dir", log_root)
        kwargs.setdefault("file_extension", "log")
        return LoggerConfiguration.create(identity_source=identity, **kwargs)

    return _make


@pytest.fixture
def make_run_folder(log_root: Path) -> Callable[[datetime], Path]:
    """Create a run folder (with a log file inside) for the given start time."""

    def _make(when: datetime) -> Path:
        folder = log_root / run_folder_name(when)
        folder.mkdir(parents=True)
        (folder / "execution_log.log").write_text("old run\n", encoding="utf-8")
        return folder

    return _make
