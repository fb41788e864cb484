"""Run-folder retention.

Every run writes into `<log_dir>/<YYYY-MM-DD HH_MM_SS>/`. Before a new run
folder is created, old ones are pruned under two independent policies:

1. Age: folders older than `days_stored` days are deleted.
2. Count: the oldest folders are deleted until at most
   `executions_stored - 1` remain, leaving room for the new run.

Folders whose names are not run timestamps are never counted or removed.
Deletion is best effort: failures are logged and the folder is retried on
the next run.
"""

import logging
import shutil
from datetime import datetime, timedelta
from pathlib import Path

from exec_logger.config import LoggerConfiguration

logger = logging.getLogger(__name__)

# Fixed folder-name pattern, independent of the configurable timestamp format
RUN_FOLDER_FORMAT = "%Y-%m-%d %H_%M_%S"


def run_folder_name(when: datetime) -> str:
    """Render the folder name for a run started at `when`."""
    return when.strftime(RUN_FOLDER_FORMAT)


def parse_run_folder_name(name: str) -> datetime | None:
    """Parse a run-folder name back into its (naive, local) start time.

    Only names that round-trip exactly through RUN_FOLDER_FORMAT are
    accepted, so "2024-1-5 1_2_3" or "2024-01-05 01_02_03 copy" are foreign.
    """
    try:
        parsed = datetime.strptime(name, RUN_FOLDER_FORMAT)
    except ValueError:
        return None
    if parsed.strftime(RUN_FOLDER_FORMAT) != name:
        return None
    return parsed


def list_run_folders(log_dir: Path) -> list[tuple[Path, datetime]]:
    """List valid run folders directly under `log_dir`, oldest first.

    A missing `log_dir` yields an empty list. Other errors while reading
    the directory propagate.

    Returns:
        (path, start time) pairs sorted by folder name.
    """
    try:
        entries = list(log_dir.iterdir())
    except FileNotFoundError:
        return []

    folders = []
    for entry in entries:
        if not entry.is_dir():
            continue
        started = parse_run_folder_name(entry.name)
        if started is None:
            continue
        folders.append((entry, started))

    folders.sort(key=lambda item: item[0].name)
    return folders


def _delete_folder(folder: Path, diagnostics: logging.Logger) -> bool:
    try:
        shutil.rmtree(folder)
    except OSError as e:
        diagnostics.error(f"Failed to delete old log folder {folder}: {e}")
        return False
    diagnostics.info(f"Deleted old log folder {folder}")
    return True


def prune_by_age(
    log_dir: Path,
    days_stored: int,
    now: datetime,
    diagnostics: logging.Logger | None = None,
) -> list[Path]:
    """Delete run folders started before `now - days_stored`.

    Returns:
        Folders that were actually deleted.
    """
    diagnostics = diagnostics or logger
    cutoff = now - timedelta(days=days_stored)

    deleted = []
    for folder, started in list_run_folders(log_dir):
        if started < cutoff and _delete_folder(folder, diagnostics):
            deleted.append(folder)
    return deleted


def prune_by_count(
    log_dir: Path,
    executions_stored: int,
    diagnostics: logging.Logger | None = None,
) -> list[Path]:
    """Delete the oldest run folders so a new run fits within the limit.

    One slot is reserved for the run about to be created. A limit of 0
    removes every existing run folder. A folder that cannot be deleted does
    not count towards the quota, so the next candidate is tried instead.

    Returns:
        Folders that were actually deleted.
    """
    diagnostics = diagnostics or logger
    folders = list_run_folders(log_dir)

    remaining = len(folders) - (executions_stored - 1)
    remaining = min(remaining, len(folders))
    if remaining <= 0:
        return []

    deleted = []
    for folder, _started in folders:
        if _delete_folder(folder, diagnostics):
            deleted.append(folder)
            remaining -= 1
        if remaining <= 0:
            break
    return deleted


def prune(
    config: LoggerConfiguration,
    now: datetime | None = None,
    diagnostics: logging.Logger | None = None,
) -> list[Path]:
    """Apply both retention policies configured in `config`.

    The age pass runs first; the count pass then re-lists the folders so
    anything already removed is not counted twice.

    Args:
        config: Configuration carrying log_dir, days_stored, executions_stored
        now: Reference time for the age policy (default: local now)
        diagnostics: Logger receiving deletion notices and failures

    Returns:
        All folders deleted by either policy.

    Raises:
        OSError: If the log directory exists but cannot be listed.
    """
    diagnostics = diagnostics or logger
    now = now or datetime.now()
    if now.tzinfo is not None:
        # Folder names are naive local times
        now = now.astimezone().replace(tzinfo=None)
    deleted: list[Path] = []

    if config.days_stored is not None:
        deleted.extend(prune_by_age(config.log_dir, config.days_stored, now, diagnostics))
    else:
        diagnostics.debug("Logger not configured to delete older executions based on date")

    if config.executions_stored is not None:
        deleted.extend(prune_by_count(config.log_dir, config.executions_stored, diagnostics))
    else:
        diagnostics.debug(
            "Logger not configured to delete older executions based on the number of executions"
        )

    return deleted
