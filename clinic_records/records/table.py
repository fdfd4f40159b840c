"""Flat-file table operations: append, scan and column lookups."""

import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path

from .codec import decode, encode

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


class TableIOError(Exception):
    """Raised when a table file cannot be read or written."""
    pass


@contextmanager
def table_lock(path: Path):
    """Hold the process-local writer lock for one table file.

    Generating an identifier or secret and appending the row that uses it
    must happen under this lock. Other processes are not excluded.
    """
    key = Path(path).resolve()
    with _locks_guard:
        lock = _locks.setdefault(key, threading.RLock())
    with lock:
        yield


class TableScan:
    """Lazy, restartable iteration over the decoded rows of a table.

    Every iteration reopens the file, so it always reflects what is on
    disk at that moment. A missing file is an empty table.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __iter__(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace", newline="") as f:
                for line in f:
                    yield decode(line)
        except OSError as e:
            raise TableIOError(f"Failed to read {self.path}: {e}") from e


def append(path: Path, fields) -> None:
    """Append one row, creating the file if needed. Durable on return."""
    path = Path(path)
    line = encode(fields)
    with table_lock(path):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8", newline="") as f:
                f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise TableIOError(f"Failed to append to {path}: {e}") from e
    logger.info("Appended row to %s", path.name)


def scan_all(path: Path) -> TableScan:
    """All rows of a table, in file order."""
    return TableScan(path)


def _matching_rows(path: Path, column: int, value: str, min_columns: int):
    # A row must reach the looked-up column and the table's own width
    width = max(column + 1, min_columns)
    for row in scan_all(path):
        if len(row) < width:
            logger.debug("Skipping short row in %s: %r", Path(path).name, row)
            continue
        if row[column] == value:
            yield row


def find_first_by_column(
    path: Path,
    column: int,
    value: str,
    min_columns: int = 0,
) -> list[str] | None:
    """First well-formed row whose column equals value exactly, or None."""
    for row in _matching_rows(path, column, value, min_columns):
        return row
    return None


def find_all_by_column(
    path: Path,
    column: int,
    value: str,
    min_columns: int = 0,
) -> list[list[str]]:
    """Every well-formed row whose column equals value exactly, in file order."""
    return list(_matching_rows(path, column, value, min_columns))
