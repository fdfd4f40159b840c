"""Role-prefixed identifiers and random secrets, unique within a table."""

import logging
import secrets
import string
from pathlib import Path

from .schema import ID_CEILING, ID_COLUMN, SECRET_COLUMN, SECRET_LENGTH
from .table import scan_all

logger = logging.getLogger(__name__)

SECRET_ALPHABET = string.ascii_letters + string.digits


class ExhaustedRangeError(Exception):
    """Raised when every identifier for a prefix is already taken."""
    pass


def _column_values(path: Path, column: int) -> set[str]:
    return {row[column] for row in scan_all(path) if len(row) > column}


def generate_identifier(prefix: str, path: Path) -> str:
    """
    Return the first unused identifier for a prefix, e.g. P0001.

    Existing identifiers are read from the first column of the table at
    call time, so numbering survives restarts and fills gaps.

    Raises:
        ExhaustedRangeError: all sequence numbers up to the ceiling are used
    """
    existing = _column_values(path, ID_COLUMN)
    for i in range(1, ID_CEILING + 1):
        candidate = f"{prefix}{i:04d}"
        if candidate not in existing:
            return candidate
    logger.error("No %s identifiers left in %s", prefix, Path(path).name)
    raise ExhaustedRangeError(f"No available {prefix} IDs")


def _draw_secret() -> str:
    return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(SECRET_LENGTH))


def generate_secret(path: Path) -> str:
    """Return a random alphanumeric secret not already used in the table."""
    existing = _column_values(path, SECRET_COLUMN)
    secret = _draw_secret()
    while secret in existing:
        secret = _draw_secret()
    return secret
