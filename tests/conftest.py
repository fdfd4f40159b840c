"""Shared pytest fixtures."""

import pytest

from clinic_records.records import DirectoryService


@pytest.fixture
def directory(tmp_path):
    """A directory service over an empty data directory."""
    return DirectoryService(tmp_path)


@pytest.fixture
def write_lines():
    """Write raw lines to a table file, bypassing the codec."""
    def _write(path, lines):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="") as f:
            for line in lines:
                f.write(line + "\n")
    return _write


@pytest.fixture
def person_line():
    """Build a well-formed 10-column person row."""
    def _line(person_id, secret="s3cretAB", first="Ann", last="Lee"):
        return f"{person_id},{secret},{first},{last},{first.lower()}@mail.com,555-0100,12,High St,Springfield,IL"
    return _line
