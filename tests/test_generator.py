"""Tests for identifier and secret generation."""

from unittest.mock import patch

import pytest

from clinic_records.records import generator
from clinic_records.records.generator import (
    SECRET_ALPHABET,
    ExhaustedRangeError,
    generate_identifier,
    generate_secret,
)


@pytest.fixture
def path(tmp_path):
    return tmp_path / "credentials.txt"


class TestGenerateIdentifier:
    """Tests for generate_identifier."""

    def test_empty_table_starts_at_one(self, path):
        """Test the first id in an empty table is P0001."""
        assert generate_identifier("P", path) == "P0001"

    def test_next_after_existing(self, path, write_lines, person_line):
        """Test the next id after P0001 and P0002 is P0003."""
        write_lines(path, [person_line("P0001"), person_line("P0002", secret="other123")])
        assert generate_identifier("P", path) == "P0003"

    def test_fills_first_gap(self, path, write_lines, person_line):
        """Test a gap in the sequence is reused."""
        write_lines(path, [person_line("P0001"), person_line("P0003", secret="other123")])
        assert generate_identifier("P", path) == "P0002"

    def test_other_prefixes_do_not_count(self, path, write_lines, person_line):
        """Test doctor ids do not use up patient numbers."""
        write_lines(path, [person_line("D0001")])
        assert generate_identifier("P", path) == "P0001"

    def test_never_returns_existing_id(self, path, write_lines):
        """Test a generated id is never already in the table."""
        write_lines(path, [f"P{i:04d},x" for i in range(1, 50)])
        new_id = generate_identifier("P", path)
        existing = {line.split(",")[0] for line in path.read_text().splitlines()}
        assert new_id not in existing
        assert new_id == "P0050"

    def test_exhausted_range_raises(self, path, write_lines):
        """Test all 9999 ids taken raises."""
        write_lines(path, [f"A{i:04d}" for i in range(1, 10000)])
        with pytest.raises(ExhaustedRangeError):
            generate_identifier("A", path)


class TestGenerateSecret:
    """Tests for generate_secret."""

    def test_secret_shape(self, path):
        """Test secrets are 8 alphanumeric characters."""
        secret = generate_secret(path)
        assert len(secret) == 8
        assert all(ch in SECRET_ALPHABET for ch in secret)

    def test_alphabet_is_alphanumeric(self):
        """Test the alphabet has 62 symbols."""
        assert len(SECRET_ALPHABET) == 62

    def test_collision_is_redrawn(self, path, write_lines, person_line):
        """Test a colliding secret is drawn again."""
        write_lines(path, [person_line("P0001", secret="TAKEN123")])
        with patch.object(generator, "_draw_secret", side_effect=["TAKEN123", "TAKEN123", "FRESH456"]) as draw:
            assert generate_secret(path) == "FRESH456"
        assert draw.call_count == 3

    def test_secret_unique_against_table(self, path, write_lines, person_line):
        """Test secrets never repeat an existing one."""
        write_lines(path, [person_line(f"P{i:04d}", secret=f"sec{i:05d}") for i in range(1, 20)])
        existing = {line.split(",")[1] for line in path.read_text().splitlines()}
        for _ in range(20):
            assert generate_secret(path) not in existing
