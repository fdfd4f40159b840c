"""Tests for the line codec and typed records."""

import pytest

from clinic_records.records.codec import (
    Appointment,
    DelimiterError,
    Person,
    Registration,
    decode,
    encode,
)


class TestEncodeDecode:
    """Tests for encode and decode."""

    def test_encode_joins_with_commas(self):
        """Fields are joined with commas in order."""
        assert encode(["P0001", "D0001"]) == "P0001,D0001"

    def test_encode_rejects_delimiter_in_field(self):
        """A comma inside a value cannot be encoded."""
        with pytest.raises(DelimiterError):
            encode(["P0001", "D0001", "2024-01-01", "09:00", "bring x-rays, scans"])

    def test_encode_rejects_line_break(self):
        """A line break inside a value cannot be encoded."""
        with pytest.raises(ValueError):
            encode(["P0001", "line one\nline two"])

    def test_decode_strips_line_terminator(self):
        """CRLF and LF endings are both removed."""
        assert decode("P0001,D0001\r\n") == ["P0001", "D0001"]

    def test_decode_keeps_whitespace_inside_fields(self):
        """Fields are not trimmed, only the line terminator is removed."""
        assert decode("D0001, Smith\n") == ["D0001", " Smith"]

    def test_decode_never_raises_on_odd_input(self):
        """Empty and blank lines still split."""
        assert decode("") == [""]
        assert decode(",,,") == ["", "", "", ""]


class TestRecords:
    """Tests for typed record conversion."""

    def test_person_from_short_row_is_none(self):
        """A 6-column person row fails closed."""
        assert Person.from_fields(["D0001", "pw", "Ann", "Lee", "a@b.c", "555"]) is None

    def test_person_round_trip_fields(self):
        """A full row converts to a Person and back."""
        fields = ["P0001", "pw", "Ann", "Lee", "a@b.c", "555", "12", "High St", "Springfield", "IL"]
        person = Person.from_fields(fields)
        assert person.id == "P0001"
        assert person.state == "IL"
        assert person.to_fields() == fields

    def test_extra_columns_are_ignored(self):
        """Columns past the layout are dropped."""
        appointment = Appointment.from_fields(["P0001", "D0001", "2024-01-01", "09:00", "notes", "stray"])
        assert appointment.notes == "notes"

    def test_person_display_helpers(self):
        """Test name and address formatting."""
        person = Person("P0001", "pw", "Ann", "Lee", "a@b.c", "555", "12", "High St", "Springfield", "IL")
        assert person.full_name == "Ann Lee"
        assert person.address == "12 High St, Springfield, IL"

    def test_registration_fields(self):
        """Test registration column order."""
        assert Registration("P0001", "D0002").to_fields() == ["P0001", "D0002"]
