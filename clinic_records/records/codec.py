"""Line codec and typed records for the delimited tables."""

from dataclasses import astuple, dataclass

from .schema import (
    ADMIN_COLUMNS,
    APPOINTMENT_COLUMNS,
    PERSON_COLUMNS,
    REGISTRATION_COLUMNS,
)

DELIMITER = ","


class DelimiterError(ValueError):
    """Raised when a field value would break the column layout."""
    pass


def encode(fields) -> str:
    """Join fields into one table line (without the line terminator)."""
    for value in fields:
        if DELIMITER in value or "\n" in value or "\r" in value:
            raise DelimiterError(f"Field value {value!r} contains a delimiter or line break")
    return DELIMITER.join(fields)


def decode(line: str) -> list[str]:
    """Split a table line into its raw fields. Never raises."""
    return line.rstrip("\r\n").split(DELIMITER)


class _Record:
    """Positional record mixin; subclasses are dataclasses."""

    COLUMNS: list[str] = []

    def to_fields(self) -> list[str]:
        return list(astuple(self))

    @classmethod
    def from_fields(cls, fields: list[str]):
        """Build a record from decoded fields, or None if the row is short."""
        if len(fields) < len(cls.COLUMNS):
            return None
        return cls(*fields[:len(cls.COLUMNS)])


@dataclass
class Person(_Record):
    id: str
    secret: str
    first_name: str
    last_name: str
    email: str
    phone: str
    street_number: str
    street: str
    city: str
    state: str

    COLUMNS = PERSON_COLUMNS

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def address(self) -> str:
        return f"{self.street_number} {self.street}, {self.city}, {self.state}"


@dataclass
class AdminCredential(_Record):
    id: str
    secret: str

    COLUMNS = ADMIN_COLUMNS


@dataclass
class Registration(_Record):
    patient_id: str
    doctor_id: str

    COLUMNS = REGISTRATION_COLUMNS


@dataclass
class Appointment(_Record):
    patient_id: str
    doctor_id: str
    date: str
    time: str
    notes: str

    COLUMNS = APPOINTMENT_COLUMNS


@dataclass
class AppointmentView:
    """An appointment with the doctor's display name resolved."""
    appointment: Appointment
    doctor_name: str
