"""
Clinic Records Table Layout
One comma-delimited text file per table, positional columns, no header row.
"""

from enum import Enum


class TableKind(Enum):
    """Logical tables kept in the data directory."""
    PATIENT = "patient"
    DOCTOR = "doctor"
    REGISTRATION = "registration"
    APPOINTMENT = "appointment"
    ADMIN = "admin"


# File names are shared with existing installations, keep them as-is
TABLE_FILES = {
    TableKind.PATIENT: "credentials.txt",
    TableKind.DOCTOR: "userIdDB.txt",
    TableKind.ADMIN: "userIDB.txt",
    TableKind.REGISTRATION: "admin.txt",
    TableKind.APPOINTMENT: "appointments.txt",
}

# =============================================================================
# Column layouts
# =============================================================================
# patient / doctor:
#   0 id, 1 secret, 2 first_name, 3 last_name, 4 email, 5 phone,
#   6 street_number, 7 street, 8 city, 9 state
# admin:
#   0 id, 1 secret
# registration:
#   0 patient_id, 1 doctor_id
# appointment:
#   0 patient_id, 1 doctor_id, 2 date, 3 time, 4 notes

PERSON_COLUMNS = [
    "id", "secret", "first_name", "last_name", "email", "phone",
    "street_number", "street", "city", "state",
]
ADMIN_COLUMNS = ["id", "secret"]
REGISTRATION_COLUMNS = ["patient_id", "doctor_id"]
APPOINTMENT_COLUMNS = ["patient_id", "doctor_id", "date", "time", "notes"]

COLUMN_COUNTS = {
    TableKind.PATIENT: len(PERSON_COLUMNS),
    TableKind.DOCTOR: len(PERSON_COLUMNS),
    TableKind.ADMIN: len(ADMIN_COLUMNS),
    TableKind.REGISTRATION: len(REGISTRATION_COLUMNS),
    TableKind.APPOINTMENT: len(APPOINTMENT_COLUMNS),
}

ID_COLUMN = 0
SECRET_COLUMN = 1
REG_PATIENT_COLUMN = 0
REG_DOCTOR_COLUMN = 1
APPT_PATIENT_COLUMN = 0
APPT_DOCTOR_COLUMN = 1

ID_PREFIXES = {
    TableKind.PATIENT: "P",
    TableKind.DOCTOR: "D",
    TableKind.ADMIN: "A",
}

# Highest sequence number an identifier can carry (4 digits)
ID_CEILING = 9999
SECRET_LENGTH = 8
