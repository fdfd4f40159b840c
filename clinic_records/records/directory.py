"""Directory service joining people, registrations and appointments."""

import logging
from pathlib import Path

from clinic_records import config
from clinic_records.session import Role

from . import table
from .codec import AdminCredential, Appointment, AppointmentView, Person, Registration, encode
from .generator import generate_identifier, generate_secret
from .schema import (
    APPT_DOCTOR_COLUMN,
    APPT_PATIENT_COLUMN,
    COLUMN_COUNTS,
    ID_COLUMN,
    ID_PREFIXES,
    REG_DOCTOR_COLUMN,
    REG_PATIENT_COLUMN,
    TABLE_FILES,
    TableKind,
)

logger = logging.getLogger(__name__)

UNKNOWN_DOCTOR = "Unknown Doctor"

# Login checks tables in this order; the first match decides the role
LOGIN_TABLES = [
    (TableKind.PATIENT, Role.PATIENT),
    (TableKind.DOCTOR, Role.DOCTOR),
    (TableKind.ADMIN, Role.ADMIN),
]

PERSON_KINDS = (TableKind.PATIENT, TableKind.DOCTOR)


class DirectoryService:
    """Cross-table queries and appends over the clinic's text tables."""

    def __init__(self, data_dir: Path | None = None):
        self.data_dir = Path(data_dir) if data_dir is not None else config.DATA_DIR

    def path_for(self, kind: TableKind) -> Path:
        return self.data_dir / TABLE_FILES[kind]

    # Authentication

    def authenticate(self, user_id: str, secret: str) -> Role | None:
        """Return the role whose table holds this id/secret pair."""
        for kind, role in LOGIN_TABLES:
            for row in table.find_all_by_column(self.path_for(kind), ID_COLUMN, user_id):
                # Every credential table starts with id, secret
                credential = AdminCredential.from_fields(row)
                if credential and credential.secret == secret:
                    return role
        return None

    # People

    def list_all_of_kind(self, kind: TableKind) -> list[Person]:
        """All well-formed people in a patient or doctor table."""
        self._check_person_kind(kind)
        people = []
        for row in table.scan_all(self.path_for(kind)):
            person = Person.from_fields(row)
            if person is None:
                logger.debug("Skipping malformed %s row: %r", kind.value, row)
                continue
            people.append(person)
        return people

    def find_person_by_id(self, kind: TableKind, person_id: str) -> Person | None:
        self._check_person_kind(kind)
        row = table.find_first_by_column(
            self.path_for(kind), ID_COLUMN, person_id, min_columns=COLUMN_COUNTS[kind]
        )
        return Person.from_fields(row) if row else None

    def display_name(self, kind: TableKind, person_id: str) -> str | None:
        """Get "First Last" for a person, or None if unknown."""
        person = self.find_person_by_id(kind, person_id)
        return person.full_name if person else None

    def add_person(
        self,
        kind: TableKind,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        street_number: str,
        street: str,
        city: str,
        state: str,
    ) -> Person:
        """
        Create a patient or doctor with a generated id and secret.

        The id and secret are generated and the row appended while holding
        the table's writer lock, so two registrations in one process cannot
        claim the same values.

        Returns:
            The stored Person, including the secret to hand to the user
        """
        self._check_person_kind(kind)
        path = self.path_for(kind)
        with table.table_lock(path):
            person = Person(
                id=generate_identifier(ID_PREFIXES[kind], path),
                secret=generate_secret(path),
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone=phone,
                street_number=street_number,
                street=street,
                city=city,
                state=state,
            )
            table.append(path, person.to_fields())
        logger.info("Added %s %s", kind.value, person.id)
        return person

    def add_admin(self) -> AdminCredential:
        """Create an administrator credential with a generated id and secret."""
        path = self.path_for(TableKind.ADMIN)
        with table.table_lock(path):
            credential = AdminCredential(
                id=generate_identifier(ID_PREFIXES[TableKind.ADMIN], path),
                secret=generate_secret(path),
            )
            table.append(path, credential.to_fields())
        logger.info("Added admin %s", credential.id)
        return credential

    # Registrations

    def doctor_of_patient(self, patient_id: str) -> str | None:
        """Registered doctor of a patient; the first registration row wins."""
        row = table.find_first_by_column(
            self.path_for(TableKind.REGISTRATION),
            REG_PATIENT_COLUMN,
            patient_id,
            min_columns=COLUMN_COUNTS[TableKind.REGISTRATION],
        )
        return Registration.from_fields(row).doctor_id if row else None

    def patients_of_doctor(self, doctor_id: str) -> list[Person]:
        """Patients registered with a doctor, in registration order."""
        rows = table.find_all_by_column(
            self.path_for(TableKind.REGISTRATION),
            REG_DOCTOR_COLUMN,
            doctor_id,
            min_columns=COLUMN_COUNTS[TableKind.REGISTRATION],
        )
        patients = []
        for row in rows:
            registration = Registration.from_fields(row)
            patient = self.find_person_by_id(TableKind.PATIENT, registration.patient_id)
            if patient is None:
                logger.debug("Registration for unknown patient %s", registration.patient_id)
                continue
            patients.append(patient)
        return patients

    def register_patient_with_doctor(self, patient_id: str, doctor_id: str) -> Registration:
        """Append a registration row. Existing rows for the patient are left alone."""
        registration = Registration(patient_id=patient_id, doctor_id=doctor_id)
        table.append(self.path_for(TableKind.REGISTRATION), registration.to_fields())
        logger.info("Registered patient %s with doctor %s", patient_id, doctor_id)
        return registration

    # Appointments

    def appointments_of(self, kind: TableKind, entity_id: str) -> list[Appointment]:
        """Appointments of a patient or a doctor, in booking order."""
        if kind == TableKind.PATIENT:
            column = APPT_PATIENT_COLUMN
        elif kind == TableKind.DOCTOR:
            column = APPT_DOCTOR_COLUMN
        else:
            raise ValueError(f"Appointments are kept per patient or doctor, not {kind.value}")
        rows = table.find_all_by_column(
            self.path_for(TableKind.APPOINTMENT),
            column,
            entity_id,
            min_columns=COLUMN_COUNTS[TableKind.APPOINTMENT],
        )
        return [Appointment.from_fields(row) for row in rows]

    def most_recent_doctor_for(self, patient_id: str) -> str | None:
        """Doctor of the patient's last-appended appointment.

        Recency is file order; the date and time columns are not parsed.
        """
        rows = list(table.scan_all(self.path_for(TableKind.APPOINTMENT)))
        for row in reversed(rows):
            appointment = Appointment.from_fields(row)
            if appointment is None:
                logger.debug("Skipping malformed appointment row: %r", row)
                continue
            if appointment.patient_id == patient_id:
                return appointment.doctor_id
        return None

    def my_doctor(self, patient_id: str) -> Person | None:
        """Doctor record behind the patient's most recent appointment."""
        doctor_id = self.most_recent_doctor_for(patient_id)
        if doctor_id is None:
            return None
        return self.find_person_by_id(TableKind.DOCTOR, doctor_id)

    def appointment_history(self, patient_id: str) -> list[AppointmentView]:
        """A patient's appointments with each doctor's name resolved."""
        history = []
        for appointment in self.appointments_of(TableKind.PATIENT, patient_id):
            name = self.display_name(TableKind.DOCTOR, appointment.doctor_id)
            history.append(AppointmentView(appointment=appointment, doctor_name=name or UNKNOWN_DOCTOR))
        return history

    def appointments_between(self, doctor_id: str, patient_id: str) -> list[Appointment]:
        """Appointments of a patient with the doctor they are registered with.

        Empty when the patient is registered with someone else or not at all.
        """
        if self.doctor_of_patient(patient_id) != doctor_id:
            return []
        return [
            appointment
            for appointment in self.appointments_of(TableKind.PATIENT, patient_id)
            if appointment.doctor_id == doctor_id
        ]

    def book_appointment(
        self,
        patient_id: str,
        doctor_id: str | None,
        date: str,
        time: str,
        notes: str,
    ) -> Appointment:
        """
        Book an appointment with the patient's registered doctor.

        A patient without a registration is registered with doctor_id
        first. A patient who already has a registered doctor is always
        booked with that doctor.

        Raises:
            ValueError: the patient has no registered doctor and none was given
        """
        registered = self.doctor_of_patient(patient_id)
        needs_registration = registered is None
        if needs_registration:
            if not doctor_id:
                raise ValueError(f"Patient {patient_id} is not registered with a doctor")
            registered = doctor_id
        elif doctor_id and doctor_id != registered:
            logger.warning(
                "Patient %s is registered with %s, booking with them instead of %s",
                patient_id, registered, doctor_id,
            )

        appointment = Appointment(
            patient_id=patient_id,
            doctor_id=registered,
            date=date,
            time=time,
            notes=notes,
        )
        # Reject unencodable fields before the registration is written
        encode(appointment.to_fields())

        if needs_registration:
            self.register_patient_with_doctor(patient_id, registered)
        table.append(self.path_for(TableKind.APPOINTMENT), appointment.to_fields())
        return appointment

    # Private helpers

    def _check_person_kind(self, kind: TableKind) -> None:
        if kind not in PERSON_KINDS:
            raise ValueError(f"{kind.value} is not a table of people")
