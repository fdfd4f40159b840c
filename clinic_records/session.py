"""Login session state and the per-role menu layouts."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Roles a user can log in as."""
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class Action(Enum):
    """Menu actions; each maps to one handler in main."""
    LIST_DOCTORS = "list_doctors"
    DOCTOR_DETAILS = "doctor_details"
    LIST_PATIENTS = "list_patients"
    PATIENT_DETAILS = "patient_details"
    ADD_DOCTOR = "add_doctor"
    ADD_PATIENT = "add_patient"
    MY_DETAILS = "my_details"
    MY_PATIENTS = "my_patients"
    MY_APPOINTMENTS = "my_appointments"
    APPOINTMENTS_WITH_PATIENT = "appointments_with_patient"
    MY_DOCTOR = "my_doctor"
    BOOK_APPOINTMENT = "book_appointment"
    LOGOUT = "logout"
    EXIT = "exit"


# Ordered menu entries per role: (label, action)
MENUS = {
    Role.ADMIN: [
        ("List All Doctors", Action.LIST_DOCTORS),
        ("Check Doctor Details", Action.DOCTOR_DETAILS),
        ("List All Patients", Action.LIST_PATIENTS),
        ("Check Patient Details", Action.PATIENT_DETAILS),
        ("Add Doctor", Action.ADD_DOCTOR),
        ("Add Patient", Action.ADD_PATIENT),
        ("Logout", Action.LOGOUT),
        ("Exit System", Action.EXIT),
    ],
    Role.DOCTOR: [
        ("List Doctor Details", Action.MY_DETAILS),
        ("List Patients", Action.MY_PATIENTS),
        ("List Appointments", Action.MY_APPOINTMENTS),
        ("Check Particular Patient", Action.PATIENT_DETAILS),
        ("List Appointments with Patient", Action.APPOINTMENTS_WITH_PATIENT),
        ("Logout", Action.LOGOUT),
        ("Exit", Action.EXIT),
    ],
    Role.PATIENT: [
        ("List Patient Details", Action.MY_DETAILS),
        ("List My Doctor Details", Action.MY_DOCTOR),
        ("List All Appointments", Action.MY_APPOINTMENTS),
        ("Book Appointments", Action.BOOK_APPOINTMENT),
        ("Exit to Login", Action.LOGOUT),
        ("Exit System", Action.EXIT),
    ],
}


@dataclass
class Session:
    """Tracks who is logged in and whether the program should keep running."""
    user_id: str | None = None
    role: Role | None = None
    running: bool = True

    @property
    def logged_in(self) -> bool:
        return self.role is not None

    def login(self, user_id: str, role: Role) -> None:
        self.user_id = user_id
        self.role = role

    def logout(self) -> None:
        self.user_id = None
        self.role = None

    def resolve_choice(self, choice: str) -> Action | None:
        """Map a typed menu number to an action for the current role."""
        if not self.logged_in or not choice.isdigit():
            return None
        options = MENUS[self.role]
        index = int(choice) - 1
        if 0 <= index < len(options):
            return options[index][1]
        return None
