"""Clinic records console with a login screen and per-role menus."""

import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from clinic_records import config
from clinic_records.forms import AppointmentForm, PersonForm
from clinic_records.records import DirectoryService, ExhaustedRangeError, TableIOError, TableKind
from clinic_records.records.codec import Appointment, Person
from clinic_records.session import MENUS, Action, Role, Session

console = Console()
directory = DirectoryService()

PERSON_PROMPTS = [
    ("first_name", "First Name"),
    ("last_name", "Last Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("street_number", "Street Number"),
    ("street", "Street"),
    ("city", "City"),
    ("state", "State"),
]

APPOINTMENT_PROMPTS = [
    ("date", "Date (YYYY-MM-DD)"),
    ("time", "Time (HH:MM)"),
    ("notes", "Additional Notes"),
]


def configure_logging() -> None:
    """Send log records through the shared rich console."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def ask(label: str, password: bool = False) -> str:
    """Prompt for one line of input; passwords are not echoed."""
    return console.input(f"[bold green]{label}:[/bold green] ", password=password).strip()


# Rendering

def people_table(title: str, people: list[Person]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Address")
    for person in people:
        table.add_row(person.id, person.full_name, person.email, person.phone, person.address)
    return table


def appointments_table(title: str, appointments: list[Appointment], with_column: str, names: list[str]) -> Table:
    table = Table(title=title)
    table.add_column(with_column)
    table.add_column("Date", style="cyan")
    table.add_column("Time", style="cyan")
    table.add_column("Notes")
    for appointment, name in zip(appointments, names):
        table.add_row(name, appointment.date, appointment.time, appointment.notes)
    return table


def show_people(title: str, people: list[Person], empty_message: str) -> None:
    if not people:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return
    console.print(people_table(title, people))


def show_person(kind: TableKind, person_id: str) -> None:
    person = directory.find_person_by_id(kind, person_id)
    if person is None:
        console.print(f"[yellow]No {kind.value} found with ID: {person_id}[/yellow]")
        return
    console.print(people_table(f"{kind.value.title()} Details", [person]))


# Admin handlers

def handle_list_doctors(session: Session) -> None:
    show_people("All Doctors", directory.list_all_of_kind(TableKind.DOCTOR), "No doctors found in the system.")


def handle_doctor_details(session: Session) -> None:
    show_person(TableKind.DOCTOR, ask("Enter Doctor ID"))


def handle_list_patients(session: Session) -> None:
    show_people("All Patients", directory.list_all_of_kind(TableKind.PATIENT), "No patients found in the system.")


def handle_patient_details(session: Session) -> None:
    show_person(TableKind.PATIENT, ask("Enter Patient ID"))


def _add_person(kind: TableKind) -> None:
    """Collect contact details and store a new patient or doctor."""
    console.print(f"Registering a new {kind.value} with {config.CLINIC_NAME}")
    values = {field: ask(label) for field, label in PERSON_PROMPTS}
    form = PersonForm(**values)
    person = directory.add_person(kind, **form.model_dump())
    console.print(
        f"[bold green]{person.full_name} added successfully with ID {person.id}.[/bold green]\n"
        f"Initial password: [bold]{person.secret}[/bold]"
    )


def handle_add_doctor(session: Session) -> None:
    _add_person(TableKind.DOCTOR)


def handle_add_patient(session: Session) -> None:
    _add_person(TableKind.PATIENT)


# Doctor and patient handlers

def handle_my_details(session: Session) -> None:
    kind = TableKind.DOCTOR if session.role == Role.DOCTOR else TableKind.PATIENT
    show_person(kind, session.user_id)


def handle_my_patients(session: Session) -> None:
    show_people(
        "My Patients",
        directory.patients_of_doctor(session.user_id),
        "No patients are registered with you.",
    )


def handle_my_appointments(session: Session) -> None:
    if session.role == Role.DOCTOR:
        appointments = directory.appointments_of(TableKind.DOCTOR, session.user_id)
        names = [directory.display_name(TableKind.PATIENT, a.patient_id) or a.patient_id for a in appointments]
        with_column = "Patient"
    else:
        history = directory.appointment_history(session.user_id)
        appointments = [view.appointment for view in history]
        names = [view.doctor_name for view in history]
        with_column = "Doctor"

    if not appointments:
        console.print("[yellow]No booked appointments.[/yellow]")
        return
    console.print(appointments_table("Appointments", appointments, with_column, names))


def handle_appointments_with_patient(session: Session) -> None:
    patient_id = ask("Enter Patient ID")
    appointments = directory.appointments_between(session.user_id, patient_id)
    if not appointments:
        console.print(f"[yellow]No appointments found for Patient ID: {patient_id} with you.[/yellow]")
        return
    name = directory.display_name(TableKind.PATIENT, patient_id) or patient_id
    console.print(appointments_table(f"Appointments with {name}", appointments, "Patient", [name] * len(appointments)))


def handle_my_doctor(session: Session) -> None:
    doctor = directory.my_doctor(session.user_id)
    if doctor is None:
        console.print("[yellow]No appointment found for the patient.[/yellow]")
        return
    console.print(people_table("My Doctor", [doctor]))


def choose_doctor() -> str | None:
    """List doctors and return the id of the one the patient picks."""
    doctors = directory.list_all_of_kind(TableKind.DOCTOR)
    if not doctors:
        console.print("[yellow]No doctors are available.[/yellow]")
        return None
    for i, doctor in enumerate(doctors, 1):
        console.print(f"{i}. Doctor ID: {doctor.id}, Name: {doctor.full_name}")
    choice = ask("Please select a doctor by entering the corresponding number")
    if choice.isdigit() and 1 <= int(choice) <= len(doctors):
        return doctors[int(choice) - 1].id
    console.print("[red]Invalid selection.[/red]")
    return None


def handle_book_appointment(session: Session) -> None:
    doctor_id = directory.doctor_of_patient(session.user_id)
    if doctor_id is None:
        console.print("You are not registered with a doctor. Please choose a doctor to register:")
        doctor_id = choose_doctor()
        if doctor_id is None:
            return

    values = {field: ask(label) for field, label in APPOINTMENT_PROMPTS}
    form = AppointmentForm(**values)
    directory.book_appointment(session.user_id, doctor_id, form.date, form.time, form.notes)
    console.print("[bold green]Your appointment has been successfully booked![/bold green]")


ACTION_HANDLERS = {
    Action.LIST_DOCTORS: handle_list_doctors,
    Action.DOCTOR_DETAILS: handle_doctor_details,
    Action.LIST_PATIENTS: handle_list_patients,
    Action.PATIENT_DETAILS: handle_patient_details,
    Action.ADD_DOCTOR: handle_add_doctor,
    Action.ADD_PATIENT: handle_add_patient,
    Action.MY_DETAILS: handle_my_details,
    Action.MY_PATIENTS: handle_my_patients,
    Action.MY_APPOINTMENTS: handle_my_appointments,
    Action.APPOINTMENTS_WITH_PATIENT: handle_appointments_with_patient,
    Action.MY_DOCTOR: handle_my_doctor,
    Action.BOOK_APPOINTMENT: handle_book_appointment,
}


def process_choice(session: Session, choice: str) -> None:
    """Run the menu action behind a typed choice."""
    action = session.resolve_choice(choice)
    if action is None:
        console.print("[red]Invalid choice.[/red]")
        return
    if action == Action.LOGOUT:
        session.logout()
        return
    if action == Action.EXIT:
        session.logout()
        session.running = False
        return

    try:
        ACTION_HANDLERS[action](session)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[bold red]Invalid {field}:[/bold red] {error['msg']}")
    except (ExhaustedRangeError, TableIOError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")


def show_menu(session: Session) -> None:
    lines = [f"{i}. {label}" for i, (label, _) in enumerate(MENUS[session.role], 1)]
    console.print(Panel("\n".join(lines), title=f"{session.role.value.title()} Menu ({session.user_id})"))


def login(session: Session) -> None:
    console.print(Panel(f"{config.CLINIC_NAME}\nLogin", expand=False))
    user_id = ask("ID")
    secret = ask("Password", password=True)
    role = directory.authenticate(user_id, secret)
    if role is None:
        console.print("[red]Invalid credentials, please try again.[/red]")
        return
    session.login(user_id, role)
    console.print(f"[bold blue]{role.value.title()} login successful.[/bold blue]")


def main():
    """Main login and menu loop."""
    configure_logging()

    if not directory.path_for(TableKind.ADMIN).exists():
        console.print(
            "[yellow]No administrator account found. "
            "Run `python -m clinic_records.scripts.seed_data` to create one.[/yellow]"
        )

    session = Session()
    is_tty = sys.stdin.isatty()

    while session.running:
        try:
            if not session.logged_in:
                login(session)
                continue
            show_menu(session)
            choice = ask("Enter choice")
            # Echo input when stdin is piped (not interactive)
            if not is_tty and choice:
                console.print(f"[dim]{choice}[/dim]")
            process_choice(session, choice)
        except (EOFError, KeyboardInterrupt):
            console.print("\n[bold blue]Goodbye![/bold blue]")
            break
        except TableIOError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")

    if not session.running:
        console.print("[bold blue]Goodbye![/bold blue]")


if __name__ == "__main__":
    main()
