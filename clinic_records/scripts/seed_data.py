"""Seed the data directory with an administrator and mock doctors and patients."""

from rich.console import Console

from clinic_records.records import DirectoryService, TableKind

console = Console()


MOCK_DOCTORS = [
    {
        "first_name": "Gregory",
        "last_name": "House",
        "email": "g.house@clinic.example",
        "phone": "555-0201",
        "street_number": "221",
        "street": "Baker St",
        "city": "Princeton",
        "state": "NJ",
    },
    {
        "first_name": "Meredith",
        "last_name": "Grey",
        "email": "m.grey@clinic.example",
        "phone": "555-0202",
        "street_number": "14",
        "street": "Elm Ave",
        "city": "Seattle",
        "state": "WA",
    },
]

MOCK_PATIENTS = [
    {
        "first_name": "John",
        "last_name": "Smith",
        "email": "john.smith@email.com",
        "phone": "555-0101",
        "street_number": "123",
        "street": "Main St",
        "city": "San Francisco",
        "state": "CA",
    },
    {
        "first_name": "Sarah",
        "last_name": "Johnson",
        "email": "sarah.j@email.com",
        "phone": "555-0102",
        "street_number": "456",
        "street": "Oak Ave",
        "city": "Oakland",
        "state": "CA",
    },
]


def seed_data(directory: DirectoryService | None = None) -> None:
    """Create an admin plus mock people; tables that already hold rows are skipped."""
    directory = directory or DirectoryService()
    console.print(f"Seeding {directory.data_dir}...")

    if directory.path_for(TableKind.ADMIN).exists():
        console.print("  Skipping admin (already exists)")
    else:
        admin = directory.add_admin()
        console.print(f"  Created admin [bold]{admin.id}[/bold] with password [bold]{admin.secret}[/bold]")

    for kind, people in ((TableKind.DOCTOR, MOCK_DOCTORS), (TableKind.PATIENT, MOCK_PATIENTS)):
        existing = directory.list_all_of_kind(kind)
        if existing:
            console.print(f"  Skipping {kind.value}s ({len(existing)} already exist)")
            continue
        for details in people:
            person = directory.add_person(kind, **details)
            console.print(f"  Created {person.full_name} ({person.id}, password {person.secret})")

    console.print("\nData seeded successfully!")


if __name__ == "__main__":
    seed_data()
