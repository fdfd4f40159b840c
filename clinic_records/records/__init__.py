from .codec import Appointment, Person, Registration
from .directory import DirectoryService
from .generator import ExhaustedRangeError
from .schema import TableKind
from .table import TableIOError

__all__ = [
    "Appointment",
    "DirectoryService",
    "ExhaustedRangeError",
    "Person",
    "Registration",
    "TableIOError",
    "TableKind",
]
