"""Pydantic models validating menu input before it reaches the tables."""

import re

from pydantic import BaseModel, Field, field_validator

from clinic_records.records.codec import DELIMITER


def _clean(v, allow_empty: bool = False):
    """Strip a raw value and reject anything the tables cannot store."""
    if v is None:
        raise ValueError("Value is required")
    v = str(v).strip()
    if not v and not allow_empty:
        raise ValueError("Value cannot be empty")
    if DELIMITER in v:
        raise ValueError(f"Value cannot contain '{DELIMITER}'")
    if "\n" in v or "\r" in v:
        raise ValueError("Value cannot span several lines")
    return v


class PersonForm(BaseModel):
    """Contact details collected when adding a patient or doctor."""

    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Email address")
    phone: str = Field(..., description="Phone number")
    street_number: str = Field(..., description="Street number")
    street: str = Field(..., description="Street name")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State")

    @field_validator("*", mode="before")
    @classmethod
    def clean_value(cls, v):
        return _clean(v)


class AppointmentForm(BaseModel):
    """Date, time and notes collected when booking an appointment."""

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    time: str = Field(..., description="Time in HH:MM format")
    notes: str = Field(..., description="Additional notes")

    @field_validator("date", "time", mode="before")
    @classmethod
    def clean_value(cls, v):
        return _clean(v)

    @field_validator("notes", mode="before")
    @classmethod
    def clean_notes(cls, v):
        return _clean(v, allow_empty=True)

    @field_validator("date")
    @classmethod
    def check_date_shape(cls, v):
        if not re.match(r"^\d{4}-\d{2}-\d{2}$", v):
            raise ValueError("Date must look like YYYY-MM-DD")
        return v

    @field_validator("time")
    @classmethod
    def check_time_shape(cls, v):
        if not re.match(r"^\d{1,2}:\d{2}$", v):
            raise ValueError("Time must look like HH:MM")
        return v
