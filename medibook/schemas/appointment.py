from datetime import datetime, timezone
import re

from pydantic import Field, StrictInt, field_validator

from ..models.appointment import AppointmentStatus
from .auth import CamelModel
from .doctor import DoctorResponse, DoctorSummary

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
# Date and time of day, optionally followed by seconds and an offset
ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")

class AppointmentCreate(CamelModel):
    doctor_id: StrictInt
    date: datetime
    time: str = Field(pattern=TIME_PATTERN)

    @field_validator("date", mode="before")
    @classmethod
    def require_time_of_day(cls, value):
        # Date-only strings and epoch numbers would otherwise be coerced
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not ISO_DATETIME_PATTERN.match(value):
            raise ValueError("date must be an ISO 8601 datetime")
        return value

class AppointmentResponse(CamelModel):
    id: int
    doctor_id: int
    patient_id: int
    date: datetime
    status: AppointmentStatus

    @field_validator("date")
    @classmethod
    def mark_utc(cls, value: datetime) -> datetime:
        # Stored values are naive UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

class AppointmentWithDoctor(AppointmentResponse):
    doctor: DoctorResponse

class BookingResponse(CamelModel):
    appointment: AppointmentResponse
    doctor: DoctorSummary
    email_status: str
    reminder_status: str
    message: str
