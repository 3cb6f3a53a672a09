from .user import User, RefreshToken
from .doctor import Doctor
from .appointment import Appointment, AppointmentStatus
from .reminder import Reminder, ReminderStatus

__all__ = [
    "User",
    "RefreshToken",
    "Doctor",
    "Appointment",
    "AppointmentStatus",
    "Reminder",
    "ReminderStatus",
]
