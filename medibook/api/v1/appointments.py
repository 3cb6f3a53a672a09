from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from ...core.database import get_db
from ...api.deps import get_patient_user, get_notifier, get_reminder_scheduler
from ...models.user import User
from ...schemas.appointment import (
    AppointmentCreate, AppointmentResponse, AppointmentWithDoctor, BookingResponse
)
from ...schemas.doctor import DoctorSummary
from ...services.appointment_service import AppointmentService
from ...services.notification_service import EmailNotifier
from ...services.reminder_service import ReminderScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def book_appointment(
    appointment_data: AppointmentCreate,
    current_user: User = Depends(get_patient_user),
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Book an appointment, then send the confirmation and schedule the reminder.

    Email problems are reported in ``emailStatus`` and never fail the booking.
    """
    appointment_service = AppointmentService(db)
    appointment, doctor, reminder = appointment_service.create_appointment(current_user, appointment_data)

    email_sent = notifier.send_appointment_confirmation(current_user.email, appointment, doctor)

    reminder_scheduled = False
    if reminder is None:
        logger.info(f"Appointment {appointment.id} is less than an hour away, skipping reminder")
    else:
        reminder_scheduled = scheduler.enqueue(reminder)
    reminder_status = "scheduled" if reminder_scheduled else "skipped"

    if email_sent:
        message = "Appointment booked successfully and confirmation email sent."
        if reminder_scheduled:
            message += " You will receive a reminder 1 hour before your appointment."
    else:
        message = "Appointment booked successfully but confirmation email could not be sent."

    return BookingResponse(
        appointment=AppointmentResponse.model_validate(appointment),
        doctor=DoctorSummary.model_validate(doctor),
        email_status="sent" if email_sent else "failed",
        reminder_status=reminder_status,
        message=message,
    )

@router.get("", response_model=List[AppointmentWithDoctor], response_model_exclude_none=True)
def list_my_appointments(
    current_user: User = Depends(get_patient_user),
    db: Session = Depends(get_db),
):
    """The current patient's appointments, each with its doctor."""
    appointment_service = AppointmentService(db)
    return [
        AppointmentWithDoctor.model_validate(appointment)
        for appointment in appointment_service.get_patient_appointments(current_user.id)
    ]

@router.patch("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: int,
    current_user: User = Depends(get_patient_user),
    db: Session = Depends(get_db),
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Cancel one of the current patient's appointments."""
    appointment_service = AppointmentService(db)
    appointment = appointment_service.cancel_appointment(appointment_id, current_user)

    if appointment.reminder is not None:
        scheduler.cancel(appointment.reminder.id)

    return AppointmentResponse.model_validate(appointment)
