from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from fastapi import HTTPException, status
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
import logging
import threading

from ..core.clock import utcnow, to_utc_naive
from ..core.config import settings
from ..core.security import SchedulingConflictError
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import Doctor
from ..models.reminder import Reminder, ReminderStatus
from ..models.user import User
from ..schemas.appointment import AppointmentCreate

logger = logging.getLogger(__name__)

# Serializes conflict check and insert within this process. Row locks on the
# doctor and patient cover other processes on databases that support them.
_booking_lock = threading.Lock()

def plan_reminder(
    appointment_at: datetime,
    now: datetime,
    lead: Optional[timedelta] = None,
) -> Optional[datetime]:
    """When to send the reminder for an appointment, or None if it is too close."""
    send_at = appointment_at - (lead or timedelta(minutes=settings.REMINDER_LEAD_MINUTES))
    if send_at <= now:
        return None
    return send_at

class AppointmentService:
    def __init__(self, db: Session):
        self.db = db
        self.conflict_window = timedelta(minutes=settings.CONFLICT_WINDOW_MINUTES)

    def check_time_slot_conflict(self, doctor_id: int, patient_id: int, when: datetime) -> bool:
        """True if the doctor or the patient already has an appointment within the window.

        Bounds are inclusive: an appointment exactly ``conflict_window`` away
        conflicts. Cancelled appointments do not hold their slot.
        """
        when = to_utc_naive(when)
        start_time = when - self.conflict_window
        end_time = when + self.conflict_window

        conflict = self.db.query(Appointment.id).filter(
            or_(
                Appointment.doctor_id == doctor_id,
                Appointment.patient_id == patient_id,
            ),
            Appointment.date >= start_time,
            Appointment.date <= end_time,
            Appointment.status != AppointmentStatus.CANCELLED,
        ).first()

        return conflict is not None

    def create_appointment(
        self,
        patient: User,
        data: AppointmentCreate,
    ) -> Tuple[Appointment, Doctor, Optional[Reminder]]:
        """Book a confirmed appointment.

        Raises 404 for an unknown doctor, 400 for a time in the past and
        :class:`SchedulingConflictError` when the slot is taken. A pending
        reminder is stored in the same transaction when there is still time
        to send one.
        """
        appointment_at = to_utc_naive(data.date)
        now = utcnow()
        if appointment_at <= now:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Appointments must be scheduled in the future."
            )

        with _booking_lock:
            try:
                doctor = self.db.query(Doctor).filter(
                    Doctor.id == data.doctor_id
                ).with_for_update().first()
                if not doctor:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail="Doctor not found"
                    )

                # Lock the patient row too so one patient's bookings with
                # different doctors are serialized
                self.db.query(User).filter(User.id == patient.id).with_for_update().first()

                if self.check_time_slot_conflict(doctor.id, patient.id, appointment_at):
                    logger.info(
                        f"Rejected booking for patient {patient.id} with doctor {doctor.id} "
                        f"at {appointment_at.isoformat()}: slot conflict"
                    )
                    raise SchedulingConflictError()

                appointment = Appointment(
                    doctor_id=doctor.id,
                    patient_id=patient.id,
                    date=appointment_at,
                    status=AppointmentStatus.CONFIRMED,
                )
                self.db.add(appointment)
                self.db.flush()

                reminder = None
                send_at = plan_reminder(appointment_at, now)
                if send_at is not None:
                    reminder = Reminder(
                        appointment_id=appointment.id,
                        recipient_email=patient.email,
                        send_at=send_at,
                        status=ReminderStatus.PENDING,
                    )
                    self.db.add(reminder)

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(appointment)
        if reminder is not None:
            self.db.refresh(reminder)

        logger.info(
            f"Booked appointment {appointment.id} for patient {patient.id} "
            f"with doctor {doctor.id} at {appointment_at.isoformat()}"
        )
        return appointment, doctor, reminder

    def get_patient_appointments(self, patient_id: int) -> List[Appointment]:
        """A patient's appointments with their doctors, soonest first."""
        return self.db.query(Appointment).options(
            joinedload(Appointment.doctor)
        ).filter(
            Appointment.patient_id == patient_id
        ).order_by(Appointment.date).all()

    def cancel_appointment(self, appointment_id: int, patient: User) -> Appointment:
        """Cancel one of the patient's own appointments and its pending reminder."""
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.patient_id == patient.id,
        ).first()
        if not appointment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Appointment not found"
            )

        appointment.status = AppointmentStatus.CANCELLED
        if appointment.reminder and appointment.reminder.status == ReminderStatus.PENDING:
            appointment.reminder.status = ReminderStatus.CANCELLED

        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Cancelled appointment {appointment.id} for patient {patient.id}")
        return appointment
