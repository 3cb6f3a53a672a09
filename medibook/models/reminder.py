from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class ReminderStatus(str, enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"

class Reminder(Base):
    """A reminder email owed for an appointment, persisted so it survives restarts."""
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), unique=True, nullable=False)
    recipient_email = Column(String(255), nullable=False)

    # Naive UTC
    send_at = Column(DateTime, nullable=False, index=True)
    status = Column(SQLEnum(ReminderStatus), nullable=False, default=ReminderStatus.PENDING, index=True)
    sent_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    appointment = relationship("Appointment", back_populates="reminder")

    def __repr__(self):
        return f"<Reminder(id={self.id}, appointment_id={self.appointment_id}, status='{self.status}')>"
