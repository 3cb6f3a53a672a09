"""Reminder delivery.

Reminders are rows in the ``reminders`` table. The scheduler keeps one
in-process timer per pending reminder that falls due within ``horizon``; a
background poller re-scans the table so reminders further out are armed as
they come into range, and so pending reminders are picked up again after a
restart.
"""
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Set
import logging
import threading

from sqlalchemy.orm import Session

from ..core.clock import utcnow
from ..models.appointment import AppointmentStatus
from ..models.reminder import Reminder, ReminderStatus

logger = logging.getLogger(__name__)

class ReminderScheduler:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier,
        horizon: timedelta = timedelta(hours=24),
        poll_interval: float = 900.0,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.notifier = notifier
        self.horizon = horizon
        self.poll_interval = poll_interval
        self.clock = clock
        self._timers: Dict[int, threading.Timer] = {}
        self._in_flight: Set[int] = set()
        self._running = False
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def armed(self) -> set:
        with self._lock:
            return set(self._timers)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Arm pending reminders and start the background poller."""
        with self._lock:
            self._running = True
        self._stopped.clear()
        armed = self.poll()
        logger.info(f"Reminder scheduler started, {armed} reminder(s) armed")

        self._thread = threading.Thread(target=self._run, name="reminder-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        with self._lock:
            self._running = False
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("Reminder scheduler stopped")

    def _run(self) -> None:
        while not self._stopped.wait(self.poll_interval):
            try:
                self.poll()
            except Exception:
                logger.exception("Reminder poll failed")

    def poll(self) -> int:
        """Arm every pending reminder due within the horizon. Returns how many were newly armed."""
        now = self.clock()
        db = self.session_factory()
        try:
            due = db.query(Reminder.id, Reminder.send_at).filter(
                Reminder.status == ReminderStatus.PENDING,
                Reminder.send_at <= now + self.horizon,
            ).all()
        finally:
            db.close()

        return sum(1 for reminder_id, send_at in due if self._arm(reminder_id, send_at, now))

    def enqueue(self, reminder: Reminder) -> bool:
        """Take over a freshly stored reminder.

        Returns True when this scheduler will deliver it: armed now, or left to
        the poller when it is beyond the horizon. A scheduler that is not
        running takes nothing.
        """
        if not self._running:
            logger.info(f"Reminder scheduler is not running, reminder {reminder.id} left pending")
            return False

        now = self.clock()
        if reminder.send_at > now + self.horizon:
            logger.info(
                f"Reminder {reminder.id} due {reminder.send_at.isoformat()} is beyond the "
                f"scheduling horizon; the poller will arm it later"
            )
            return True

        self._arm(reminder.id, reminder.send_at, now)
        return True

    def cancel(self, reminder_id: int) -> None:
        with self._lock:
            timer = self._timers.pop(reminder_id, None)
        if timer is not None:
            timer.cancel()

    def _arm(self, reminder_id: int, send_at: datetime, now: datetime) -> bool:
        with self._lock:
            if not self._running:
                return False
            # Reminders being delivered are still pending until their outcome is committed
            if reminder_id in self._timers or reminder_id in self._in_flight:
                return False
            delay = max(0.0, (send_at - now).total_seconds())
            timer = threading.Timer(delay, self.deliver, args=(reminder_id,))
            timer.daemon = True
            self._timers[reminder_id] = timer
            timer.start()

        logger.info(f"Reminder {reminder_id} scheduled for {send_at.isoformat()} UTC")
        return True

    def deliver(self, reminder_id: int) -> Optional[ReminderStatus]:
        """Send one reminder and record the outcome.

        Returns the recorded status, or None when there was nothing to do.
        """
        with self._lock:
            self._timers.pop(reminder_id, None)
            if reminder_id in self._in_flight:
                return None
            self._in_flight.add(reminder_id)

        db = self.session_factory()
        try:
            reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
            if reminder is None or reminder.status != ReminderStatus.PENDING:
                return None

            appointment = reminder.appointment
            if appointment.status == AppointmentStatus.CANCELLED:
                reminder.status = ReminderStatus.CANCELLED
            elif appointment.date <= self.clock():
                logger.warning(f"Appointment {appointment.id} already started, skipping reminder {reminder.id}")
                reminder.status = ReminderStatus.SKIPPED
            elif self.notifier.send_appointment_reminder(reminder.recipient_email, appointment, appointment.doctor):
                reminder.status = ReminderStatus.SENT
                reminder.sent_at = self.clock()
                logger.info(f"Reminder sent successfully for appointment ID {appointment.id}")
            else:
                reminder.status = ReminderStatus.FAILED
                logger.error(f"Failed to send reminder for appointment ID {appointment.id}")

            db.commit()
            return reminder.status
        except Exception:
            db.rollback()
            logger.exception(f"Error delivering reminder {reminder_id}")
            raise
        finally:
            db.close()
            with self._lock:
                self._in_flight.discard(reminder_id)
