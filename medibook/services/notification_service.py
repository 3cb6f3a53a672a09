"""Appointment emails.

Confirmation and reminder messages are rendered as HTML and plain text and
delivered over SMTP or through the Mailgun HTTP API. Sending never raises:
every failure is logged and reported as ``False`` so a booking is never undone
by a mail problem.
"""
from datetime import datetime, timezone
from email.message import EmailMessage
from html import escape
from typing import Optional, Tuple
from urllib.parse import quote
from zoneinfo import ZoneInfo
import logging
import re
import smtplib

import httpx

from ..core.config import Settings
from ..models.appointment import Appointment
from ..models.doctor import Doctor

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

class NotificationError(Exception):
    """Raised when a message cannot be handed to the mail transport."""

def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None

def directions_link(location: str) -> str:
    return f"https://www.google.com/maps/dir/?api=1&destination={quote(location, safe='')}"

def format_appointment_datetime(value: datetime, tz_name: str) -> Tuple[str, str]:
    """Render a naive-UTC instant as ("Monday, January 5, 2026", "2:30 PM IST")."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone(ZoneInfo(tz_name))
    date_text = f"{local:%A, %B} {local.day}, {local.year}"
    time_text = f"{local.hour % 12 or 12}:{local:%M %p} {local.tzname()}"
    return date_text, time_text

def render_confirmation(appointment: Appointment, doctor: Doctor, tz_name: str) -> Tuple[str, str, str]:
    """Subject, text and HTML bodies of a booking confirmation."""
    date_text, time_text = format_appointment_datetime(appointment.date, tz_name)
    link = directions_link(doctor.location)

    text = (
        "Your Appointment is Confirmed!\n\n"
        "Appointment Details:\n"
        f"- Doctor: {doctor.name}\n"
        f"- Date: {date_text}\n"
        f"- Time: {time_text}\n"
        f"- Location: {doctor.location}\n\n"
        "Important: Please arrive 15 minutes before your scheduled appointment time.\n\n"
        f"Get directions to the clinic: {link}\n\n"
        "Best regards,\nYour Healthcare Team"
    )
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
      <h2 style="color: #2563eb;">Your Appointment is Confirmed!</h2>
      <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0;">Appointment Details:</h3>
        <p><strong>Doctor:</strong> {escape(doctor.name)}</p>
        <p><strong>Date:</strong> {date_text}</p>
        <p><strong>Time:</strong> {time_text}</p>
        <p><strong>Location:</strong> {escape(doctor.location)}</p>
      </div>
      <p style="color: #4b5563;"><strong>Important:</strong> Please arrive 15 minutes before your scheduled appointment time.</p>
      <p style="color: #4b5563;">Get directions to the clinic: <a href="{escape(link)}" style="color: #2563eb;">Click here for directions</a></p>
      <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
        <p style="color: #6b7280;">Best regards,<br>Your Healthcare Team</p>
      </div>
    </div>"""
    return "Your Appointment Confirmation", text, html

def render_reminder(appointment: Appointment, doctor: Doctor, tz_name: str) -> Tuple[str, str, str]:
    """Subject, text and HTML bodies of the one-hour reminder."""
    date_text, time_text = format_appointment_datetime(appointment.date, tz_name)
    link = directions_link(doctor.location)

    text = (
        "Appointment Reminder\n\n"
        "Your appointment is in 1 hour:\n"
        f"- Doctor: {doctor.name}\n"
        f"- Date: {date_text}\n"
        f"- Time: {time_text}\n"
        f"- Location: {doctor.location}\n\n"
        f"Get directions to the clinic: {link}\n\n"
        "Remember: Please arrive 15 minutes before your scheduled time.\n\n"
        "Best regards,\nYour Healthcare Team"
    )
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
      <h2 style="color: #2563eb;">Appointment Reminder</h2>
      <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0;">Your appointment is in 1 hour:</h3>
        <p><strong>Doctor:</strong> {escape(doctor.name)}</p>
        <p><strong>Date:</strong> {date_text}</p>
        <p><strong>Time:</strong> {time_text}</p>
        <p><strong>Location:</strong> {escape(doctor.location)}</p>
      </div>
      <div style="margin: 20px 0;">
        <a href="{escape(link)}" style="background-color: #2563eb; color: white; padding: 12px 20px; text-decoration: none; border-radius: 6px; display: inline-block;">
          Get Directions to Clinic
        </a>
      </div>
      <p style="color: #4b5563;"><strong>Remember:</strong> Please arrive 15 minutes before your scheduled time.</p>
      <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
        <p style="color: #6b7280;">Best regards,<br>Your Healthcare Team</p>
      </div>
    </div>"""
    return "Reminder: Your Appointment is in 1 Hour", text, html

class EmailNotifier:
    def __init__(
        self,
        backend: str = "smtp",
        sender: Optional[str] = None,
        timezone_name: str = "Asia/Kolkata",
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        mailgun_api_key: Optional[str] = None,
        mailgun_domain: Optional[str] = None,
        mailgun_base_url: str = "https://api.mailgun.net/v3",
        timeout: float = 10.0,
    ):
        self.backend = backend
        self.sender = sender
        self.timezone_name = timezone_name
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.mailgun_api_key = mailgun_api_key
        self.mailgun_domain = mailgun_domain
        self.mailgun_base_url = mailgun_base_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            backend=settings.MAIL_BACKEND,
            sender=settings.mail_sender,
            timezone_name=settings.CLINIC_TIMEZONE,
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            smtp_user=settings.SMTP_USER,
            smtp_password=settings.SMTP_PASSWORD,
            smtp_use_tls=settings.SMTP_USE_TLS,
            mailgun_api_key=settings.MAILGUN_API_KEY,
            mailgun_domain=settings.MAILGUN_DOMAIN,
            mailgun_base_url=settings.MAILGUN_BASE_URL,
        )

    def send_appointment_confirmation(self, to_email: str, appointment: Appointment, doctor: Doctor) -> bool:
        subject, text, html = render_confirmation(appointment, doctor, self.timezone_name)
        return self._send(to_email, subject, text, html, kind="confirmation", appointment_id=appointment.id)

    def send_appointment_reminder(self, to_email: str, appointment: Appointment, doctor: Doctor) -> bool:
        subject, text, html = render_reminder(appointment, doctor, self.timezone_name)
        return self._send(to_email, subject, text, html, kind="reminder", appointment_id=appointment.id)

    def _send(self, to_email: str, subject: str, text: str, html: str, kind: str, appointment_id: int) -> bool:
        if not is_valid_email(to_email):
            logger.error(f"Invalid recipient email address for {kind} of appointment {appointment_id}: {to_email!r}")
            return False

        try:
            if self.backend == "mailgun":
                self._send_mailgun(to_email, subject, text, html)
            elif self.backend == "smtp":
                self._send_smtp(to_email, subject, text, html)
            else:
                raise NotificationError(f"Unknown mail backend {self.backend!r}")
        except (NotificationError, smtplib.SMTPException, OSError, httpx.HTTPError) as e:
            logger.error(f"Failed to send {kind} email for appointment {appointment_id}: {e}")
            return False

        logger.info(f"Sent {kind} email for appointment {appointment_id}")
        return True

    def _send_smtp(self, to_email: str, subject: str, text: str, html: str) -> None:
        if not self.smtp_host:
            raise NotificationError("SMTP_HOST is not configured")
        if not self.sender:
            raise NotificationError("No sender address configured")

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as s:
            if self.smtp_use_tls:
                s.starttls()
            if self.smtp_user and self.smtp_password:
                s.login(self.smtp_user, self.smtp_password)
            s.send_message(msg)

    def _send_mailgun(self, to_email: str, subject: str, text: str, html: str) -> None:
        if not self.mailgun_api_key or not self.mailgun_domain:
            raise NotificationError("Mailgun is not configured")

        response = httpx.post(
            f"{self.mailgun_base_url}/{self.mailgun_domain}/messages",
            auth=("api", self.mailgun_api_key),
            data={
                "from": self.sender or f"Doctor Appointments <mailgun@{self.mailgun_domain}>",
                "to": to_email,
                "subject": subject,
                "text": text,
                "html": html,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
