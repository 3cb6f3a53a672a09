from datetime import datetime

import httpx
import pytest

from medibook.models import Appointment, Doctor
from medibook.services.notification_service import (
    EmailNotifier,
    directions_link,
    format_appointment_datetime,
    is_valid_email,
    render_confirmation,
    render_reminder,
)

@pytest.fixture
def appointment():
    # 09:00 UTC is 2:30 PM in India
    return Appointment(id=7, doctor_id=1, patient_id=1, date=datetime(2026, 1, 5, 9, 0))

@pytest.fixture
def doctor():
    return Doctor(
        id=1,
        name="Dr. Priya Sharma",
        specialty="Cardiologist",
        location="Apollo Hospital, Bannerghatta Road, Bangalore",
    )

class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        self.messages.append(msg)

def test_format_appointment_datetime():
    assert format_appointment_datetime(datetime(2026, 1, 5, 9, 0), "Asia/Kolkata") == (
        "Monday, January 5, 2026",
        "2:30 PM IST",
    )
    assert format_appointment_datetime(datetime(2026, 1, 5, 20, 15), "UTC") == (
        "Monday, January 5, 2026",
        "8:15 PM UTC",
    )

@pytest.mark.parametrize("email, valid", [
    ("patient@example.com", True),
    ("first.last@clinic.co.in", True),
    ("", False),
    ("patient", False),
    ("patient@example", False),
    ("pat ient@example.com", False),
])
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid

def test_directions_link_encodes_location():
    link = directions_link("Apollo Hospital, Bangalore")
    assert link == "https://www.google.com/maps/dir/?api=1&destination=Apollo%20Hospital%2C%20Bangalore"

def test_render_confirmation(appointment, doctor):
    subject, text, html = render_confirmation(appointment, doctor, "Asia/Kolkata")

    assert subject == "Your Appointment Confirmation"
    for body in (text, html):
        assert "Dr. Priya Sharma" in body
        assert "Monday, January 5, 2026" in body
        assert "2:30 PM IST" in body
        assert "arrive 15 minutes before" in body
    assert directions_link(doctor.location) in text

def test_render_reminder(appointment, doctor):
    subject, text, html = render_reminder(appointment, doctor, "Asia/Kolkata")

    assert subject == "Reminder: Your Appointment is in 1 Hour"
    assert "Your appointment is in 1 hour" in text
    assert "Get Directions to Clinic" in html

class TestSmtpBackend:

    @pytest.fixture(autouse=True)
    def fake_smtp(self, monkeypatch):
        FakeSMTP.instances = []
        monkeypatch.setattr("medibook.services.notification_service.smtplib.SMTP", FakeSMTP)

    def _notifier(self, **kwargs):
        options = dict(
            backend="smtp",
            sender="clinic@example.com",
            smtp_host="smtp.example.com",
            smtp_user="clinic",
            smtp_password="secret",
        )
        options.update(kwargs)
        return EmailNotifier(**options)

    def test_sends_confirmation(self, appointment, doctor):
        assert self._notifier().send_appointment_confirmation("patient@example.com", appointment, doctor) is True

        smtp = FakeSMTP.instances[0]
        assert (smtp.host, smtp.port) == ("smtp.example.com", 587)
        assert smtp.started_tls
        assert smtp.logged_in == ("clinic", "secret")

        msg = smtp.messages[0]
        assert msg["To"] == "patient@example.com"
        assert msg["From"] == "clinic@example.com"
        assert msg["Subject"] == "Your Appointment Confirmation"
        assert msg.is_multipart()

    def test_invalid_recipient(self, appointment, doctor):
        assert self._notifier().send_appointment_reminder("not-an-address", appointment, doctor) is False
        assert FakeSMTP.instances == []

    def test_missing_host(self, appointment, doctor):
        assert self._notifier(smtp_host=None).send_appointment_confirmation(
            "patient@example.com", appointment, doctor
        ) is False

    def test_transport_error(self, monkeypatch, appointment, doctor):
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr("medibook.services.notification_service.smtplib.SMTP", refuse)
        assert self._notifier().send_appointment_confirmation("patient@example.com", appointment, doctor) is False

    def test_unknown_backend(self, appointment, doctor):
        assert self._notifier(backend="pigeon").send_appointment_confirmation(
            "patient@example.com", appointment, doctor
        ) is False

class TestMailgunBackend:

    def _notifier(self):
        return EmailNotifier(
            backend="mailgun",
            mailgun_api_key="key-123",
            mailgun_domain="mg.example.com",
        )

    def _fake_post(self, calls, status_code):
        def post(url, **kwargs):
            calls.append((url, kwargs))
            return httpx.Response(status_code, request=httpx.Request("POST", url))
        return post

    def test_sends_reminder(self, monkeypatch, appointment, doctor):
        calls = []
        monkeypatch.setattr("medibook.services.notification_service.httpx.post", self._fake_post(calls, 200))

        assert self._notifier().send_appointment_reminder("patient@example.com", appointment, doctor) is True

        url, kwargs = calls[0]
        assert url == "https://api.mailgun.net/v3/mg.example.com/messages"
        assert kwargs["auth"] == ("api", "key-123")
        assert kwargs["data"]["to"] == "patient@example.com"
        assert kwargs["data"]["from"] == "Doctor Appointments <mailgun@mg.example.com>"
        assert kwargs["data"]["subject"] == "Reminder: Your Appointment is in 1 Hour"

    def test_rejected_request(self, monkeypatch, appointment, doctor):
        monkeypatch.setattr("medibook.services.notification_service.httpx.post", self._fake_post([], 401))

        assert self._notifier().send_appointment_confirmation("patient@example.com", appointment, doctor) is False

    def test_not_configured(self, appointment, doctor):
        notifier = EmailNotifier(backend="mailgun")
        assert notifier.send_appointment_confirmation("patient@example.com", appointment, doctor) is False
