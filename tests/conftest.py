import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

# Configure the application before it is imported
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SEED_DOCTORS"] = "false"
os.environ["REMINDERS_ENABLED"] = "false"
os.environ.pop("GOOGLE_MAPS_API_KEY", None)

from medibook.main import app  # noqa: E402
from medibook.api.deps import get_notifier, get_reminder_scheduler  # noqa: E402
from medibook.core.database import Base, SessionLocal, engine, get_redis  # noqa: E402
from medibook.models import Doctor  # noqa: E402
from medibook.seed_data import SEED_DOCTORS  # noqa: E402


class FakeRedis:
    """In-memory stand-in for the few redis commands the rate limiter uses."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, seconds, value):
        self.data[key] = str(value)
        return True

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, 0)) + 1)
        return int(self.data[key])


class RecordingNotifier:
    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    def send_appointment_confirmation(self, to_email, appointment, doctor):
        self.sent.append(("confirmation", to_email, appointment.id, doctor.name))
        return self.succeed

    def send_appointment_reminder(self, to_email, appointment, doctor):
        self.sent.append(("reminder", to_email, appointment.id, doctor.name))
        return self.succeed


class RecordingScheduler:
    def __init__(self):
        self.enqueued = []
        self.cancelled = []

    def enqueue(self, reminder):
        self.enqueued.append(reminder.id)
        return True

    def cancel(self, reminder_id):
        self.cancelled.append(reminder_id)


def future_slot(days=2, hour=10, minutes=0):
    """A whole-hour UTC instant ``days`` from now, shifted by ``minutes``."""
    base = (datetime.now(timezone.utc) + timedelta(days=days)).replace(
        hour=hour, minute=0, second=0, microsecond=0
    )
    return base + timedelta(minutes=minutes)


def booking_payload(doctor_id, when):
    return {
        "doctorId": doctor_id,
        "date": when.isoformat(),
        "time": when.strftime("%H:%M"),
    }


def register_and_login(client, email="patient@example.com", password="TestPassword123", full_name="Test Patient"):
    client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "fullName": full_name,
    })
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def doctors(db_session):
    """Bangalore and Ahmedabad cardiologists and a Delhi dermatologist."""
    rows = [Doctor(**SEED_DOCTORS[i]) for i in (0, 2, 5)]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return rows


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(test_db, notifier, scheduler, fake_redis):
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_reminder_scheduler] = lambda: scheduler
    app.dependency_overrides[get_redis] = lambda: fake_redis
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)
