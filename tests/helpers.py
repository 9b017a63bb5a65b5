"""Shared test helpers — recording email client, API shortcuts and row factories."""
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional
from urllib.parse import unquote

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vininfo.application.services.auth_service import hash_password
from vininfo.core.clock import utc_today, utcnow
from vininfo.domain.models.reminder import Reminder
from vininfo.domain.models.user import User
from vininfo.domain.models.vehicle import Vehicle
from vininfo.infrastructure.email_client import EmailClient, EmailDeliveryError

DEFAULT_PASSWORD = "tajne-heslo-123"


@dataclass
class SentEmail:
    to: str
    subject: str
    html: str


class RecordingEmailClient(EmailClient):
    """Records messages instead of calling the provider. Addresses in ``fail_for`` are rejected."""

    def __init__(self, settings=None, fail_for=()):
        super().__init__(settings)
        self.sent: List[SentEmail] = []
        self.fail_for = set(fail_for)

    async def send(self, to: str, subject: str, html: str) -> None:
        self.ensure_configured()
        if to in self.fail_for:
            raise EmailDeliveryError("422: invalid recipient", 422)
        self.sent.append(SentEmail(to=to, subject=subject, html=html))

    def to(self, address: str) -> List[SentEmail]:
        return [m for m in self.sent if m.to == address]


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def in_days(days: int) -> date:
    return utc_today() + timedelta(days=days)


def unsubscribe_token_from(html: str) -> str:
    match = re.search(r"/api/email/unsubscribe\?token=([^\"&<]+)", html)
    assert match, "no unsubscribe link in email"
    return unquote(match.group(1))


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def register(client: TestClient, email: str = "jan@example.cz", password: str = DEFAULT_PASSWORD, **extra) -> dict:
    """Helper — POST /api/auth/register and return response JSON. Leaves the session cookie set."""
    body = {"email": email, "password": password, "termsAccepted": True}
    body.update(extra)
    resp = client.post("/api/auth/register", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def register_verified(client: TestClient, email: str = "jan@example.cz") -> dict:
    data = register(client, email)
    resp = client.post("/api/auth/verify-email", json={"code": data["verificationCode"]})
    assert resp.status_code == 200, resp.text
    return resp.json()["user"]


def create_vehicle(client: TestClient, vin: Optional[str] = "TMBJJ7NE8J0123456", **extra) -> dict:
    body = {"vin": vin, "brand": "ŠKODA", "model": "OCTAVIA"}
    body.update(extra)
    resp = client.post("/api/client/vehicles", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["vehicle"]


def create_reminder(client: TestClient, vehicle_id: str, due_date: Optional[date] = None, **extra) -> dict:
    body = {
        "vehicleId": vehicle_id,
        "type": "stk",
        "dueDate": (due_date or in_days(30)).isoformat(),
    }
    body.update(extra)
    resp = client.post("/api/client/reminders", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["reminder"]


# ---------------------------------------------------------------------------
# Row factories for service-level tests
# ---------------------------------------------------------------------------
def make_user(db: Session, email: str = "jan@example.cz", verified: bool = True, **fields) -> User:
    user = User(
        email=email,
        password_hash=hash_password(DEFAULT_PASSWORD),
        terms_accepted_at=utcnow(),
        email_verified_at=utcnow() if verified else None,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_vehicle(db: Session, user: User, **fields) -> Vehicle:
    values = {"vin": "TMBJJ7NE8J0123456", "brand": "ŠKODA", "model": "OCTAVIA"}
    values.update(fields)
    vehicle = Vehicle(user_id=user.id, **values)
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def make_reminder(db: Session, vehicle: Vehicle, due_date: Optional[date] = None, **fields) -> Reminder:
    due_date = due_date or in_days(1)
    values = {"type": "stk", "email_enabled": True, "email_send_at": due_date - timedelta(days=1)}
    values.update(fields)
    reminder = Reminder(user_id=vehicle.user_id, vehicle_id=vehicle.id, due_date=due_date, **values)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder
