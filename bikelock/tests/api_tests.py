from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

import bikelock.presentation.routers as routers
from bikelock.schemas.models import PaymentResponse


class _DummyDB:
    """A minimal stand-in for a SQLAlchemy Session (we never call it in router tests)."""


@pytest.fixture()
def app() -> FastAPI:
    """
    Build a tiny FastAPI app with ONLY the router under test.

    We override the DB dependency so tests don't touch the real SessionLocal / SQLite.
    """
    test_app = FastAPI()
    test_app.include_router(routers.router)

    def _override_get_db():
        yield _DummyDB()

    test_app.dependency_overrides[routers.get_db] = _override_get_db
    return test_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _receipt(is_future: bool | None) -> PaymentResponse:
    start = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
    return PaymentResponse(
        success=True,
        message="ok",
        unlock=not is_future,
        startTime=start,
        endTime=start.replace(hour=13),
        durationMinutes=60,
        isFuture=is_future,
    )


def test_login_echoes_user(client: TestClient) -> None:
    r = client.post("/api/login", json={"username": "ana"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Logged in", "user": "ana"}


@pytest.mark.parametrize("body", [{}, {"username": ""}, None])
def test_login_without_username_returns_400(client: TestClient, body) -> None:
    r = client.post("/api/login", json=body) if body is not None else client.post("/api/login")
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Username required"}


def test_end_ride_invalid_state_maps_to_400(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_end_ride_service(db):
        raise routers.InvalidStateError("Ride not active")

    monkeypatch.setattr(routers, "end_ride_service", _fake_end_ride_service)

    r = client.post("/api/end-ride")
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Ride not active"}


def test_payment_invalid_input_maps_to_400(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_payment_service(body, db):
        raise routers.InvalidInputError("Invalid duration")

    monkeypatch.setattr(routers, "payment_service", _fake_payment_service)

    r = client.post("/api/payment", json={"durationMinutes": 0})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Invalid duration"}


def test_payment_omits_is_future_for_immediate_bookings(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(routers, "payment_service", lambda body, db: _receipt(None))

    r = client.post("/api/payment", json={"durationMinutes": 60})
    assert r.status_code == 200
    assert "isFuture" not in r.json()


def test_payment_keeps_is_future_false_for_scheduled_bookings(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(routers, "payment_service", lambda body, db: _receipt(False))

    r = client.post("/api/payment", json={"bookingDate": "2026-03-10", "hours": 1})
    assert r.status_code == 200
    assert r.json()["isFuture"] is False


def test_payment_passes_an_empty_body_through(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = []

    def _fake_payment_service(body, db):
        seen.append(body)
        raise routers.InvalidInputError("Booking date is required")

    monkeypatch.setattr(routers, "payment_service", _fake_payment_service)

    r = client.post("/api/payment")
    assert r.status_code == 400
    assert seen[0].bookingDate is None and seen[0].durationMinutes is None


def test_lock_status_shape(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        routers, "get_lock_signal_service", lambda db: routers.LockStatusResponse(unlock=True, timeLeft=90)
    )

    r = client.get("/api/lock-status")
    assert r.status_code == 200
    assert r.json() == {"unlock": True, "timeLeft": 90}
