"""
Shared test fixtures.

Use-case tests run against in-memory repository doubles and a clock that only
moves when told to, so no test depends on the wall clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bikelock.core.entities.reservation import ReservationState
from bikelock.core.entities.ride_history import RideHistory
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.core.repositories.ride_history_repository import RideHistoryRepository

START = datetime(2026, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = START) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now


class InMemoryLockStateRepository(LockStateRepository):
    def __init__(self, state: ReservationState | None = None) -> None:
        self.state = state or ReservationState.idle()
        self.writes = 0

    def get(self) -> ReservationState:
        return self.state

    def replace(self, state: ReservationState) -> None:
        self.state = state
        self.writes += 1


class InMemoryRideHistoryRepository(RideHistoryRepository):
    def __init__(self, capacity: int = 3) -> None:
        self._entries = []
        self._capacity = capacity

    def load(self) -> RideHistory:
        return RideHistory(self._entries, capacity=self._capacity)

    def save(self, history: RideHistory) -> None:
        self._entries = history.entries()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def lock_state_repo() -> InMemoryLockStateRepository:
    return InMemoryLockStateRepository()


@pytest.fixture()
def history_repo() -> InMemoryRideHistoryRepository:
    return InMemoryRideHistoryRepository()


@pytest.fixture()
def clock_factory():
    return FakeClock
