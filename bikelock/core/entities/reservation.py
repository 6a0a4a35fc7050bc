from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

logger = logging.getLogger(__name__)


class LockPhase(str, Enum):
    LOCKED_IDLE = "LOCKED_IDLE"
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"


@dataclass(frozen=True, slots=True)
class ReservationState:
    """
    The single reservation record of the shared bike.

    Never mutated in place: bookings, expiration and manual ends all produce a
    new instance that replaces the stored one.
    """
    is_locked: bool = True
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int = 0

    def __post_init__(self) -> None:
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("start_time and end_time must be set together")
        if self.start_time is not None and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.duration_minutes < 0:
            raise ValueError("duration_minutes must be >= 0")
        if not self.is_locked and self.start_time is None:
            raise ValueError("an unlocked bike must carry a reservation")

    @classmethod
    def idle(cls) -> ReservationState:
        return cls()

    @property
    def has_reservation(self) -> bool:
        return self.start_time is not None

    @property
    def phase(self) -> LockPhase:
        if not self.is_locked:
            return LockPhase.ACTIVE
        if self.has_reservation:
            return LockPhase.SCHEDULED
        return LockPhase.LOCKED_IDLE

    def remaining(self, now: datetime) -> timedelta:
        """Time left until end_time, floored at zero (zero when no reservation)."""
        if self.end_time is None:
            return timedelta(0)
        return max(timedelta(0), self.end_time - now)


def check_activation(state: ReservationState, now: datetime) -> ReservationState:
    if state.phase is LockPhase.SCHEDULED and now >= state.start_time:
        logger.info("Scheduled ride starting. Unlocking...")
        return replace(state, is_locked=False)
    return state


def check_expiration(state: ReservationState, now: datetime) -> ReservationState:
    if state.phase is LockPhase.ACTIVE and now > state.end_time:
        logger.info("Ride expired. Locking...")
        return ReservationState.idle()
    return state


def reconcile(state: ReservationState, now: datetime) -> ReservationState:
    """
    Apply the time-based transitions due at `now`.

    Activation runs before expiration so a scheduled ride whose whole window
    already passed ends up idle.
    """
    return check_expiration(check_activation(state, now), now)
