from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from bikelock.core.clock import Clock
from bikelock.core.entities.reservation import ReservationState
from bikelock.core.entities.ride_history import RideHistoryEntry
from bikelock.core.entities.tariff import IMMEDIATE_TARIFF, SCHEDULED_TARIFF, Tariff
from bikelock.core.errors import InvalidInputError
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.core.repositories.ride_history_repository import RideHistoryRepository
from bikelock.core.use_cases.reconcile_lock_state import load_reconciled_state

logger = logging.getLogger(__name__)

BOOKING_WINDOW_DAYS = 5

UNLOCKING_MESSAGE = "Payment Successful. Unlocking..."
SCHEDULED_MESSAGE = "Booking Scheduled."


@dataclass(frozen=True, slots=True)
class ImmediateBooking:
    """Pay for `duration_minutes` and unlock right away."""
    duration_minutes: int | None


@dataclass(frozen=True, slots=True)
class ScheduledBooking:
    """Pay for hours + minutes starting on `booking_date` (ISO date string or date)."""
    booking_date: str | date | None
    hours: int | None = None
    minutes: int | None = None


BookingRequest = ImmediateBooking | ScheduledBooking


@dataclass(frozen=True, slots=True)
class BookingPlan:
    """
    A fully validated booking, computed before anything is written.
    `is_future` is None for variants that cannot schedule ahead.
    """
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    amount: int
    is_future: bool | None

    @property
    def is_locked(self) -> bool:
        return bool(self.is_future)


@dataclass(frozen=True, slots=True)
class BookingReceipt:
    """
    Use-case return type for POST /api/payment
    """
    message: str
    unlock: bool
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    amount: int
    is_future: bool | None


def _end_time(start_time: datetime, duration: int) -> datetime:
    try:
        return start_time + timedelta(minutes=duration)
    except OverflowError as e:
        raise InvalidInputError("Invalid duration") from e


class BookingPolicy(ABC):
    def __init__(self, tariff: Tariff) -> None:
        self.tariff = tariff

    @abstractmethod
    def plan(self, request: BookingRequest, now: datetime) -> BookingPlan:
        """Validate `request` at `now`; raise InvalidInputError on any rejected field."""


class ImmediateBookingPolicy(BookingPolicy):
    def __init__(self, tariff: Tariff = IMMEDIATE_TARIFF) -> None:
        super().__init__(tariff)

    def plan(self, request: ImmediateBooking, now: datetime) -> BookingPlan:
        duration = request.duration_minutes
        if duration is None:
            raise InvalidInputError("Duration is required")
        if duration <= 0:
            raise InvalidInputError("Invalid duration")

        return BookingPlan(
            start_time=now,
            end_time=_end_time(now, duration),
            duration_minutes=duration,
            amount=self.tariff.price(duration),
            is_future=None,
        )


class ScheduledBookingPolicy(BookingPolicy):
    def __init__(self, tariff: Tariff = SCHEDULED_TARIFF, *, window_days: int = BOOKING_WINDOW_DAYS) -> None:
        super().__init__(tariff)
        self.window_days = window_days

    def plan(self, request: ScheduledBooking, now: datetime) -> BookingPlan:
        if not request.booking_date:
            raise InvalidInputError("Booking date is required")

        booking_date = self._parse_booking_date(request.booking_date)

        # Day granularity: only calendar dates are compared, in the clock's zone.
        days_ahead = (booking_date - now.date()).days
        if not 0 <= days_ahead <= self.window_days:
            raise InvalidInputError(f"Booking date must be within the next {self.window_days} days")

        duration = (request.hours or 0) * 60 + (request.minutes or 0)
        if duration <= 0:
            raise InvalidInputError("Invalid duration")

        if days_ahead == 0:
            start_time = now
        else:
            start_time = datetime.combine(booking_date, now.timetz().replace(microsecond=0))

        return BookingPlan(
            start_time=start_time,
            end_time=_end_time(start_time, duration),
            duration_minutes=duration,
            amount=self.tariff.price(duration),
            is_future=start_time > now,
        )

    @staticmethod
    def _parse_booking_date(value: str | date) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value).date()
        except ValueError as e:
            raise InvalidInputError("Invalid booking date") from e


class CommitBookingUseCase:
    """
    Commits a paid booking: validates it under the policy of its variant, records
    the ride in the history ring and replaces the reservation wholesale.

    Not idempotent. A new booking overwrites whatever reservation was in place.
    """

    def __init__(
        self,
        *,
        lock_state_repo: LockStateRepository,
        history_repo: RideHistoryRepository,
        clock: Clock,
        immediate_policy: BookingPolicy | None = None,
        scheduled_policy: BookingPolicy | None = None,
    ) -> None:
        self._lock_state_repo = lock_state_repo
        self._history_repo = history_repo
        self._clock = clock

        self._policies: dict[type, BookingPolicy] = {
            ImmediateBooking: immediate_policy or ImmediateBookingPolicy(),
            ScheduledBooking: scheduled_policy or ScheduledBookingPolicy(),
        }

    def execute(self, request: BookingRequest) -> BookingReceipt:
        policy = self._policies.get(type(request))
        if policy is None:
            raise ValueError(f"Unsupported booking request: {type(request).__name__}")

        now = self._clock.now()
        previous = load_reconciled_state(self._lock_state_repo, now)

        plan = policy.plan(request, now)

        history = self._history_repo.load()
        history.record(RideHistoryEntry(start_time=plan.start_time, end_time=plan.end_time, amount=plan.amount))
        self._history_repo.save(history)

        self._lock_state_repo.replace(
            ReservationState(
                is_locked=plan.is_locked,
                start_time=plan.start_time,
                end_time=plan.end_time,
                duration_minutes=plan.duration_minutes,
            )
        )

        if previous.has_reservation:
            logger.info("Booking replaces reservation in phase %s", previous.phase.value)
        logger.info(
            "Booking committed: %d min from %s, amount=%d, scheduled=%s",
            plan.duration_minutes,
            plan.start_time.isoformat(),
            plan.amount,
            plan.is_locked,
        )

        return BookingReceipt(
            message=SCHEDULED_MESSAGE if plan.is_locked else UNLOCKING_MESSAGE,
            unlock=not plan.is_locked,
            start_time=plan.start_time,
            end_time=plan.end_time,
            duration_minutes=plan.duration_minutes,
            amount=plan.amount,
            is_future=plan.is_future,
        )
