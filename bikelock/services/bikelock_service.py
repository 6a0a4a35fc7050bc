from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bikelock.core.entities.reservation import ReservationState
from bikelock.core.entities.tariff import Tariff
from bikelock.core.use_cases.commit_booking import (
    BookingRequest,
    CommitBookingUseCase,
    ImmediateBooking,
    ImmediateBookingPolicy,
    ScheduledBooking,
    ScheduledBookingPolicy,
)
from bikelock.core.use_cases.end_ride import EndRideUseCase
from bikelock.core.use_cases.get_lock_signal import GetLockSignalUseCase
from bikelock.core.use_cases.get_status import GetStatusUseCase
from bikelock.core.use_cases.login import LoginUseCase
from bikelock.infrastructure.clock import SystemClock
from bikelock.infrastructure.config import settings
from bikelock.infrastructure.models.models import RideHistoryModel
from bikelock.infrastructure.repositories.lock_state_repository_impl import LockStateRepositoryImpl
from bikelock.infrastructure.repositories.ride_history_repository_impl import RideHistoryRepositoryImpl
from bikelock.schemas.models import (
    EndRideResponse,
    LockStatusResponse,
    LoginRequest,
    LoginResponse,
    PaymentRequest,
    PaymentResponse,
    RideHistoryEntry,
    StatusResponse,
)

clock = SystemClock(settings.timezone)

# Every operation reads, checks and replaces the one shared record; sync
# endpoints run on a thread pool, so they are serialized here.
_state_lock = threading.Lock()


@contextmanager
def _state_transaction(db: Session) -> Iterator[None]:
    """
    Run one operation under the state lock as a single transaction.

    All sessions share the one in-memory SQLite connection, so the transaction
    is committed or rolled back before the lock is released.
    """
    with _state_lock:
        try:
            yield
            db.commit()
        except Exception:
            db.rollback()
            raise


def _utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc)


def _history_repo(db: Session) -> RideHistoryRepositoryImpl:
    return RideHistoryRepositoryImpl(db, capacity=settings.ride_history_capacity)


def _to_booking_request(body: PaymentRequest) -> BookingRequest:
    """
    Pick the booking variant from the request shape: any scheduling field makes
    it a scheduled booking, a bare duration an immediate one.
    """
    if body.bookingDate is not None or body.hours is not None or body.minutes is not None:
        return ScheduledBooking(booking_date=body.bookingDate, hours=body.hours, minutes=body.minutes)
    if body.durationMinutes is not None or settings.default_booking_variant == "immediate":
        return ImmediateBooking(duration_minutes=body.durationMinutes)
    return ScheduledBooking(booking_date=None)


def login_service(body: LoginRequest) -> LoginResponse:
    result = LoginUseCase().execute(username=body.username)
    return LoginResponse(success=True, message=result.message, user=result.user)


def get_status_service(db: Session) -> StatusResponse:
    use_case = GetStatusUseCase(
        lock_state_repo=LockStateRepositoryImpl(db),
        history_repo=_history_repo(db),
        clock=clock,
    )

    with _state_transaction(db):
        dto = use_case.execute()

    return StatusResponse(
        isLocked=dto.is_locked,
        rideActive=not dto.is_locked,
        startTime=_utc(dto.start_time),
        endTime=_utc(dto.end_time),
        remainingMinutes=dto.remaining_minutes,
        remainingSeconds=dto.remaining_seconds,
        rideHistory=[
            RideHistoryEntry(startTime=_utc(entry.start_time), endTime=_utc(entry.end_time), amount=entry.amount)
            for entry in dto.ride_history
        ],
    )


def get_lock_signal_service(db: Session) -> LockStatusResponse:
    use_case = GetLockSignalUseCase(lock_state_repo=LockStateRepositoryImpl(db), clock=clock)

    with _state_transaction(db):
        dto = use_case.execute()

    return LockStatusResponse(unlock=dto.unlock, timeLeft=dto.time_left)


def end_ride_service(db: Session) -> EndRideResponse:
    use_case = EndRideUseCase(lock_state_repo=LockStateRepositoryImpl(db), clock=clock)

    with _state_transaction(db):
        result = use_case.execute()

    return EndRideResponse(success=True, message=result.message)


def payment_service(body: PaymentRequest, db: Session) -> PaymentResponse:
    block = settings.billing_block_minutes
    use_case = CommitBookingUseCase(
        lock_state_repo=LockStateRepositoryImpl(db),
        history_repo=_history_repo(db),
        clock=clock,
        immediate_policy=ImmediateBookingPolicy(Tariff(settings.immediate_rate_per_block, block)),
        scheduled_policy=ScheduledBookingPolicy(
            Tariff(settings.scheduled_rate_per_block, block),
            window_days=settings.booking_window_days,
        ),
    )

    with _state_transaction(db):
        receipt = use_case.execute(_to_booking_request(body))

    return PaymentResponse(
        success=True,
        message=receipt.message,
        unlock=receipt.unlock,
        startTime=_utc(receipt.start_time),
        endTime=_utc(receipt.end_time),
        durationMinutes=receipt.duration_minutes,
        isFuture=receipt.is_future,
    )


def reset_state_service(db: Session) -> None:
    """
    Put the bike back to its process-start state: locked, no reservation, empty history
    """
    with _state_transaction(db):
        db.execute(delete(RideHistoryModel))
        LockStateRepositoryImpl(db).replace(ReservationState.idle())
