from __future__ import annotations

from sqlalchemy.orm import Session

from bikelock.core.entities.reservation import ReservationState
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.infrastructure.models.models import LOCK_STATE_ROW_ID, LockStateModel
from bikelock.infrastructure.repositories._timestamps import from_storage, to_storage


class LockStateRepositoryImpl(LockStateRepository):
    """
    SQLAlchemy implementation for the single reservation record.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self) -> ReservationState:
        row = self._db.get(LockStateModel, LOCK_STATE_ROW_ID)
        if row is None:
            return ReservationState.idle()

        return ReservationState(
            is_locked=row.is_locked,
            start_time=from_storage(row.start_time),
            end_time=from_storage(row.end_time),
            duration_minutes=row.duration_minutes,
        )

    def replace(self, state: ReservationState) -> None:
        row = self._db.get(LockStateModel, LOCK_STATE_ROW_ID)
        if row is None:
            row = LockStateModel(id=LOCK_STATE_ROW_ID)

        row.is_locked = state.is_locked
        row.start_time = to_storage(state.start_time)
        row.end_time = to_storage(state.end_time)
        row.duration_minutes = state.duration_minutes

        self._db.add(row)
        self._db.flush()
