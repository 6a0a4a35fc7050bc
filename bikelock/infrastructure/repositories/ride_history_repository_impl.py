from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bikelock.core.entities.ride_history import DEFAULT_HISTORY_CAPACITY, RideHistory, RideHistoryEntry
from bikelock.core.repositories.ride_history_repository import RideHistoryRepository
from bikelock.infrastructure.models.models import RideHistoryModel
from bikelock.infrastructure.repositories._timestamps import from_storage, to_storage


class RideHistoryRepositoryImpl(RideHistoryRepository):
    """
    Stores the history ring as ordered rows; the ring itself decides eviction.
    """

    def __init__(self, db: Session, *, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        self._db = db
        self._capacity = capacity

    def load(self) -> RideHistory:
        rows = self._db.scalars(select(RideHistoryModel).order_by(RideHistoryModel.position)).all()
        entries = [
            RideHistoryEntry(
                start_time=from_storage(row.start_time),
                end_time=from_storage(row.end_time),
                amount=row.amount,
            )
            for row in rows
        ]
        return RideHistory(entries, capacity=self._capacity)

    def save(self, history: RideHistory) -> None:
        self._db.execute(delete(RideHistoryModel))
        for position, entry in enumerate(history):
            self._db.add(
                RideHistoryModel(
                    position=position,
                    start_time=to_storage(entry.start_time),
                    end_time=to_storage(entry.end_time),
                    amount=entry.amount,
                )
            )
        self._db.flush()
