from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bikelock.core.clock import Clock
from bikelock.core.entities.ride_history import RideHistoryEntry
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.core.repositories.ride_history_repository import RideHistoryRepository
from bikelock.core.use_cases.reconcile_lock_state import load_reconciled_state


@dataclass(frozen=True, slots=True)
class StatusDTO:
    """
    Use-case return type for GET /api/status
    """
    is_locked: bool
    start_time: datetime | None
    end_time: datetime | None
    remaining_minutes: int
    remaining_seconds: int
    ride_history: list[RideHistoryEntry]


class GetStatusUseCase:
    def __init__(
        self,
        *,
        lock_state_repo: LockStateRepository,
        history_repo: RideHistoryRepository,
        clock: Clock,
    ) -> None:
        self._lock_state_repo = lock_state_repo
        self._history_repo = history_repo
        self._clock = clock

    def execute(self) -> StatusDTO:
        now = self._clock.now()
        state = load_reconciled_state(self._lock_state_repo, now)

        remaining_minutes, remaining_seconds = divmod(int(state.remaining(now).total_seconds()), 60)

        return StatusDTO(
            is_locked=state.is_locked,
            start_time=state.start_time,
            end_time=state.end_time,
            remaining_minutes=remaining_minutes,
            remaining_seconds=remaining_seconds,
            ride_history=self._history_repo.load().entries(),
        )
