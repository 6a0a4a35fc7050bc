from __future__ import annotations

from dataclasses import dataclass

from bikelock.core.clock import Clock
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.core.use_cases.reconcile_lock_state import load_reconciled_state


@dataclass(frozen=True, slots=True)
class LockSignalDTO:
    """
    Use-case return type for GET /api/lock-status (embedded lock device)
    """
    unlock: bool
    time_left: int


class GetLockSignalUseCase:
    def __init__(self, *, lock_state_repo: LockStateRepository, clock: Clock) -> None:
        self._lock_state_repo = lock_state_repo
        self._clock = clock

    def execute(self) -> LockSignalDTO:
        now = self._clock.now()
        state = load_reconciled_state(self._lock_state_repo, now)

        return LockSignalDTO(
            unlock=not state.is_locked,
            time_left=int(state.remaining(now).total_seconds()),
        )
