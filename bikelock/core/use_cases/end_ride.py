from __future__ import annotations

import logging
from dataclasses import dataclass

from bikelock.core.clock import Clock
from bikelock.core.entities.reservation import LockPhase, ReservationState
from bikelock.core.errors import InvalidStateError
from bikelock.core.repositories.lock_state_repository import LockStateRepository
from bikelock.core.use_cases.reconcile_lock_state import load_reconciled_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EndRideResult:
    message: str


class EndRideUseCase:
    """
    Force the lock closed on an active ride. Scheduled and idle states are
    rejected; the reset is unconditional otherwise.
    """

    def __init__(self, *, lock_state_repo: LockStateRepository, clock: Clock) -> None:
        self._lock_state_repo = lock_state_repo
        self._clock = clock

    def execute(self) -> EndRideResult:
        state = load_reconciled_state(self._lock_state_repo, self._clock.now())
        if state.phase is not LockPhase.ACTIVE:
            raise InvalidStateError("Ride not active")

        self._lock_state_repo.replace(ReservationState.idle())
        logger.info("Ride ended manually by user.")
        return EndRideResult(message="Ride ended successfully")
