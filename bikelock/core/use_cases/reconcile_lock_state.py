from __future__ import annotations

from datetime import datetime

from bikelock.core.entities.reservation import ReservationState, reconcile
from bikelock.core.repositories.lock_state_repository import LockStateRepository


def load_reconciled_state(lock_state_repo: LockStateRepository, now: datetime) -> ReservationState:
    """
    Read the stored record, apply any transition due at `now` and persist the
    result when it changed. Every use case starts here so state is never
    observed stale.
    """
    current = lock_state_repo.get()
    state = reconcile(current, now)
    if state != current:
        lock_state_repo.replace(state)
    return state
