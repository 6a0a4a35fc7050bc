from __future__ import annotations

from abc import ABC, abstractmethod

from bikelock.core.entities.reservation import ReservationState


class LockStateRepository(ABC):
    @abstractmethod
    def get(self) -> ReservationState:
        """Return the current record, the idle sentinel if none was stored yet."""
        raise NotImplementedError

    @abstractmethod
    def replace(self, state: ReservationState) -> None:
        raise NotImplementedError
