from __future__ import annotations

from abc import ABC, abstractmethod

from bikelock.core.entities.ride_history import RideHistory


class RideHistoryRepository(ABC):
    @abstractmethod
    def load(self) -> RideHistory:
        raise NotImplementedError

    @abstractmethod
    def save(self, history: RideHistory) -> None:
        raise NotImplementedError
