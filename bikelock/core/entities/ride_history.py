from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from itertools import islice
from typing import Iterable, Iterator

DEFAULT_HISTORY_CAPACITY = 3


@dataclass(frozen=True, slots=True)
class RideHistoryEntry:
    start_time: datetime
    end_time: datetime
    amount: int


class RideHistory:
    """
    Fixed-capacity ring of past rides, newest first.

    Recording into a full ring evicts the oldest entry.
    """

    def __init__(
        self,
        entries: Iterable[RideHistoryEntry] = (),
        *,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        # Stored newest first; appendleft pushes the oldest off the right end.
        self._entries: deque[RideHistoryEntry] = deque(islice(entries, capacity), maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, entry: RideHistoryEntry) -> None:
        self._entries.appendleft(entry)

    def entries(self) -> list[RideHistoryEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[RideHistoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
