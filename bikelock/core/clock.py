from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """
    Source of the current time for the lazy lock transitions.
    Implementations must return timezone-aware datetimes.
    """

    def now(self) -> datetime:
        raise NotImplementedError
