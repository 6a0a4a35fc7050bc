"""
Booking tariffs
===============

Price = ceil(duration_minutes / block_minutes) x rate_per_block

Each booking variant carries its own tariff; the two are never blended.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

BLOCK_MINUTES = 30


@dataclass(frozen=True, slots=True)
class Tariff:
    rate_per_block: int
    block_minutes: int = BLOCK_MINUTES

    def blocks(self, duration_minutes: int) -> int:
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be > 0 to be priced")
        return math.ceil(duration_minutes / self.block_minutes)

    def price(self, duration_minutes: int) -> int:
        return self.blocks(duration_minutes) * self.rate_per_block


IMMEDIATE_TARIFF = Tariff(rate_per_block=10)
SCHEDULED_TARIFF = Tariff(rate_per_block=100)
