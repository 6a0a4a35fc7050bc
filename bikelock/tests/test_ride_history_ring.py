from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bikelock.core.entities.ride_history import RideHistory, RideHistoryEntry

T0 = datetime(2026, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


def _entry(i: int) -> RideHistoryEntry:
    start = T0 + timedelta(hours=i)
    return RideHistoryEntry(start_time=start, end_time=start + timedelta(minutes=30), amount=10 * (i + 1))


def test_new_history_is_empty() -> None:
    history = RideHistory()
    assert len(history) == 0
    assert history.capacity == 3


def test_record_puts_newest_first() -> None:
    history = RideHistory()
    history.record(_entry(0))
    history.record(_entry(1))
    assert history.entries() == [_entry(1), _entry(0)]


def test_fourth_record_evicts_oldest() -> None:
    history = RideHistory()
    for i in range(4):
        history.record(_entry(i))

    assert len(history) == 3
    assert history.entries() == [_entry(3), _entry(2), _entry(1)]
    assert _entry(0) not in history.entries()


def test_never_exceeds_capacity() -> None:
    history = RideHistory(capacity=2)
    for i in range(10):
        history.record(_entry(i))
        assert len(history) <= 2


def test_seeding_beyond_capacity_keeps_newest() -> None:
    seeded = [_entry(5), _entry(4), _entry(3), _entry(2)]
    history = RideHistory(seeded, capacity=3)
    assert history.entries() == [_entry(5), _entry(4), _entry(3)]


def test_zero_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        RideHistory(capacity=0)
