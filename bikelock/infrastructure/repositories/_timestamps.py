from __future__ import annotations

from datetime import datetime, timezone


def to_storage(value: datetime | None) -> datetime | None:
    """Normalize to UTC before writing; SQLite keeps no offset."""
    if value is None:
        return None
    return value.astimezone(timezone.utc)


def from_storage(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
