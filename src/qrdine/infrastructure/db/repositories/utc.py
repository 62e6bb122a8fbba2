from __future__ import annotations

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Some drivers (sqlite) hand back naive datetimes for timezone-aware columns."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def as_utc_or_none(value: datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None
