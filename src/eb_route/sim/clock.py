# sim/clock.py
from __future__ import annotations

from datetime import UTC, datetime, tzinfo

MIN = 60.0


def minutes(seconds: float) -> float:
    return seconds / MIN


def _with_tz(dt: datetime, tz: tzinfo | str | None) -> datetime:
    """Return dt in the requested timezone (tzinfo or IANA string).
    If tz is None, uses dt's own tz (or UTC if naive)."""
    if tz is None:
        return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
    if isinstance(tz, str):
        from zoneinfo import ZoneInfo

        tz = ZoneInfo(tz)
    if dt.tzinfo is None:
        # naive input is read as local civil time in the target zone
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def hour_at(dt: datetime, *, tz: tzinfo | str | None = None) -> int:
    """Local civil hour 0..23 of dt in tz (DST-aware)."""
    return _with_tz(dt, tz).hour


def parse_hour(at: str, *, tz: tzinfo | str | None = None) -> int:
    """Hour-of-day from an ISO-8601 timestamp string."""
    return hour_at(datetime.fromisoformat(at), tz=tz)
