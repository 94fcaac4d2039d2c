"""Date helpers for filter bounds and alert timestamps.

Nothing in here raises on bad input: an unparsable value comes back as
None and callers treat it as an absent bound.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time


def _is_date_only(value: str) -> bool:
    return len(value) == 10 and "T" not in value


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    try:
        if _is_date_only(text):
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=UTC)
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_bound(value: str | None, *, end_of_day: bool = False) -> datetime | None:
    """Parse a filter bound.

    With *end_of_day* a date-only value is widened to 23:59:59.999 so the
    whole day is inside the range.
    """
    dt = parse_timestamp(value)
    if dt is None:
        return None
    if end_of_day and _is_date_only(value.strip()):
        dt = dt.replace(hour=23, minute=59, second=59, microsecond=999000)
    return dt


def to_iso_utc(dt: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = dt.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_day(value: str | None) -> str | None:
    """Format a bound as dd/mm/yyyy, or None when unparsable."""
    dt = parse_timestamp(value)
    if dt is None:
        return None
    return dt.strftime("%d/%m/%Y")


def day_string(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def epoch(value: str | None, default: float) -> float:
    dt = parse_timestamp(value)
    return dt.timestamp() if dt is not None else default
