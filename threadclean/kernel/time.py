from __future__ import annotations

from datetime import datetime, timezone

UTC = timezone.utc


def is_tz_aware(value: datetime) -> bool:
    """True if a datetime is timezone-aware (has a non-None UTC offset)."""
    return value.tzinfo is not None and value.utcoffset() is not None


def coerce_utc(value: datetime, *, assume_naive_is_utc: bool = True) -> datetime:
    """Coerce any datetime to tz-aware UTC."""
    if is_tz_aware(value):
        return value.astimezone(UTC)

    if not assume_naive_is_utc:
        raise ValueError("Naive datetime cannot be coerced without an explicit assumption")

    return value.replace(tzinfo=UTC)


def parse_iso8601(value: str) -> datetime:
    """Parse ISO8601/RFC3339 timestamps into tz-aware UTC datetimes.

    Supports `Z` suffix. Naive timestamps are read as UTC, since the agent
    runtime writes thread timestamps without an offset on some platforms.
    """
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    dt = datetime.fromisoformat(normalized)
    return coerce_utc(dt)


def parse_iso8601_or_none(value: str | None) -> datetime | None:
    """Lenient variant of `parse_iso8601` for optional thread fields."""
    if not value or not value.strip():
        return None
    try:
        return parse_iso8601(value)
    except (ValueError, OverflowError):
        # OverflowError: offset pushes the instant outside the datetime range
        return None
