from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_future_date(value: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True when ``value`` is strictly after ``now`` (defaults to the current time)."""
    if value is None:
        return False
    reference = to_naive_utc(now) if now is not None else utcnow()
    return to_naive_utc(value) > reference


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime read back from the database."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 string with an explicit ``+00:00`` offset."""
    if value is None:
        return None
    return as_utc(value).isoformat()
