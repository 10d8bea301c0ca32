"""UTC timestamp helpers shared by the domain and persistence layers."""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Strip the timezone after converting to UTC, for storage columns without tz support."""
    if value is None:
        return None
    return ensure_utc(value).replace(tzinfo=None)
