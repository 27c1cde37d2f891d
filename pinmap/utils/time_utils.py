"""
Time helpers - all timestamps are stored as naive UTC
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current UTC time without tzinfo (matches DateTime columns)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_isoformat(value: Optional[datetime]) -> Optional[str]:
    """Serialize a naive-UTC or aware datetime as an ISO string ending in Z"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"
