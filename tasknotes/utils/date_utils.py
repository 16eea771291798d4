"""
Centralized date/time utilities
All timestamps are timezone-aware UTC
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def get_current_datetime() -> datetime:
    """
    Get current datetime in UTC
    
    Returns:
        Current datetime object with UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_due_date(value: Any) -> Optional[date]:
    """
    Parse a due date sent by a client
    
    Accepts a date, a datetime, "YYYY-MM-DD" or a full ISO timestamp
    such as "2024-11-05T00:00:00.000Z" (converted to UTC, then only the date part is kept).
    
    Args:
        value: Raw due date value
        
    Returns:
        Parsed date, or None for empty input
        
    Raises:
        ValueError: If the value is not a recognizable date
    """
    if value is None:
        return None
    
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    
    if isinstance(value, date):
        return value
    
    if not isinstance(value, str):
        raise ValueError(f"Unsupported due date value: {value!r}")
    
    text = value.strip()
    if not text:
        return None
    
    if "T" in text or " " in text:
        return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00"))).date()
    
    return date.fromisoformat(text)


def due_date_start(due_date: date) -> datetime:
    """Midnight UTC at the start of the due date"""
    return datetime.combine(due_date, time.min, tzinfo=timezone.utc)


def is_past_due(due_date: date, now: datetime) -> bool:
    """
    Check whether a due date lies before the given moment
    
    A task due today is past due as soon as today's UTC midnight has passed.
    """
    return due_date_start(due_date) < ensure_utc(now)

