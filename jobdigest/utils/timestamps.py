"""Timestamp utilities for UTC handling and provider date parsing.

This module provides utilities for working with timestamps:
- Getting current UTC time
- Parsing the date strings job boards publish (ISO 8601, RFC 2822, epoch)
- Converting timezone-naive to timezone-aware UTC
- Formatting timestamps for status records and file names
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

# YYYYMMDD; any other digit string is epoch seconds
COMPACT_DATE_LENGTH = 8


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string to UTC datetime.

    Supports:
    - 2025-11-04T12:00:00Z
    - 2025-11-04T12:00:00.123Z
    - 2025-11-04T12:00:00+00:00
    - 2025-11-04T12:00:00
    - 2025-11-04

    Args:
        iso_string: ISO 8601 formatted datetime string

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    # fromisoformat only accepts the 'Z' suffix from Python 3.11 on
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        return None


def parse_provider_date(value: Union[str, int, float, None]) -> Optional[datetime]:
    """Parse a posting date as published by a job board.

    Accepts ISO 8601, RFC 2822 (``Fri, 05 Jan 2024 10:00:00 +0000``),
    compact ``YYYYMMDD`` dates and Unix epoch seconds given as a number or
    other numeric string.

    Args:
        value: Date value from the provider payload

    Returns:
        Timezone-aware datetime in UTC, or None if the value is not parseable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return _from_epoch(value)

    stripped = value.strip()
    if not stripped:
        return None

    # Checked first: newer fromisoformat accepts some bare digit strings
    if stripped.isdigit() and len(stripped) == COMPACT_DATE_LENGTH:
        return _from_compact_date(stripped)
    if stripped.replace(".", "", 1).isdigit():
        return _from_epoch(float(stripped))

    parsed = parse_iso_datetime(stripped)
    if parsed is not None:
        return parsed

    try:
        return ensure_utc(parsedate_to_datetime(stripped))
    except (TypeError, ValueError, IndexError):
        return None


def _from_compact_date(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, "%Y%m%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_timestamp(dt: datetime, include_microseconds: bool = False) -> str:
    """Format a datetime as ISO 8601 string in UTC.

    Args:
        dt: Datetime to format
        include_microseconds: Whether to include microseconds in output

    Returns:
        ISO 8601 formatted string with 'Z' suffix

    Example:
        >>> from datetime import datetime, timezone
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc))
        '2025-11-04T12:00:00Z'
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""

    if include_microseconds:
        return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")


def file_timestamp(tz_name: str = "UTC", now: Optional[datetime] = None) -> str:
    """Format a local timestamp that is safe to embed in a file name.

    Args:
        tz_name: IANA timezone used for the local time
        now: Moment to format (defaults to the current time)

    Returns:
        Timestamp like ``2025-11-04T13-00-00``
    """
    moment = ensure_utc(now) if now is not None else utc_now()
    local = moment.astimezone(ZoneInfo(tz_name))
    return local.strftime("%Y-%m-%dT%H-%M-%S")
