"""
Time utility functions for UTC parsing and ENTSO-E timestamp formatting.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple

import pandas as pd
import pytz

ENTSOE_TIMESTAMP_FORMAT = "%Y%m%d%H%M"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(pytz.UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Timezone-naive values are assumed to already be UTC.
    """
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def parse_utc_datetime(value: str) -> datetime:
    """
    Parse a date or datetime string into a timezone-aware UTC datetime.

    Accepts ISO dates ("2024-01-01"), datetimes with or without seconds
    ("2024-01-01T23:00Z") and explicit offsets. Naive values are read as UTC.

    Raises:
        ValueError: If the string cannot be parsed as a date
    """
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError("Empty date string")
    # pandas also understands words such as "now" and "today"
    if not text[0].isdigit():
        raise ValueError(f"Invalid date '{value}'")

    try:
        parsed = pd.to_datetime(text, utc=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid date '{value}': {e}")

    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{value}'")

    return parsed.to_pydatetime()


def format_entsoe_timestamp(value: datetime) -> str:
    """
    Format a datetime as the ENTSO-E period string: YYYYMMddHHmm in UTC.

    Examples:
        - 2024-01-01 00:00 UTC -> "202401010000"
        - 2024-06-01 02:30+02:00 -> "202406010030"
    """
    return ensure_utc(value).strftime(ENTSOE_TIMESTAMP_FORMAT)


def day_ahead_window(reference_time: Optional[datetime] = None, hours: int = 24) -> Tuple[datetime, datetime]:
    """
    Window starting at the reference time (default: now, UTC) and spanning the given hours.
    """
    start = ensure_utc(reference_time) if reference_time is not None else utc_now()
    return start, start + timedelta(hours=hours)
