"""
Date and timestamp normalization helpers.

Records carry calendar dates and UTC instants; values read from JSON,
the CLI or older snapshots arrive as strings in several ISO shapes.
"""

import datetime as dt
from typing import Any


def utc_now() -> dt.datetime:
    """Current instant as an aware UTC datetime."""
    return dt.datetime.now(dt.timezone.utc)


def parse_calendar_date(value: str | dt.date) -> dt.date:
    """
    Parse a calendar date.

    Accepts "YYYY-MM-DD", a full ISO timestamp (its date part is used,
    including a trailing "Z"), a date, or a datetime.

    Raises:
        ValueError: If the string is not an ISO date or timestamp
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    text = value.strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        return parse_instant(text).date()


def parse_instant(value: str | dt.datetime) -> dt.datetime:
    """
    Parse an instant into an aware UTC datetime.

    Naive values are taken to be UTC.

    Raises:
        ValueError: If the string is not an ISO timestamp
    """
    if isinstance(value, dt.datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = dt.datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


def to_comparable_instant(value: Any) -> dt.datetime:
    """
    Normalize a date, datetime or ISO string to an aware UTC datetime.

    Calendar dates map to midnight UTC, so a date and a timestamp on the
    same day compare by their time of day instead of raising TypeError.

    Raises:
        ValueError: If value is a string in no ISO shape
        TypeError: If value is not a date, datetime or string
    """
    if isinstance(value, dt.datetime):
        return parse_instant(value)
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time.min, tzinfo=dt.timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        try:
            return to_comparable_instant(dt.date.fromisoformat(text))
        except ValueError:
            return parse_instant(text)
    raise TypeError(f"Cannot compare {type(value).__name__} as a point in time")
