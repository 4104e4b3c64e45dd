"""Timestamp utilities for HazardFusion.

Reports arrive with timestamps in assorted ISO-8601 shapes, with or without a
UTC offset. Always route them through parse_timestamp() so every comparison
happens between timezone-aware UTC datetimes.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Union

from dateutil import parser as dateutil_parser

TimestampLike = Union[str, datetime, int, float]


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: TimestampLike) -> datetime:
    """Normalise a timestamp to a timezone-aware UTC datetime.

    Naive datetimes and offset-less strings are interpreted as UTC. Numbers are
    treated as Unix epoch seconds.

    Args:
        value: ISO-8601 string, datetime, or epoch seconds.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    elif isinstance(value, str):
        try:
            dt = dateutil_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                dt = dateutil_parser.parse(value.strip())
            except (ValueError, OverflowError) as exc:
                raise ValueError(f"Unparseable timestamp: {value!r}") from exc
    else:
        raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string."""
    return parse_timestamp(value).isoformat()


def hours_between(a: datetime, b: datetime) -> float:
    """Absolute difference between two datetimes in hours."""
    return abs((parse_timestamp(a) - parse_timestamp(b)).total_seconds()) / 3600.0


def format_span_hours(start: datetime, end: datetime) -> str:
    """Human label for a time span, rounded to whole hours (e.g. ``"3 hours"``)."""
    hours = (parse_timestamp(end) - parse_timestamp(start)).total_seconds() / 3600.0
    return f"{round_half_up(hours)} hours"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity."""
    return int(math.floor(value + 0.5))
