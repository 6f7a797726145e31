#!/usr/bin/env python3
"""
Datetime Utility Functions

Centralized date and duration handling for release deployment data.

Handles common patterns:
- Release service ISO timestamps with 'Z' suffix
- The service's "never started" default timestamp (0001-01-01)
- Lenient user-supplied dates from the command line
- Duration strings in the service's [d.]hh:mm:ss[.fffffff] format
"""

import re
from datetime import datetime, timedelta

from dateutil import parser as date_parser

# The release service reports unset timestamps as the minimum date value
UNSET_TIMESTAMP_YEAR = 1

_TIMESPAN_PATTERN = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})(?:\.(?P<fraction>\d{1,7}))?$"
)


def parse_ado_timestamp(timestamp_str: str | None) -> datetime | None:
    """
    Parse release service ISO timestamp to datetime object.

    The service returns timestamps in ISO format, usually with a 'Z' suffix:
    Example: "2026-02-10T10:00:00Z" or "2026-02-10T10:00:00.123Z"

    Unset timestamps come back as "0001-01-01T00:00:00" and are mapped to None.

    Args:
        timestamp_str: ISO timestamp string, or None

    Returns:
        datetime object, or None if input is empty or the unset sentinel

    Raises:
        ValueError: If timestamp format is invalid or cannot be parsed

    Examples:
        >>> parse_ado_timestamp("2026-02-10T10:00:00Z")
        datetime.datetime(2026, 2, 10, 10, 0, tzinfo=datetime.timezone.utc)

        >>> parse_ado_timestamp("0001-01-01T00:00:00") is None
        True
    """
    if not timestamp_str:
        return None

    if not isinstance(timestamp_str, str):
        raise ValueError(f"Timestamp must be a string, got {type(timestamp_str)}")

    try:
        normalized = timestamp_str.replace("Z", "+00:00")
        parsed = datetime.fromisoformat(normalized)
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Invalid timestamp format: {timestamp_str}") from e

    if parsed.year == UNSET_TIMESTAMP_YEAR:
        return None
    return parsed


def parse_date_option(value: str | None) -> datetime | None:
    """
    Parse a date supplied on the command line.

    Accepts the usual human formats ("2023-01-02", "01/02/2023",
    "Jan 2 2023 10:30") the same way the release tooling always has.

    Returns:
        Parsed datetime, or None if the value cannot be read as a date
    """
    if not value or not value.strip():
        return None

    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError):
        return None


def parse_timespan(value: str | None) -> timedelta:
    """
    Parse a duration in [-][d.]hh:mm:ss[.fffffff] format.

    Args:
        value: Duration string, or None/empty for zero

    Returns:
        timedelta for the duration

    Raises:
        ValueError: If the duration format is invalid

    Examples:
        >>> parse_timespan("01:30:00")
        datetime.timedelta(seconds=5400)

        >>> parse_timespan("2.03:00:00")
        datetime.timedelta(days=2, seconds=10800)
    """
    if not value:
        return timedelta(0)

    if not isinstance(value, str):
        raise ValueError(f"Duration must be a string, got {type(value)}")

    match = _TIMESPAN_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid duration format: {value}")

    # Fractional part is in 100ns ticks (up to 7 digits)
    fraction = match.group("fraction") or ""
    microseconds = int(fraction.ljust(7, "0")[:6]) if fraction else 0

    duration = timedelta(
        days=int(match.group("days") or 0),
        hours=int(match.group("hours")),
        minutes=int(match.group("minutes")),
        seconds=int(match.group("seconds")),
        microseconds=microseconds,
    )
    return -duration if match.group("sign") else duration


def _split_timespan(duration: timedelta) -> tuple[int, int, int, int, int]:
    total_microseconds = abs(duration) // timedelta(microseconds=1)
    total_seconds, microseconds = divmod(total_microseconds, 1_000_000)
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return days, hours, minutes, seconds, microseconds


def format_timespan(duration: timedelta) -> str:
    """
    Format a duration as [-][d.]hh:mm:ss[.fffffff].

    Days are omitted when zero and the fraction only appears when non-zero,
    so the output parses back with parse_timespan().

    Examples:
        >>> format_timespan(timedelta(hours=1, minutes=5))
        '01:05:00'

        >>> format_timespan(timedelta(days=3, seconds=1, microseconds=500))
        '3.00:00:01.0005000'
    """
    days, hours, minutes, seconds, microseconds = _split_timespan(duration)
    sign = "-" if duration < timedelta(0) else ""

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if microseconds:
        text = f"{text}.{microseconds:06d}0"
    return f"{sign}{text}"


def format_day_timespan(duration: timedelta) -> str:
    """
    Format a duration as dd.hh:mm:ss for stats rows.

    Days always have at least two digits and sub-second precision is dropped.

    Examples:
        >>> format_day_timespan(timedelta(hours=3))
        '00.03:00:00'

        >>> format_day_timespan(timedelta(days=120, minutes=1))
        '120.00:01:00'
    """
    days, hours, minutes, seconds, _ = _split_timespan(duration)
    return f"{days:02d}.{hours:02d}:{minutes:02d}:{seconds:02d}"
