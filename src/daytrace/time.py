# SPDX-License-Identifier: MIT

import re

import pendulum

DATE_KEY_FORMAT = "YYYY-MM-DD"
DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.Date:
    """Midnight-truncated local date used as "today" for streaks and heatmaps."""
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Expected an ISO-8601 timestamp, got '{datetime}'")
    return parsed


def date_to_key(date: pendulum.Date) -> str:
    """Format a date as a zero-padded 'YYYY-MM-DD' key."""
    return date.format(DATE_KEY_FORMAT)


def date_key_from_timestamp(timestamp: str) -> str:
    """
    Return the calendar date of an ISO-8601 timestamp string.

    This is a truncation of the recorded string, not a timezone conversion,
    so the date is the one in the offset the timestamp was recorded with.
    """
    return timestamp[:10]


def is_date_key(value: str) -> bool:
    return DATE_KEY_PATTERN.match(value) is not None


def date_from_key(key: str) -> pendulum.Date:
    """
    Parse a 'YYYY-MM-DD' key into a pendulum.Date.

    Raises:
        ValueError: If the key is not a well-formed, existing calendar date
    """
    if not is_date_key(key):
        raise ValueError(f"Expected a YYYY-MM-DD date, got '{key}'")
    year, month, day = map(int, key.split("-"))
    return pendulum.date(year, month, day)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd HH:mm")


def timestamp_to_display_str(timestamp: str) -> str:
    """Format a stored timestamp for display, falling back to the raw string."""
    try:
        return datetime_to_display_local_datetime_str(datetime_from_str(timestamp))
    except (ValueError, TypeError):
        return timestamp
