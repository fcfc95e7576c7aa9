# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

import pendulum

from daytrace.model.check_in import CheckIn
from daytrace.model.summary import DailySummary, StreakStats
from daytrace.time import date_from_key, date_key_from_timestamp, today_local


class CheckInDateError(ValueError):
    """Raised when a check-in timestamp does not start with a valid YYYY-MM-DD date."""

    pass


def check_in_date_key(check_in: CheckIn) -> str:
    """
    Get the calendar day a check-in belongs to.

    Raises:
        CheckInDateError: If created_at does not start with a valid date
    """
    key = date_key_from_timestamp(check_in["created_at"])
    _parse_date_key(key)
    return key


def _parse_date_key(key: str) -> pendulum.Date:
    try:
        return date_from_key(key)
    except ValueError as e:
        raise CheckInDateError(str(e)) from e


def group_by_date(check_ins: Iterable[CheckIn]) -> list[DailySummary]:
    """
    Count check-ins per calendar day.

    Returns one summary per distinct day, in ascending date order. Consumers
    should index the result by date rather than rely on the order.
    """
    counts: dict[str, int] = {}
    for check_in in check_ins:
        key = check_in_date_key(check_in)
        counts[key] = counts.get(key, 0) + 1

    return [{"date": date, "count": counts[date]} for date in sorted(counts)]


def compute_streak_stats(
    check_ins: Iterable[CheckIn],
    today: Optional[pendulum.Date] = None,
) -> StreakStats:
    """
    Compute total, current and longest streaks from check-ins in any order.

    A streak is a run of consecutive calendar days with at least one check-in.
    Several check-ins on the same day count once towards a streak but each
    counts towards the total.

    Args:
        check_ins: Check-ins to summarise
        today: Day the stats are computed for (defaults to the local date)

    Returns:
        StreakStats. current_streak is the length of the run containing the
        most recent check-in day, or 0 when that day is more than one day
        before today.
    """
    check_ins = list(check_ins)
    if len(check_ins) == 0:
        return {
            "total_count": 0,
            "current_streak": 0,
            "longest_streak": 0,
            "last_check_in_date": None,
        }

    if today is None:
        today = today_local()

    unique_keys = sorted(
        {check_in_date_key(check_in) for check_in in check_ins}, reverse=True
    )

    running_streak = 0
    longest_streak = 0
    latest_run: Optional[int] = None
    previous_date: Optional[pendulum.Date] = None

    for key in unique_keys:
        current_date = _parse_date_key(key)

        if previous_date is None:
            running_streak = 1
        elif current_date.add(days=1) == previous_date:
            running_streak += 1
        else:
            if latest_run is None:
                latest_run = running_streak
            running_streak = 1

        previous_date = current_date
        longest_streak = max(longest_streak, running_streak)

    if latest_run is None:
        latest_run = running_streak

    last_date = _parse_date_key(unique_keys[0])
    current_streak = 0 if last_date.add(days=1) < today else latest_run

    return {
        "total_count": len(check_ins),
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "last_check_in_date": unique_keys[0],
    }
