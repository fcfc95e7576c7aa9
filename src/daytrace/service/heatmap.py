# SPDX-License-Identifier: MIT

from typing import Iterable, Mapping, Optional

import pendulum

from daytrace.model.heatmap import (
    CellTier,
    DayCell,
    HeatmapGrid,
    HeatmapWindow,
    MonthMarker,
)
from daytrace.model.summary import DailySummary
from daytrace.time import date_to_key

DAYS_IN_WEEK = 7


def start_of_week(date: pendulum.Date) -> pendulum.Date:
    """Monday on or before the given date."""
    return date.subtract(days=date.weekday())


def end_of_week(date: pendulum.Date) -> pendulum.Date:
    """Sunday on or after the given date."""
    return date.add(days=DAYS_IN_WEEK - 1 - date.weekday())


def trailing_months_window(today: pendulum.Date, months: int = 12) -> HeatmapWindow:
    """Window covering the last N months up to and including today."""
    if months < 1:
        raise ValueError(f"months must be at least 1, got {months}")
    return {
        "mode": "months",
        "display_start": today.subtract(months=months),
        "display_end": today,
        "future_after": today,
    }


def calendar_year_window(year: int, today: pendulum.Date) -> HeatmapWindow:
    """
    Window covering January 1 to December 31 of a year.

    Days after today are masked as future for the current year and every
    later one; past years are never masked.
    """
    display_start = pendulum.date(year, 1, 1)
    display_end = pendulum.date(year, 12, 31)
    return {
        "mode": "year",
        "display_start": display_start,
        "display_end": display_end,
        "future_after": today if year >= today.year else display_end,
    }


def trailing_weeks_window(today: pendulum.Date, weeks: int = 26) -> HeatmapWindow:
    """Window of N whole weeks ending with the Sunday of the current week."""
    if weeks < 1:
        raise ValueError(f"weeks must be at least 1, got {weeks}")
    return {
        "mode": "weeks",
        "display_start": start_of_week(today).subtract(weeks=weeks - 1),
        "display_end": end_of_week(today),
        "future_after": today,
    }


def resolve_window(
    today: pendulum.Date,
    year: Optional[int] = None,
    weeks: Optional[int] = None,
    months: int = 12,
) -> HeatmapWindow:
    """Pick the window mode: a calendar year, trailing weeks, or trailing months."""
    if year is not None and weeks is not None:
        raise ValueError("Choose either a year or a number of weeks, not both")
    if year is not None:
        return calendar_year_window(year, today)
    if weeks is not None:
        return trailing_weeks_window(today, weeks)
    return trailing_months_window(today, months)


def available_years(today: pendulum.Date, count: int = 2) -> list[int]:
    """Years offered for the calendar-year view, most recent first."""
    return [today.year - offset for offset in range(count)]


def build_cell_map(
    summaries: Iterable[DailySummary],
    window: Optional[HeatmapWindow] = None,
) -> dict[str, int]:
    """
    Index daily summaries by date key.

    With a window, only summaries inside the display window are kept.
    """
    if window is None:
        return {summary["date"]: summary["count"] for summary in summaries}

    start_key = date_to_key(window["display_start"])
    end_key = date_to_key(window["display_end"])
    return {
        summary["date"]: summary["count"]
        for summary in summaries
        if start_key <= summary["date"] <= end_key
    }


def build_heatmap_grid(
    cell_map: Mapping[str, int],
    display_start: pendulum.Date,
    display_end: pendulum.Date,
    future_after: Optional[pendulum.Date] = None,
) -> HeatmapGrid:
    """
    Lay out a display window as week columns of day cells, Monday first.

    The grid is widened to whole weeks: cells outside the display window are
    marked as padding. Cells after `future_after` (default: display_end) are
    marked as future. A month marker is emitted for the first week column
    whose first in-window day falls in a new month.

    Args:
        cell_map: Check-in count per YYYY-MM-DD key; missing days count 0
        display_start: First day of the display window
        display_end: Last day of the display window
        future_after: Last day that is not masked as future

    Returns:
        HeatmapGrid with oldest week first and markers in column order
    """
    if display_start > display_end:
        raise ValueError(
            f"display_start {display_start} is after display_end {display_end}"
        )
    if future_after is None:
        future_after = display_end

    range_start = start_of_week(display_start)
    range_end = end_of_week(display_end)

    weeks: list[list[DayCell]] = []
    month_markers: list[MonthMarker] = []
    week: list[DayCell] = []
    previous_month: Optional[tuple[int, int]] = None

    current = range_start
    while current <= range_end:
        if len(week) == 0:
            # Attribute the column to the month of its first in-window day
            week_end = current.add(days=DAYS_IN_WEEK - 1)
            effective_start = max(current, display_start)
            effective_end = min(week_end, display_end)

            if effective_start <= effective_end:
                month = (effective_start.year, effective_start.month)
                if month != previous_month:
                    month_markers.append(
                        {
                            "label": f"{effective_start.month}月",
                            "column_index": len(weeks),
                        }
                    )
                    previous_month = month

        iso_key = date_to_key(current)
        week.append(
            {
                "date": current,
                "iso_key": iso_key,
                "count": cell_map.get(iso_key, 0),
                "is_future": current > future_after,
                "is_padding": current < display_start or current > display_end,
            }
        )

        if len(week) == DAYS_IN_WEEK:
            weeks.append(week)
            week = []

        current = current.add(days=1)

    if len(week) > 0:
        while len(week) < DAYS_IN_WEEK:
            next_date = week[-1]["date"].add(days=1)
            week.append(
                {
                    "date": next_date,
                    "iso_key": date_to_key(next_date),
                    "count": 0,
                    "is_future": next_date > future_after,
                    "is_padding": True,
                }
            )
        weeks.append(week)

    return {
        "weeks": weeks,
        "month_markers": month_markers,
        "total_weeks": len(weeks),
    }


def build_heatmap_for_window(
    summaries: Iterable[DailySummary],
    window: HeatmapWindow,
) -> HeatmapGrid:
    return build_heatmap_grid(
        build_cell_map(summaries, window),
        window["display_start"],
        window["display_end"],
        window["future_after"],
    )


def get_cell_tier(cell: DayCell) -> CellTier:
    """
    Map a cell to its heatmap colour tier.

    Padding cells are transparent and future cells neutral regardless of
    count; otherwise 0 is empty, 1-3 step up and 4 or more is the maximum.
    """
    if cell["is_padding"]:
        return "padding"
    if cell["is_future"]:
        return "future"
    if cell["count"] <= 0:
        return "empty"
    if cell["count"] == 1:
        return "low"
    if cell["count"] == 2:
        return "medium"
    if cell["count"] == 3:
        return "high"
    return "max"
