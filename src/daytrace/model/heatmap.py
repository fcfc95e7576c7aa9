# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

HeatmapMode = Literal["months", "year", "weeks"]
CellTier = Literal["padding", "future", "empty", "low", "medium", "high", "max"]


class DayCell(TypedDict):
    date: pendulum.Date
    iso_key: str  # YYYY-MM-DD
    count: int
    is_future: bool  # After the last unmasked day of the window
    is_padding: bool  # Outside the display window, only completes a week


class MonthMarker(TypedDict):
    label: str  # e.g. "3月"
    column_index: int  # 0-based week column


class HeatmapWindow(TypedDict):
    mode: HeatmapMode
    display_start: pendulum.Date
    display_end: pendulum.Date
    future_after: pendulum.Date  # Last day that is not masked as future


class HeatmapGrid(TypedDict):
    weeks: list[list[DayCell]]  # Oldest week first, 7 cells each (Mon-Sun)
    month_markers: list[MonthMarker]
    total_weeks: int
