# SPDX-License-Identifier: MIT

import pendulum
import pytest

from conftest import on_day
from daytrace.service.aggregate import group_by_date
from daytrace.service.heatmap import (
    available_years,
    build_cell_map,
    build_heatmap_for_window,
    build_heatmap_grid,
    calendar_year_window,
    get_cell_tier,
    resolve_window,
    trailing_months_window,
    trailing_weeks_window,
)


def _real_cells(grid):
    return [cell for week in grid["weeks"] for cell in week if not cell["is_padding"]]


def test_single_monday_is_one_padded_week():
    monday = pendulum.date(2024, 1, 1)

    grid = build_heatmap_grid({}, monday, monday)

    assert grid["total_weeks"] == 1
    assert len(grid["weeks"][0]) == 7
    assert [cell["is_padding"] for cell in grid["weeks"][0]] == [False] + [True] * 6
    assert grid["month_markers"] == [{"label": "1月", "column_index": 0}]


def test_weeks_run_monday_to_sunday():
    grid = build_heatmap_grid({}, pendulum.date(2024, 5, 8), pendulum.date(2024, 5, 22))

    for week in grid["weeks"]:
        assert len(week) == 7
        assert week[0]["date"].weekday() == 0
        assert week[-1]["date"].weekday() == 6
    assert grid["total_weeks"] == len(grid["weeks"])


def test_cells_outside_window_are_padding():
    start = pendulum.date(2024, 5, 8)
    end = pendulum.date(2024, 5, 22)

    grid = build_heatmap_grid({}, start, end)
    real_cells = _real_cells(grid)

    assert real_cells[0]["date"] == start
    assert real_cells[-1]["date"] == end
    assert len(real_cells) == 15


def test_counts_are_placed_by_date_key():
    grid = build_heatmap_grid(
        {"2024-01-03": 2, "2024-01-09": 5}, pendulum.date(2024, 1, 1), pendulum.date(2024, 1, 14)
    )

    assert grid["weeks"][0][2]["iso_key"] == "2024-01-03"
    assert grid["weeks"][0][2]["count"] == 2
    assert grid["weeks"][1][1]["count"] == 5
    assert sum(cell["count"] for cell in _real_cells(grid)) == 7


def test_start_after_end_raises():
    with pytest.raises(ValueError):
        build_heatmap_grid({}, pendulum.date(2024, 2, 1), pendulum.date(2024, 1, 1))


def test_trailing_window_across_year_boundary_has_ordered_markers():
    today = pendulum.date(2024, 2, 15)
    window = trailing_months_window(today, months=14)

    grid = build_heatmap_for_window([], window)
    markers = grid["month_markers"]

    assert window["display_start"] == pendulum.date(2022, 12, 15)
    assert markers[0] == {"label": "12月", "column_index": 0}
    for previous, current in zip(markers, markers[1:]):
        assert previous["column_index"] < current["column_index"]
        assert previous["label"] != current["label"]
    # December appears for both years
    assert [marker["label"] for marker in markers].count("12月") == 2


def test_calendar_year_has_one_marker_per_month():
    window = calendar_year_window(2024, pendulum.date(2025, 3, 1))

    grid = build_heatmap_for_window([], window)

    assert grid["total_weeks"] == 53
    assert [marker["label"] for marker in grid["month_markers"]] == [
        f"{month}月" for month in range(1, 13)
    ]
    # Feb 1 2024 is a Thursday, so February starts in the following column
    assert grid["month_markers"][1]["column_index"] == 5


def test_later_calendar_year_is_entirely_future(today):
    window = calendar_year_window(today.year + 1, today)

    real_cells = _real_cells(build_heatmap_for_window([], window))

    assert len(real_cells) == 365
    assert all(cell["is_future"] for cell in real_cells)


def test_past_calendar_year_is_never_future():
    window = calendar_year_window(2023, pendulum.date(2024, 5, 15))

    grid = build_heatmap_for_window([], window)

    assert not any(cell["is_future"] for cell in _real_cells(grid))


def test_current_calendar_year_masks_days_after_today(today):
    window = calendar_year_window(today.year, today)

    future_cells = [cell for cell in _real_cells(build_heatmap_for_window([], window)) if cell["is_future"]]

    assert future_cells[0]["date"] == today.add(days=1)
    assert future_cells[-1]["date"] == pendulum.date(2024, 12, 31)


def test_trailing_weeks_window_is_whole_weeks(today):
    window = trailing_weeks_window(today, weeks=2)

    grid = build_heatmap_for_window([], window)

    assert window["display_start"] == pendulum.date(2024, 5, 6)
    assert window["display_end"] == pendulum.date(2024, 5, 19)
    assert grid["total_weeks"] == 2
    assert _real_cells(grid) == [cell for week in grid["weeks"] for cell in week]
    assert [cell["date"] for cell in _real_cells(grid) if cell["is_future"]] == [
        pendulum.date(2024, 5, day) for day in range(16, 20)
    ]


def test_trailing_weeks_default_is_26_columns(today):
    grid = build_heatmap_for_window([], trailing_weeks_window(today))

    assert grid["total_weeks"] == 26


def test_window_includes_check_ins_in_range_only(today):
    check_ins = [on_day(today), on_day(today.subtract(days=3)), on_day(today.subtract(years=2))]
    window = trailing_months_window(today, months=1)

    cell_map = build_cell_map(group_by_date(check_ins), window)

    assert cell_map == {"2024-05-15": 1, "2024-05-12": 1}


def test_build_is_deterministic(today):
    check_ins = [on_day(today.subtract(days=offset)) for offset in (0, 0, 3, 40)]
    window = trailing_months_window(today)

    first = build_heatmap_for_window(group_by_date(check_ins), window)
    second = build_heatmap_for_window(group_by_date(check_ins), window)

    assert first == second


def test_resolve_window_modes(today):
    assert resolve_window(today)["mode"] == "months"
    assert resolve_window(today, year=2023)["mode"] == "year"
    assert resolve_window(today, weeks=4)["mode"] == "weeks"

    with pytest.raises(ValueError):
        resolve_window(today, year=2023, weeks=4)


def test_available_years(today):
    assert available_years(today) == [2024, 2023]


@pytest.mark.parametrize(
    ("count", "tier"),
    [(0, "empty"), (1, "low"), (2, "medium"), (3, "high"), (4, "max"), (12, "max")],
)
def test_cell_tier_by_count(count, tier):
    cell = {
        "date": pendulum.date(2024, 1, 1),
        "iso_key": "2024-01-01",
        "count": count,
        "is_future": False,
        "is_padding": False,
    }

    assert get_cell_tier(cell) == tier


def test_padding_and_future_tiers_ignore_count():
    cell = {
        "date": pendulum.date(2024, 1, 1),
        "iso_key": "2024-01-01",
        "count": 3,
        "is_future": True,
        "is_padding": False,
    }

    assert get_cell_tier(cell) == "future"
    cell["is_padding"] = True
    assert get_cell_tier(cell) == "padding"
