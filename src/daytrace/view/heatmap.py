# SPDX-License-Identifier: MIT

from rich.cells import cell_len
from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

from daytrace.color import LEGEND_TIERS, TIER_STYLES, tier_symbol
from daytrace.model.heatmap import HeatmapGrid, HeatmapWindow, MonthMarker
from daytrace.service.heatmap import DAYS_IN_WEEK, get_cell_tier
from daytrace.time import date_to_key
from daytrace.view.header import header

CELL_WIDTH = 2
DAY_LABEL_WIDTH = 4
DAY_LABELS = ["一", "二", "三", "四", "五", "六", "日"]
SHOWN_DAY_LABELS = {"一", "三", "五"}


def _pad_to(text: str, width: int) -> str:
    return text + " " * max(0, width - cell_len(text))


def build_month_row(markers: list[MonthMarker]) -> Text:
    """
    Build the month label row above the week columns.

    A label that would overlap the previous one is dropped.
    """
    row = Text(" " * DAY_LABEL_WIDTH, style="dim")
    cursor = 0
    for marker in markers:
        position = marker["column_index"] * CELL_WIDTH
        if position < cursor:
            continue
        row.append(" " * (position - cursor))
        row.append(marker["label"], style="dim")
        cursor = position + cell_len(marker["label"])
    return row


def build_day_rows(grid: HeatmapGrid) -> list[Text]:
    rows: list[Text] = []
    for day_index in range(DAYS_IN_WEEK):
        label = DAY_LABELS[day_index]
        shown_label = label if label in SHOWN_DAY_LABELS else ""
        row = Text(_pad_to(shown_label, DAY_LABEL_WIDTH), style="dim")
        for week in grid["weeks"]:
            tier = get_cell_tier(week[day_index])
            style = TIER_STYLES[tier]
            if style:
                row.append(tier_symbol(tier), style=style)
            else:
                row.append(tier_symbol(tier))
            row.append(" " * (CELL_WIDTH - 1))
        rows.append(row)
    return rows


def build_legend() -> Text:
    legend = Text(" " * DAY_LABEL_WIDTH)
    legend.append("少 ", style="dim")
    for tier in LEGEND_TIERS:
        legend.append(tier_symbol(tier), style=TIER_STYLES[tier])
        legend.append(" ")
    legend.append("多", style="dim")
    return legend


def describe_window(window: HeatmapWindow) -> str:
    start = date_to_key(window["display_start"])
    end = date_to_key(window["display_end"])
    if window["mode"] == "year":
        return f"{window['display_start'].year} ({start} to {end})"
    return f"{start} to {end}"


def heatmap_view(
    grid: HeatmapGrid,
    window: HeatmapWindow,
    check_in_count: int,
    years: list[int],
    show_header: bool = True,
) -> None:
    """
    Display a check-in heatmap: one column per week, one row per weekday.

    Args:
        grid: Grid built for the window
        window: Display window the grid was built for
        check_in_count: Number of check-ins stored in total
        years: Years that can be selected with --year
        show_header: Print the application header first
    """
    if show_header:
        header("heatmap")

    console = Console()

    if check_in_count == 0:
        console.print(
            "\n[dim]No check-ins yet. The heatmap fills in after your first "
            "check-in.[/dim]\n"
        )
        return

    in_window = sum(
        cell["count"]
        for week in grid["weeks"]
        for cell in week
        if not cell["is_padding"]
    )
    console.print(
        f"\n[bold]{describe_window(window)}[/bold]  "
        f"{in_window} check-ins, darker means more per day\n"
    )

    chart = Group(
        build_month_row(grid["month_markers"]),
        *build_day_rows(grid),
        Text(),
        build_legend(),
    )
    console.print(Padding(chart, (0, 0, 1, 0)))
    console.print(
        f"[dim]years: {' '.join(str(year) for year in years)} (use --year)[/dim]"
    )
