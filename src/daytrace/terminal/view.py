# SPDX-License-Identifier: MIT

import logging
import time
from typing import Annotated, Optional

import typer
from rich.console import Console

from daytrace.color import TIMESTAMP_COLOR
from daytrace.id_map import clear_id_map_if_required
from daytrace.service.aggregate import compute_streak_stats, group_by_date
from daytrace.service.heatmap import (
    available_years,
    build_heatmap_for_window,
    resolve_window,
    trailing_months_window,
)
from daytrace.service.timeline import get_latest_check_in, get_timeline_page
from daytrace.terminal.session import AppSession, get_session
from daytrace.time import timestamp_to_display_str, today_local
from daytrace.view.header import header
from daytrace.view.heatmap import heatmap_view
from daytrace.view.stats import stats_view
from daytrace.view.timeline import timeline_view

logger = logging.getLogger(__name__)


def timeline(
    ctx: typer.Context,
    page: Annotated[
        int,
        typer.Option("--page", "-p", min=1, help="Pages of check-ins to load"),
    ] = 1,
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Show every check-in")
    ] = False,
    no_wrap: Annotated[bool, typer.Option("--no-wrap", "-nw")] = False,
) -> None:
    """Show check-ins newest first."""
    session = get_session(ctx)
    clear_id_map_if_required()

    page_size = None if show_all else session.config["timeline_page_size"]
    timeline_page = get_timeline_page(
        session.repository.get_all_check_ins(), page, page_size
    )
    timeline_view(timeline_page, page, session.images_dir, no_wrap)


def stats(ctx: typer.Context) -> None:
    """Show total check-ins, the current streak and the longest streak."""
    session = get_session(ctx)
    stats_view(
        compute_streak_stats(session.repository.get_all_check_ins(), today_local())
    )


def heatmap(
    ctx: typer.Context,
    year: Annotated[
        Optional[int],
        typer.Option(
            "--year", "-y", min=1, max=9999, help="Show one calendar year"
        ),
    ] = None,
    weeks: Annotated[
        Optional[int],
        typer.Option("--weeks", "-w", min=1, help="Show the last N weeks"),
    ] = None,
    months: Annotated[
        Optional[int],
        typer.Option("--months", "-m", min=1, help="Show the last N months"),
    ] = None,
    recent: Annotated[
        bool,
        typer.Option(
            "--recent", "-r", help="Show the last heatmap_weeks weeks from config"
        ),
    ] = False,
) -> None:
    """Show check-ins per day as a heatmap, one column per week."""
    session = get_session(ctx)

    if recent and weeks is None:
        weeks = session.config["heatmap_weeks"]
    if len([option for option in (year, weeks, months) if option is not None]) > 1:
        raise typer.BadParameter(
            "Use only one of --year, --weeks, --recent and --months"
        )

    today = today_local()
    check_ins = session.repository.get_all_check_ins()
    window = resolve_window(
        today,
        year=year,
        weeks=weeks,
        months=months if months is not None else session.config["heatmap_months"],
    )
    logger.debug("heatmap window %s", window)

    heatmap_view(
        build_heatmap_for_window(group_by_date(check_ins), window),
        window,
        len(check_ins),
        available_years(today),
    )


def _render_overview(session: AppSession) -> None:
    today = today_local()
    check_ins = session.repository.get_all_check_ins()

    header("overview")
    stats_view(compute_streak_stats(check_ins, today), show_header=False)

    window = trailing_months_window(today, session.config["heatmap_months"])
    heatmap_view(
        build_heatmap_for_window(group_by_date(check_ins), window),
        window,
        len(check_ins),
        available_years(today),
        show_header=False,
    )

    latest = get_latest_check_in(check_ins)
    if latest is not None:
        Console().print(
            f"last check-in: [{TIMESTAMP_COLOR}]"
            f"{timestamp_to_display_str(latest['created_at'])}[/{TIMESTAMP_COLOR}]"
        )


def overview(
    ctx: typer.Context,
    watch: Annotated[
        Optional[float],
        typer.Option(
            "--watch",
            "-wa",
            min=0.5,
            help="Re-read the data directory every N seconds and redraw on changes",
        ),
    ] = None,
) -> None:
    """Home screen: streak cards, the heatmap and the last check-in."""
    session = get_session(ctx)
    _render_overview(session)

    if watch is None:
        return

    console = Console()

    def redraw() -> None:
        console.clear()
        _render_overview(session)

    unsubscribe = session.repository.subscribe(redraw)
    try:
        while True:
            time.sleep(watch)
            session.repository.refresh()
    except KeyboardInterrupt:
        pass
    finally:
        unsubscribe()
