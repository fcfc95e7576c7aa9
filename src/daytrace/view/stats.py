# SPDX-License-Identifier: MIT

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel

from daytrace.model.summary import StreakStats
from daytrace.view.header import header


def _stat_card(label: str, value: str, highlight: bool = False) -> Panel:
    style = "bold green" if highlight else "bold"
    return Panel(
        f"[{style}]{value}[/{style}]\n[dim]{label}[/dim]",
        expand=False,
        padding=(0, 2),
        border_style="green" if highlight else "grey50",
    )


def stats_view(stats: StreakStats, show_header: bool = True) -> None:
    """Display total check-ins and streaks as cards."""
    if show_header:
        header("stats")

    cards = [
        _stat_card("check-ins", str(stats["total_count"]), highlight=True),
        _stat_card("current streak", f"{stats['current_streak']} days"),
        _stat_card("longest streak", f"{stats['longest_streak']} days"),
    ]

    console = Console()
    console.print()
    console.print(Columns(cards))
    if stats["last_check_in_date"] is not None:
        console.print(f"[dim]last check-in day: {stats['last_check_in_date']}[/dim]")
