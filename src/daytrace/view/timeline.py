# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daytrace.color import NOTE_COLOR, TIMESTAMP_COLOR
from daytrace.model.entity_id import EntityId
from daytrace.model.timeline import TimelinePage
from daytrace.repository.id_map import ID_MAP_REPO
from daytrace.time import timestamp_to_display_str
from daytrace.view.check_in import format_image
from daytrace.view.header import header


def timeline_view(
    page: TimelinePage,
    page_number: int,
    images_dir: Optional[Path] = None,
    no_wrap: bool = False,
) -> None:
    """
    Display check-ins newest first.

    id  created               note                       image
    ────────────────────────────────────────────────────────────
    1   2026-10-18 Sun 21:04  Finished the perspective…  4d1c….jpg
    2   2026-10-17 Sat 20:12                             9a03….png
    """
    header("timeline")

    console = Console()

    if page["total_count"] == 0:
        console.print(
            "\n[dim]No check-ins yet, try recording your first one with "
            "`daytrace add IMAGE`.[/dim]\n"
        )
        return

    timeline_table = Table(box=box.SIMPLE)
    timeline_table.add_column("id")
    for column in ("created", "note", "image"):
        if no_wrap:
            timeline_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            timeline_table.add_column(column)

    for check_in in page["check_ins"]:
        synthetic_id = ID_MAP_REPO.associate_id(
            "check_ins", cast(EntityId, check_in["id"])
        )
        timeline_table.add_row(
            str(synthetic_id),
            f"[{TIMESTAMP_COLOR}]"
            f"{escape(timestamp_to_display_str(check_in['created_at']))}"
            f"[/{TIMESTAMP_COLOR}]",
            f"[{NOTE_COLOR}]{escape(check_in['note'])}[/{NOTE_COLOR}]"
            if check_in["note"]
            else "",
            escape(format_image(check_in["image_data"], images_dir)),
        )

    console.print(timeline_table)
    console.print(
        f"[dim]showing {page['visible_count']} of {page['total_count']}[/dim]"
    )
    if page["has_more"]:
        console.print(
            f"[dim]load more with `daytrace timeline --page {page_number + 1}`[/dim]"
        )
