# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daytrace.color import NOTE_COLOR, TIMESTAMP_COLOR
from daytrace.model.check_in import CheckIn
from daytrace.model.entity_id import EntityId
from daytrace.repository.id_map import ID_MAP_REPO
from daytrace.service.check_in import stored_image_path
from daytrace.time import timestamp_to_display_str
from daytrace.view.header import header


def format_image(image_data: str, images_dir: Optional[Path] = None) -> str:
    """Show imported images by file name and anything else as given."""
    if images_dir is not None:
        path = stored_image_path(image_data, images_dir)
        if path is not None:
            return path.name
    if image_data == "":
        return "(no image)"
    return image_data


def single_check_in_view(
    check_in: CheckIn,
    images_dir: Optional[Path] = None,
    sub_header: str = "check-in",
) -> None:
    """Display one check-in as a property table."""
    header(sub_header)

    synthetic_id = ID_MAP_REPO.associate_id(
        "check_ins", cast(EntityId, check_in["id"])
    )

    check_in_table = Table(box=box.SIMPLE)
    check_in_table.add_column("property")
    check_in_table.add_column("value")

    check_in_table.add_row("id", str(synthetic_id))
    check_in_table.add_row(
        "created",
        f"[{TIMESTAMP_COLOR}]"
        f"{escape(timestamp_to_display_str(check_in['created_at']))}"
        f"[/{TIMESTAMP_COLOR}]",
    )
    check_in_table.add_row(
        "note",
        f"[{NOTE_COLOR}]{escape(check_in['note'])}[/{NOTE_COLOR}]"
        if check_in["note"]
        else "",
    )
    check_in_table.add_row(
        "image", escape(format_image(check_in["image_data"], images_dir))
    )
    check_in_table.add_row("uuid", str(check_in["id"]))

    console = Console()
    console.print(check_in_table)
