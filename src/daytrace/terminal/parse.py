# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional

import pendulum
import typer

DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
CLOCK_TIME = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")
DAY_OFFSET = re.compile(r"^[+-]?\d+$")

RELATIVE_DAYS: dict[str, Callable[[], pendulum.DateTime]] = {
    "now": lambda: pendulum.now("local"),
    "n": lambda: pendulum.now("local"),
    "today": lambda: pendulum.today("local"),
    "t": lambda: pendulum.today("local"),
    "yesterday": lambda: pendulum.yesterday("local"),
    "y": lambda: pendulum.yesterday("local"),
}


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Parse a check-in time given on the command line, in local time.

    Accepts YYYY-MM-DD (with optional HH:mm), (H)H:mm for today, a day
    offset like -1, or now/n, today/t, yesterday/y.
    """
    if datetime_param is None:
        return None

    value = str(datetime_param).strip().lower()

    if value in RELATIVE_DAYS:
        return RELATIVE_DAYS[value]()

    if DATE_PREFIX.match(value):
        try:
            parsed = pendulum.parse(value, tz="local")
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{value}': {e}")
        if not isinstance(parsed, pendulum.DateTime):
            raise typer.BadParameter(f"Invalid date '{value}'")
        return parsed

    clock_time = CLOCK_TIME.match(value)
    if clock_time is not None:
        hour = int(clock_time["hour"])
        minute = int(clock_time["minute"])
        if hour > 23 or minute > 59:
            raise typer.BadParameter(f"Invalid time of day '{value}'")
        return pendulum.today("local").set(hour=hour, minute=minute)

    if DAY_OFFSET.match(value):
        return pendulum.now("local").add(days=int(value))

    raise typer.BadParameter(
        f"Unrecognised time '{value}', use YYYY-MM-DD [HH:mm], HH:mm, "
        "a day offset like -1, now, today or yesterday"
    )


def _parse_id_range(part: str) -> range:
    bounds = part.split("-")
    if len(bounds) != 2:
        raise typer.BadParameter(f"Invalid range '{part}', expected start-end")
    try:
        start, end = (int(bound) for bound in bounds)
    except ValueError:
        raise typer.BadParameter(f"Invalid range '{part}', ids must be integers")
    if start > end:
        raise typer.BadParameter(f"Invalid range '{part}', start is after end")
    return range(start, end + 1)


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse ids as given to delete: "3", "1,4", "2-5" or a mix like "1,3-5".

    Returns the ids sorted without duplicates.

    Raises:
        typer.BadParameter: If a part is neither an integer nor a range
    """
    ids: set[int] = set()
    for part in id_param.replace(" ", "").split(","):
        if part == "":
            continue
        if "-" in part:
            ids.update(_parse_id_range(part))
            continue
        try:
            ids.add(int(part))
        except ValueError:
            raise typer.BadParameter(f"Invalid id '{part}', ids must be integers")

    if not ids:
        raise typer.BadParameter("No ids given")
    return sorted(ids)


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """Edit text in $EDITOR. Returns None when the result is blank."""
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".txt") as note_file:
        note_file.write(initial_text or "")
        note_file.flush()

        subprocess.run([editor, note_file.name], check=True)

        # Editors may replace the file, so read it again by name
        text = Path(note_file.name).read_text().rstrip("\n")
    return text if text.strip() else None
