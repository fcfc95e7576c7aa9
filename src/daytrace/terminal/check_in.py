# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer

from daytrace.model.check_in import CheckIn
from daytrace.repository.check_in import CheckInNotFoundError
from daytrace.service.aggregate import compute_streak_stats
from daytrace.service.check_in import (
    CheckInValidationError,
    create_check_in,
    normalize_note,
    remove_stored_image,
)
from daytrace.terminal.parse import (
    open_editor_for_text,
    parse_datetime,
    parse_id_list,
)
from daytrace.terminal.session import get_session, resolve_check_in_id
from daytrace.time import today_local
from daytrace.view.check_in import single_check_in_view
from daytrace.view.stats import stats_view


def _note_preview(check_in: CheckIn) -> str:
    note = check_in["note"]
    if note is None:
        return ""
    return f": {note[:50]}"


def add(
    ctx: typer.Context,
    image: Annotated[
        Path, typer.Argument(help="Image file to check in, copied into the data directory")
    ],
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    timestamp: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--timestamp",
            "-ts",
            parser=parse_datetime,
            help="valid inputs: YYYY-MM-DD HH:mm, (H)H:mm, today, yesterday, or day offset like -1",
        ),
    ] = None,
) -> None:
    """Record a check-in with an image and an optional note."""
    session = get_session(ctx)

    try:
        check_in = create_check_in(image, session.images_dir, note, timestamp)
    except CheckInValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    id = session.repository.save_new_check_in(check_in)
    session.save(f"add check-in: {id}{_note_preview(check_in)}")

    single_check_in_view(
        session.repository.get_check_in(id), session.images_dir, "checked in"
    )
    stats_view(
        compute_streak_stats(session.repository.get_all_check_ins(), today_local()),
        show_header=False,
    )


def note(
    ctx: typer.Context,
    id: int,
    text: Annotated[
        Optional[str],
        typer.Argument(help="New note text, opens $EDITOR when omitted"),
    ] = None,
    remove: Annotated[
        bool, typer.Option("--remove", "-r", help="Clear the note")
    ] = False,
) -> None:
    """Replace or clear the note of a check-in."""
    session = get_session(ctx)
    real_id = resolve_check_in_id(id)

    try:
        check_in = session.repository.get_check_in(real_id)
    except CheckInNotFoundError:
        typer.echo(f"Error: check-in {id} no longer exists")
        raise typer.Exit(1)

    if remove:
        new_note = None
    elif text is not None:
        new_note = normalize_note(text)
    else:
        new_note = normalize_note(open_editor_for_text(check_in["note"]))

    session.repository.modify_note(real_id, new_note)
    session.save(f"modify check-in note: {real_id}")

    single_check_in_view(session.repository.get_check_in(real_id), session.images_dir)


def delete(ctx: typer.Context, id: str) -> None:
    """Delete one or more check-ins and their stored images."""
    session = get_session(ctx)

    ids: list[int] = parse_id_list(id)
    real_ids = [resolve_check_in_id(check_in_id) for check_in_id in ids]

    deleted: list[CheckIn] = []
    for real_id in real_ids:
        try:
            deleted.append(session.repository.delete_check_in(real_id))
        except CheckInNotFoundError:
            typer.echo(f"Error: check-in {real_id} no longer exists")
            raise typer.Exit(1)

    for check_in in deleted:
        remove_stored_image(check_in, session.images_dir)

    if len(deleted) == 1:
        session.save(f"delete check-in: {deleted[0]['id']}")
    else:
        session.save(f"delete {len(deleted)} check-ins")

    typer.echo(f"Deleted {len(deleted)} check-in(s)")
    stats_view(
        compute_streak_stats(session.repository.get_all_check_ins(), today_local()),
        show_header=False,
    )


def show(ctx: typer.Context, id: int) -> None:
    """Show a single check-in."""
    session = get_session(ctx)
    real_id = resolve_check_in_id(id)

    try:
        check_in = session.repository.get_check_in(real_id)
    except CheckInNotFoundError:
        typer.echo(f"Error: check-in {id} no longer exists")
        raise typer.Exit(1)

    single_check_in_view(check_in, session.images_dir)
