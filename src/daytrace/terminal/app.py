# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer

from daytrace import configuration as paths
from daytrace import state as app_state
from daytrace.logging_config import configure_logging
from daytrace.repository.check_in import CheckInRepository
from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.terminal import check_in, configuration, view
from daytrace.terminal.custom_typer import OrderedAliasedTyperGroup
from daytrace.terminal.session import AppSession

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="daytrace - Daily image check-ins, streaks and a heatmap in the CLI",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(check_in.add)
app.command(name="note, n", no_args_is_help=True)(check_in.note)
app.command(name="delete, d", no_args_is_help=True)(check_in.delete)
app.command(name="show, sh", no_args_is_help=True)(check_in.show)
app.command(name="timeline, tl")(view.timeline)
app.command(name="stats, st")(view.stats)
app.command(name="heatmap, hm")(view.heatmap)
app.command(name="overview, o")(view.overview)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log debug output to stderr"),
    ] = False,
    clear_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Clear ID map before the timeline",
        ),
    ] = None,
) -> None:
    """
    daytrace - Daily image check-ins, streaks and a heatmap in the CLI

    Global options that apply to all commands.
    """
    if verbose:
        configure_logging(logging.DEBUG)
    if no_header:
        app_state.set_show_header(False)
    if clear_ids is not None:
        app_state.set_clear_ids(clear_ids)

    session = AppSession(
        CheckInRepository(paths.DATA_CHECK_INS_DIR),
        paths.DATA_IMAGES_DIR,
        CONFIGURATION_REPO.get_config(),
    )
    ctx.obj = session
    ctx.call_on_close(session.close)


def run() -> None:
    app()
