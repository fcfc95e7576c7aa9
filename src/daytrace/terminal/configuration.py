# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from daytrace import configuration
from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


def _configuration_table(
    config: configuration.Configuration, title: Optional[str] = None
) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("use_git_versioning", _enabled(config["use_git_versioning"]))
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("clear_ids_on_view", _enabled(config["clear_ids_on_view"]))
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("heatmap_months", str(config["heatmap_months"]))
    table.add_row("heatmap_weeks", str(config["heatmap_weeks"]))
    table.add_row("timeline_page_size", str(config["timeline_page_size"]))
    table.add_row("log_level", config["log_level"])
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_configuration_table(config))

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")


@app.command("set, s")
def set(
    use_git_versioning: Annotated[
        Optional[bool],
        typer.Option(
            "--use-git-versioning/--no-use-git-versioning",
            help="Commit the data directory to git after every change",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Print the application header above views",
        ),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Enable/disable automatic clearing of ID map before the timeline",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    heatmap_months: Annotated[
        Optional[int],
        typer.Option("--heatmap-months", min=1, help="Default heatmap window"),
    ] = None,
    heatmap_weeks: Annotated[
        Optional[int],
        typer.Option("--heatmap-weeks", min=1, help="Default for heatmap --weeks"),
    ] = None,
    timeline_page_size: Annotated[
        Optional[int],
        typer.Option("--timeline-page-size", min=1, help="Check-ins per timeline page"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        typer.echo(
            f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        use_git_versioning=use_git_versioning,
        show_header=show_header,
        clear_ids_on_view=clear_ids_on_view,
        data_path=data_path,
        remove_data_path=remove_data_path,
        heatmap_months=heatmap_months,
        heatmap_weeks=heatmap_weeks,
        timeline_page_size=timeline_page_size,
        log_level=log_level,
    )
    logging.getLogger(__name__).debug("configuration updated")

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))

    if data_path is not None or remove_data_path:
        console.print(
            "\n[yellow]The new data path is used from the next command on.[/yellow]"
        )
