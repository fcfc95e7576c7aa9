# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"

_handler: RichHandler | None = None


def configure_logging(level: str | int = logging.WARNING) -> None:
    """
    Route the daytrace loggers through a single rich handler on stderr.

    Safe to call more than once; later calls only change the level.
    """
    global _handler

    root_logger = logging.getLogger("daytrace")
    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(_handler)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root_logger.setLevel(level)
