# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from daytrace.color import APP_COLOR, SUB_HEADER_COLOR
from daytrace.state import get_show_header


def header(sub_header: Optional[str] = None) -> None:
    """Print the application header.

    Args:
        sub_header: Optional sub-header text to display
    """
    # Check if headers should be shown
    if not get_show_header():
        return

    print(Padding(f"[{APP_COLOR}]daytrace[/{APP_COLOR}]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[{SUB_HEADER_COLOR}]{sub_header}[/{SUB_HEADER_COLOR}]", (0, 1)))
