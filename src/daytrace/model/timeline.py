# SPDX-License-Identifier: MIT

from typing import TypedDict

from daytrace.model.check_in import CheckIn


class TimelinePage(TypedDict):
    check_ins: list[CheckIn]  # Newest first
    visible_count: int
    total_count: int
    has_more: bool
