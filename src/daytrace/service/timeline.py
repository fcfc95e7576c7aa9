# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

from daytrace import time
from daytrace.model.check_in import CheckIn
from daytrace.model.timeline import TimelinePage


def sort_newest_first(check_ins: Iterable[CheckIn]) -> list[CheckIn]:
    """Order check-ins by timestamp, newest first. Ties keep their input order."""
    return sorted(
        check_ins,
        key=lambda check_in: time.datetime_from_str(check_in["created_at"]),
        reverse=True,
    )


def get_timeline_page(
    check_ins: Iterable[CheckIn],
    page: int = 1,
    page_size: Optional[int] = 10,
) -> TimelinePage:
    """
    Get the visible slice of the timeline after `page` rounds of "load more".

    Pages accumulate: page 2 shows the first 2 * page_size check-ins. A
    page_size of None shows everything.
    """
    if page < 1:
        raise ValueError(f"page must be at least 1, got {page}")

    ordered = sort_newest_first(check_ins)
    total_count = len(ordered)

    if page_size is None:
        visible_count = total_count
    else:
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        visible_count = min(page * page_size, total_count)

    return {
        "check_ins": ordered[:visible_count],
        "visible_count": visible_count,
        "total_count": total_count,
        "has_more": visible_count < total_count,
    }


def get_latest_check_in(check_ins: Iterable[CheckIn]) -> Optional[CheckIn]:
    ordered = sort_newest_first(check_ins)
    if len(ordered) == 0:
        return None
    return ordered[0]
