# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class DailySummary(TypedDict):
    date: str  # YYYY-MM-DD
    count: int


class StreakStats(TypedDict):
    total_count: int  # Entries, not distinct days
    current_streak: int
    longest_streak: int
    last_check_in_date: Optional[str]  # YYYY-MM-DD
