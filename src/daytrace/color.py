# SPDX-License-Identifier: MIT

from daytrace.model.heatmap import CellTier

APP_COLOR = "dark_orange"
SUB_HEADER_COLOR = "sandy_brown"
TIMESTAMP_COLOR = "cyan"
NOTE_COLOR = "yellow"

HEATMAP_SYMBOL = "■"
HEATMAP_FUTURE_SYMBOL = "·"

# Rich styles for each heatmap tier, lightest to darkest green
TIER_STYLES: dict[CellTier, str] = {
    "padding": "",
    "future": "grey30",
    "empty": "grey42",
    "low": "dark_sea_green2",
    "medium": "green3",
    "high": "green4",
    "max": "dark_green",
}

LEGEND_TIERS: list[CellTier] = ["empty", "low", "medium", "high", "max"]


def tier_symbol(tier: CellTier) -> str:
    if tier == "padding":
        return " "
    if tier == "future":
        return HEATMAP_FUTURE_SYMBOL
    return HEATMAP_SYMBOL
