# SPDX-License-Identifier: MIT

from daytrace import state as app_state
from daytrace.repository.id_map import ID_MAP_REPO


def clear_id_map_if_required() -> None:
    """Start numbering from 1 again before a listing, when configured to."""
    if app_state.get_clear_ids():
        ID_MAP_REPO.clear_ids()
