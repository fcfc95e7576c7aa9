# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from daytrace.model.entity_id import EntityId

EntityType = Literal["check_ins"]


class IdMap(TypedDict):
    """
    Short numeric ids shown in views, mapped to stored entity ids.

    Example:

    Check-in with an id of "5f0c...".
    Synthetic id for that check-in is 7.

    real_id = id_map["check_ins"]["synthetic_to_real"][7]  # returns "5f0c..."
    """

    check_ins: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]
