# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from daytrace.model.entity_id import EntityId


class CheckIn(TypedDict):
    id: Optional[EntityId]
    created_at: str  # ISO-8601 timestamp, in the offset it was recorded with
    note: Optional[str]  # Only field that may change after creation
    image_data: str  # Opaque image reference (file URI for imported images)
