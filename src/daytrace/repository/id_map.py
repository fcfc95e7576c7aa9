# SPDX-License-Identifier: MIT

from typing import Optional, get_args

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daytrace import configuration
from daytrace.model.entity_id import EntityId
from daytrace.model.id_map import EntityType, IdMap
from daytrace.template.id_map import get_id_map_template

ENTITY_TYPES = get_args(EntityType)


class IdMapRepository:
    def __init__(self) -> None:
        self._id_map: Optional[IdMap] = None
        self.is_dirty = False

    @property
    def id_map(self) -> IdMap:
        if self._id_map is None:
            self.__load_data()
        if self._id_map is None:
            raise ValueError()
        return self._id_map

    def __load_data(self) -> None:
        self._id_map = None
        if configuration.DATA_ID_MAP_PATH.is_file():
            self._id_map = load(
                configuration.DATA_ID_MAP_PATH.read_text(), Loader=Loader
            )
        if self._id_map is None:
            self._id_map = get_id_map_template()

    def __save_data(self, id_map: IdMap) -> None:
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    def flush(self) -> None:
        if self._id_map is not None and self.is_dirty:
            self.__save_data(self._id_map)
            self.is_dirty = False

    def reset(self) -> None:
        """Forget the loaded map so the next access re-reads it from disk."""
        self._id_map = None
        self.is_dirty = False

    def clear_ids(self) -> None:
        self.is_dirty = True
        self._id_map = get_id_map_template()

    def associate_id(self, entity_type: EntityType, entity_id: EntityId) -> int:
        """
        Create a new synthetic id to associate with an entity id
        """
        self.__fail_if_unknown_entity_type(entity_type)
        mapping = self.id_map[entity_type]
        if entity_id in mapping["real_to_synthetic"]:
            return mapping["real_to_synthetic"][entity_id]

        self.is_dirty = True
        next_id = len(mapping["real_to_synthetic"]) + 1
        mapping["real_to_synthetic"][entity_id] = next_id
        mapping["synthetic_to_real"][next_id] = entity_id
        return next_id

    def get_real_id(self, entity_type: EntityType, synthetic_id: int) -> EntityId:
        """
        Get the entity id associated with a synthetic id

        Raises:
            KeyError: If the synthetic id has not been handed out
        """
        self.__fail_if_unknown_entity_type(entity_type)
        return self.id_map[entity_type]["synthetic_to_real"][synthetic_id]

    def __fail_if_unknown_entity_type(self, entity_type: str) -> None:
        if entity_type not in ENTITY_TYPES:
            raise TypeError(
                f"{IdMapRepository.__name__}: expected one of {', '.join(ENTITY_TYPES)}"
            )


ID_MAP_REPO = IdMapRepository()
