# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Optional, TypeAlias, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daytrace import time
from daytrace.model.check_in import CheckIn
from daytrace.model.entity_id import EntityId, generate_entity_id

logger = logging.getLogger(__name__)

CheckInListener: TypeAlias = Callable[[], None]


class CheckInNotFoundError(KeyError):
    """Raised when no stored check-in has the requested id."""

    pass


class CheckInRepository:
    """
    Check-ins stored as one YAML file per entry in `data_dir`.

    The repository is an owned handle: callers construct it for a data
    directory and pass it to whatever needs it. Listeners registered with
    `subscribe` are called after every change to the in-memory entries,
    including a `refresh` from disk.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._check_ins: Optional[list[CheckIn]] = None
        self._listeners: list[CheckInListener] = []
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def check_ins(self) -> list[CheckIn]:
        if self._check_ins is None:
            self.__load_data()
        if self._check_ins is None:
            raise ValueError()
        return self._check_ins

    def subscribe(self, listener: CheckInListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> bool:
        """
        Drop unsaved state and re-read the data directory.

        Listeners are notified when the re-read entries differ from the ones
        held before. Returns whether they differed.
        """
        previous = self._check_ins
        self._dirty_ids.clear()
        self._deleted_ids.clear()
        self.is_dirty = False
        self.__load_data()

        changed = previous != self._check_ins
        if changed:
            self.__notify()
        return changed

    def __notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def __load_data(self) -> None:
        self._check_ins = []
        if not self.data_dir.is_dir():
            logger.debug("check-in directory %s does not exist yet", self.data_dir)
            return

        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            try:
                raw_check_in = load(
                    file_path.read_text(encoding="utf-8"), Loader=Loader
                )
            except (OSError, UnicodeDecodeError, YAMLError) as e:
                logger.warning("skipping unreadable check-in %s: %s", file_path, e)
                continue
            if raw_check_in is None:
                continue

            problem = self.__find_problem(raw_check_in)
            if problem is not None:
                logger.warning("skipping corrupt check-in %s: %s", file_path, problem)
                continue
            self._check_ins.append(
                self.__convert_check_in_for_deserialization(raw_check_in)
            )

        self.__sort()
        logger.debug(
            "loaded %d check-ins from %s", len(self._check_ins), self.data_dir
        )

    def __sort(self) -> None:
        # Newest first
        self.check_ins.sort(
            key=lambda check_in: time.datetime_from_str(check_in["created_at"]),
            reverse=True,
        )

    def __find_problem(self, raw_check_in: Any) -> Optional[str]:
        if not isinstance(raw_check_in, dict):
            return "not a mapping"
        for field in ("id", "created_at", "image_data"):
            if not isinstance(raw_check_in.get(field), str):
                return f"missing or non-string '{field}'"
        note = raw_check_in.get("note")
        if note is not None and not isinstance(note, str):
            return "non-string 'note'"
        created_at = raw_check_in["created_at"]
        try:
            time.datetime_from_str(created_at)
        except ValueError:
            return f"unparsable created_at '{created_at}'"
        # Days are keyed on the leading YYYY-MM-DD, so basic, week and
        # ordinal ISO forms are rejected too
        try:
            time.date_from_key(time.date_key_from_timestamp(created_at))
        except ValueError:
            return f"created_at '{created_at}' does not start with YYYY-MM-DD"
        return None

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Write dirty entities
        for check_in in self.check_ins:
            if check_in["id"] in self._dirty_ids:
                serializable_check_in = self.__convert_check_in_for_serialization(
                    deepcopy(check_in)
                )
                file_path = self.data_dir / f"{check_in['id']}.yaml"
                file_path.write_text(
                    dump(serializable_check_in, Dumper=Dumper, allow_unicode=True),
                    encoding="utf-8",
                )

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = self.data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        # Clear tracking sets
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._check_ins is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_check_in_for_serialization(
        self, check_in: CheckIn
    ) -> dict[str, Any]:
        return cast(dict[str, Any], dict(check_in))

    def __convert_check_in_for_deserialization(
        self, check_in: dict[str, Any]
    ) -> CheckIn:
        return {
            "id": check_in["id"],
            "created_at": check_in["created_at"],
            "note": check_in.get("note"),
            "image_data": check_in["image_data"],
        }

    def __find(self, id: EntityId) -> CheckIn:
        for check_in in self.check_ins:
            if check_in["id"] == id:
                return check_in
        raise CheckInNotFoundError(id)

    def save_new_check_in(self, check_in: CheckIn) -> EntityId:
        self.is_dirty = True

        check_in["id"] = generate_entity_id()

        self.check_ins.append(check_in)
        self.__sort()
        self._dirty_ids.add(check_in["id"])

        self.__notify()
        return check_in["id"]

    def modify_note(self, id: EntityId, note: Optional[str]) -> None:
        check_in = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)
        check_in["note"] = note

        self.__notify()

    def delete_check_in(self, id: EntityId) -> CheckIn:
        check_in = self.__find(id)

        self.is_dirty = True
        self.check_ins.remove(check_in)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

        self.__notify()
        return deepcopy(check_in)

    def get_all_check_ins(self) -> list[CheckIn]:
        return deepcopy(self.check_ins)

    def get_check_in(self, id: EntityId) -> CheckIn:
        return deepcopy(self.__find(id))
