# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import cast

import typer

from daytrace import configuration
from daytrace.model.entity_id import EntityId
from daytrace.repository.check_in import CheckInRepository
from daytrace.repository.id_map import ID_MAP_REPO
from daytrace.versioning import DataVersioning

logger = logging.getLogger(__name__)


class AppSession:
    """Per-invocation handles shared by the commands of one CLI run."""

    def __init__(
        self,
        repository: CheckInRepository,
        images_dir: Path,
        config: configuration.Configuration,
    ) -> None:
        self.repository = repository
        self.images_dir = images_dir
        self.config = config
        self.changed = False
        self._unsubscribe = repository.subscribe(self.__on_change)

    def __on_change(self) -> None:
        self.changed = True

    def save(self, message: str) -> None:
        """Write pending changes and checkpoint them when versioning is on."""
        if not self.changed:
            return
        self.repository.flush()
        logger.debug("saved changes: %s", message)
        if self.config["use_git_versioning"]:
            DataVersioning(configuration.DATA_PATH).create_checkpoint(message)
        self.changed = False

    def close(self) -> None:
        self.repository.flush()
        self._unsubscribe()


def get_session(ctx: typer.Context) -> AppSession:
    session = ctx.find_object(AppSession)
    if session is None:
        raise RuntimeError("daytrace session was not initialized")
    return session


def resolve_check_in_id(synthetic_id: int) -> EntityId:
    try:
        return cast(EntityId, ID_MAP_REPO.get_real_id("check_ins", synthetic_id))
    except KeyError:
        raise typer.BadParameter(
            f"Unknown check-in id {synthetic_id}, list ids with `daytrace timeline`"
        )
