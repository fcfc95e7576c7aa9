# SPDX-License-Identifier: MIT

import atexit

from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.repository.id_map import ID_MAP_REPO


def flush_settings() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_settings)
