# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from daytrace import configuration
from daytrace import state as app_state
from daytrace.logging_config import configure_logging
from daytrace.model.id_map import IdMap
from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.template.id_map import get_id_map_template
from daytrace.versioning import DataVersioning


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    if config["use_git_versioning"]:
        DataVersioning(configuration.DATA_PATH).initialize()
    app_state.set_show_header(config["show_header"])
    app_state.set_clear_ids(config["clear_ids_on_view"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config: configuration.Configuration = dict(  # type: ignore[assignment]
            configuration.DEFAULT_CONFIGURATION
        )
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_ID_MAP_PATH.is_file():
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    # Directory-based stores (one file per entity)
    if not configuration.DATA_CHECK_INS_DIR.is_dir():
        configuration.DATA_CHECK_INS_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_CHECK_INS_DIR / ".gitkeep").touch()
    if not configuration.DATA_IMAGES_DIR.is_dir():
        configuration.DATA_IMAGES_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_IMAGES_DIR / ".gitkeep").touch()
