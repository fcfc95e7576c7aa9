# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daytrace"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_CHECK_INS_DIR: Path = DATA_PATH / "check_ins"
DATA_IMAGES_DIR: Path = DATA_PATH / "images"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"


class Configuration(TypedDict):
    use_git_versioning: bool
    show_header: bool
    clear_ids_on_view: bool
    data_path: Optional[str]
    heatmap_months: int
    heatmap_weeks: int
    timeline_page_size: int
    log_level: str


DEFAULT_CONFIGURATION: Configuration = {
    "use_git_versioning": False,
    "show_header": True,
    "clear_ids_on_view": True,
    "data_path": None,
    "heatmap_months": 12,
    "heatmap_weeks": 26,
    "timeline_page_size": 10,
    "log_level": "WARNING",
}


def set_data_path(data_path: Path) -> None:
    """Point every data file path at a new data directory."""
    global DATA_PATH, DATA_CHECK_INS_DIR, DATA_IMAGES_DIR, DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_CHECK_INS_DIR = DATA_PATH / "check_ins"
    DATA_IMAGES_DIR = DATA_PATH / "images"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting).expanduser())
