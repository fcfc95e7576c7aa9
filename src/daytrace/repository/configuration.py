# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daytrace import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError(
                f"Configuration file is empty: {configuration.APP_CONFIG_PATH}"
            )

        # Migration: back-fill settings added after the file was written
        for key, default in configuration.DEFAULT_CONFIGURATION.items():
            if key not in self._config:
                self._config[key] = default  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        """Forget the loaded configuration so the next access re-reads it."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        use_git_versioning: Optional[bool] = None,
        show_header: Optional[bool] = None,
        clear_ids_on_view: Optional[bool] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        heatmap_months: Optional[int] = None,
        heatmap_weeks: Optional[int] = None,
        timeline_page_size: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if use_git_versioning is not None:
            self.config["use_git_versioning"] = use_git_versioning
        if show_header is not None:
            self.config["show_header"] = show_header
        if clear_ids_on_view is not None:
            self.config["clear_ids_on_view"] = clear_ids_on_view
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if heatmap_months is not None:
            self.config["heatmap_months"] = heatmap_months
        if heatmap_weeks is not None:
            self.config["heatmap_weeks"] = heatmap_weeks
        if timeline_page_size is not None:
            self.config["timeline_page_size"] = timeline_page_size
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
