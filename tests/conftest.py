# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

import pendulum
import pytest

from daytrace import configuration
from daytrace import state as app_state
from daytrace.initialize import initialize
from daytrace.model.check_in import CheckIn
from daytrace.model.entity_id import generate_entity_id
from daytrace.repository.configuration import CONFIGURATION_REPO
from daytrace.repository.id_map import ID_MAP_REPO

# Smallest valid JPEG header is enough, only the suffix is inspected
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"


def make_check_in(created_at: str, note: Optional[str] = None) -> CheckIn:
    return {
        "id": generate_entity_id(),
        "created_at": created_at,
        "note": note,
        "image_data": "file:///tmp/image.jpg",
    }


def on_day(day: pendulum.Date, hour: int = 12) -> CheckIn:
    return make_check_in(
        pendulum.datetime(day.year, day.month, day.day, hour, tz="UTC").isoformat()
    )


@pytest.fixture
def today() -> pendulum.Date:
    return pendulum.date(2024, 5, 15)


@pytest.fixture
def data_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config and data paths at a temporary directory and initialize it."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")

    original_data_path = configuration.DATA_PATH
    configuration.set_data_path(tmp_path / "data")
    CONFIGURATION_REPO.reset()
    ID_MAP_REPO.reset()
    app_state.set_show_header(True)
    app_state.set_clear_ids(True)

    initialize()
    yield configuration.DATA_PATH

    CONFIGURATION_REPO.reset()
    ID_MAP_REPO.reset()
    configuration.set_data_path(original_data_path)


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "sketch.JPG"
    path.write_bytes(JPEG_BYTES)
    return path
