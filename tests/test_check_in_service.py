# SPDX-License-Identifier: MIT

import pendulum
import pytest

from daytrace.service.check_in import (
    CheckInValidationError,
    create_check_in,
    normalize_note,
    remove_stored_image,
    stored_image_path,
    validate_image_path,
)


def test_missing_image_is_rejected(tmp_path):
    with pytest.raises(CheckInValidationError, match="Image not found"):
        validate_image_path(tmp_path / "missing.png")


def test_directory_is_rejected(tmp_path):
    with pytest.raises(CheckInValidationError, match="Not a file"):
        validate_image_path(tmp_path)


def test_non_image_is_rejected(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not a picture")

    with pytest.raises(CheckInValidationError, match="Only image files"):
        validate_image_path(notes)


@pytest.mark.parametrize(
    ("note", "expected"),
    [(None, None), ("", None), ("   \n", None), ("  shading  ", "shading")],
)
def test_normalize_note(note, expected):
    assert normalize_note(note) == expected


def test_create_check_in_copies_the_image(tmp_path, image_file):
    images_dir = tmp_path / "images"

    check_in = create_check_in(image_file, images_dir, note=" hands study ")

    stored = stored_image_path(check_in["image_data"], images_dir)
    assert stored is not None
    assert stored.suffix == ".jpg"
    assert stored.read_bytes() == image_file.read_bytes()
    assert image_file.exists()
    assert check_in["note"] == "hands study"
    assert check_in["id"] is None


def test_create_check_in_uses_given_timestamp(tmp_path, image_file):
    timestamp = pendulum.datetime(2024, 2, 29, 21, 5, tz="Asia/Shanghai")

    check_in = create_check_in(image_file, tmp_path / "images", timestamp=timestamp)

    assert check_in["created_at"].startswith("2024-02-29T21:05:00")
    assert check_in["created_at"].endswith("+08:00")


def test_invalid_image_is_not_copied(tmp_path):
    images_dir = tmp_path / "images"

    with pytest.raises(CheckInValidationError):
        create_check_in(tmp_path / "nope.jpg", images_dir)

    assert not images_dir.exists()


def test_images_outside_the_data_directory_are_left_alone(tmp_path, image_file):
    images_dir = tmp_path / "images"
    images_dir.mkdir()
    check_in = {
        "id": "x",
        "created_at": "2024-01-01T00:00:00+00:00",
        "note": None,
        "image_data": image_file.resolve().as_uri(),
    }

    assert stored_image_path(check_in["image_data"], images_dir) is None
    assert remove_stored_image(check_in, images_dir) is False
    assert image_file.exists()


def test_remove_stored_image(tmp_path, image_file):
    images_dir = tmp_path / "images"
    check_in = create_check_in(image_file, images_dir)
    stored = stored_image_path(check_in["image_data"], images_dir)

    assert remove_stored_image(check_in, images_dir) is True
    assert not stored.exists()
    assert remove_stored_image(check_in, images_dir) is False
