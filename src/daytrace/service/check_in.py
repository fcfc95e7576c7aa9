# SPDX-License-Identifier: MIT

import logging
import mimetypes
import shutil
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import pendulum

from daytrace.model.check_in import CheckIn
from daytrace.model.entity_id import generate_entity_id
from daytrace.template.check_in import get_check_in_template
from daytrace.time import datetime_to_iso_str

logger = logging.getLogger(__name__)


class CheckInValidationError(Exception):
    """Raised when a new check-in cannot be recorded from the given input."""

    pass


def validate_image_path(image_path: Path) -> None:
    """
    Check that a path points at an image file.

    Raises CheckInValidationError if it does not exist, is not a regular
    file, or does not have an image type.
    """
    if not image_path.exists():
        raise CheckInValidationError(f"Image not found: {image_path}")
    if not image_path.is_file():
        raise CheckInValidationError(f"Not a file: {image_path}")

    mime_type, _ = mimetypes.guess_type(image_path.name)
    if mime_type is None or not mime_type.startswith("image/"):
        raise CheckInValidationError(
            f"Only image files can be checked in, got '{image_path.name}'"
        )


def normalize_note(note: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; a blank note is no note."""
    if note is None:
        return None
    note = note.strip()
    return note if note else None


def import_image(image_path: Path, images_dir: Path) -> str:
    """Copy an image into the data directory and return its file URI."""
    images_dir.mkdir(parents=True, exist_ok=True)
    target = images_dir / f"{generate_entity_id()}{image_path.suffix.lower()}"
    shutil.copy2(image_path, target)
    logger.debug("imported %s as %s", image_path, target)
    return target.resolve().as_uri()


def stored_image_path(image_data: str, images_dir: Path) -> Optional[Path]:
    """
    Resolve an image reference to a file inside the images directory.

    Returns None for references that point anywhere else.
    """
    parsed = urlparse(image_data)
    if parsed.scheme != "file":
        return None
    path = Path(url2pathname(parsed.path)).resolve()
    if not path.is_relative_to(images_dir.resolve()):
        return None
    return path


def remove_stored_image(check_in: CheckIn, images_dir: Path) -> bool:
    """Delete the imported image of a check-in. Returns True if a file was removed."""
    path = stored_image_path(check_in["image_data"], images_dir)
    if path is None or not path.exists():
        return False
    path.unlink()
    logger.debug("removed image %s", path)
    return True


def create_check_in(
    image_path: Path,
    images_dir: Path,
    note: Optional[str] = None,
    timestamp: Optional[pendulum.DateTime] = None,
) -> CheckIn:
    """
    Build a new check-in from an image file and an optional note.

    The image is validated and copied into `images_dir`. The check-in is not
    saved; hand it to a CheckInRepository for that.
    """
    validate_image_path(image_path)

    check_in = get_check_in_template()
    if timestamp is not None:
        check_in["created_at"] = datetime_to_iso_str(timestamp)
    check_in["note"] = normalize_note(note)
    check_in["image_data"] = import_image(image_path, images_dir)
    return check_in
