# SPDX-License-Identifier: MIT

from daytrace.model.check_in import CheckIn
from daytrace.time import datetime_to_iso_str, now_local


def get_check_in_template() -> CheckIn:
    return {
        "id": None,
        "created_at": datetime_to_iso_str(now_local()),
        "note": None,
        "image_data": "",
    }
