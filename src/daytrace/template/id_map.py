# SPDX-License-Identifier: MIT

from daytrace.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "check_ins": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }
