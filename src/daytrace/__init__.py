# SPDX-License-Identifier: MIT

from daytrace.cleanup import register_cleanup
from daytrace.initialize import initialize
from daytrace.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
