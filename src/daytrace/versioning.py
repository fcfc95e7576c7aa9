# SPDX-License-Identifier: MIT

import logging
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from textwrap import dedent
from typing import Optional

logger = logging.getLogger(__name__)


class GitCommand(Enum):
    STATUS = 0
    INIT = 1
    COMMIT_ALL = 2


class GitUnavailableError(Exception):
    """Raised when data versioning is enabled but git is not installed."""

    pass


class DataVersioning:
    """Keeps the data directory in a git repository with one commit per change."""

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path

    def is_git_repo(self) -> bool:
        results = self.__execute_git_command(GitCommand.STATUS)
        return "not a git repository" not in results[-1]

    def initialize(self) -> None:
        if self.is_git_repo():
            return
        self.__execute_git_command(GitCommand.INIT)
        gitignore_path = self.data_path / ".gitignore"
        gitignore_path.write_text(
            dedent("""\
                id_map.yaml
            """)
        )
        logger.info("initialized data versioning in %s", self.data_path)

    def create_checkpoint(self, message: str) -> None:
        if not self.is_git_repo():
            logger.debug("skipping checkpoint, %s is not a git repo", self.data_path)
            return
        self.__execute_git_command(GitCommand.COMMIT_ALL, message=message)
        logger.debug("created data checkpoint: %s", message)

    def __fail_if_git_not_available(self) -> None:
        if shutil.which("git") is None:
            raise GitUnavailableError("Git is not available on the system")

    def __execute_git_command(
        self, command: GitCommand, message: Optional[str] = None
    ) -> list[str]:
        self.__fail_if_git_not_available()
        folder = str(self.data_path.resolve())

        git_commands: list[list[str]] = []
        match command:
            case GitCommand.STATUS:
                git_commands.append(["git", "-C", folder, "status"])
            case GitCommand.INIT:
                git_commands.append(["git", "-C", folder, "init"])
            case GitCommand.COMMIT_ALL:
                git_commands.append(["git", "-C", folder, "add", "-A"])
                git_commands.append(
                    ["git", "-C", folder, "commit", "-m", message or "update"]
                )

        results = []
        for git_command in git_commands:
            result = subprocess.run(git_command, text=True, capture_output=True)
            results.append(result.stdout + result.stderr)
        return results
