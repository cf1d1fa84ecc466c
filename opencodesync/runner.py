# Copyright 2026 Duke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""External command execution: captured, terminal-attached, and handoff."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .config import Config

logger = logging.getLogger(__name__)


def script_argv(cfg: Config, action: str, *args: str) -> list[str]:
    """Build the argv for one sync script command, e.g. ``switch work``."""
    return [str(cfg.sync_script), action, *args]


def fallback_argv(cfg: Config, argument: Optional[str] = None) -> list[str]:
    argv = [cfg.fallback_shell, str(cfg.fallback_tui)]
    if argument:
        argv.append(argument)
    return argv


class CommandRunner:
    """Synchronous process execution. Nothing here retries."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd

    def run(self, cmd: Sequence[str], cwd: Optional[Path] = None) -> tuple[str, bool]:
        """Execute a command, capturing stdout. Returns (stdout, success)."""
        workdir = cwd or self.cwd
        try:
            result = subprocess.run(
                list(cmd),
                cwd=str(workdir) if workdir else None,
                check=False,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.warning("Could not start %s: %s", shlex.join(cmd), e)
            return "", False

        if result.returncode != 0:
            logger.warning(
                "%s exited with status %d: %s",
                shlex.join(cmd), result.returncode, result.stderr.strip())
        return result.stdout, result.returncode == 0

    def run_inheriting_terminal(self, cmd: Sequence[str], cwd: Optional[Path] = None) -> bool:
        """Execute a command attached to the controlling terminal."""
        workdir = cwd or self.cwd
        try:
            result = subprocess.run(
                list(cmd),
                cwd=str(workdir) if workdir else None,
                check=False,
            )
        except OSError as e:
            logger.warning("Could not start %s: %s", shlex.join(cmd), e)
            return False

        if result.returncode != 0:
            logger.warning("%s exited with status %d",
                           shlex.join(cmd), result.returncode)
        return result.returncode == 0

    def hand_off(self, argv: Sequence[str]) -> NoReturn:
        """
        Give the terminal to another program and end this process.

        The child inherits stdin/stdout/stderr. Ctrl-C while it runs belongs
        to the child, so this process keeps waiting instead of dying first.
        Exits with status 0 once the child is gone, or 1 if it never started.
        """
        logger.info("Handing off to %s", shlex.join(argv))
        try:
            process = subprocess.Popen(list(argv), cwd=str(self.cwd) if self.cwd else None)
        except OSError as e:
            logger.error("Could not start fallback %s: %s", shlex.join(argv), e)
            sys.exit(1)

        while True:
            try:
                process.wait()
                break
            except KeyboardInterrupt:
                continue
        sys.exit(0)
