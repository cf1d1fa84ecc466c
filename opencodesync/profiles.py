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

"""Profile discovery and switching through the sync script."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .runner import CommandRunner, script_argv

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class Profile:
    name: str
    active: bool = False


class SwitchFailed(RuntimeError):
    """The sync script refused or failed to switch profiles."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not switch to profile '{name}'")
        self.name = name


def extract_profile_name(output: str) -> Optional[str]:
    """Name after the first colon of ``label:name``, or None if malformed."""
    _, sep, name = output.partition(":")
    name = name.strip()
    if not sep or not name:
        return None
    return name


def parse_current_profile(output: str) -> str:
    """
    Extract the profile name from ``current`` output (``label:name``).

    Anything after the first colon, trimmed. Missing colon or an empty name
    gives DEFAULT_PROFILE.
    """
    return extract_profile_name(output) or DEFAULT_PROFILE


class ProfileRegistry:
    """Stateless queries over the profiles directory and the sync script."""

    def __init__(self, cfg: Config, runner: CommandRunner) -> None:
        self.cfg = cfg
        self.runner = runner

    def current_profile_name(self) -> str:
        # Failures collapse to "default"; kept for compatibility with the
        # bash interface, which reports the same value.
        output, ok = self.runner.run(script_argv(self.cfg, "current"))
        if not ok:
            logger.warning("'current' failed, assuming profile '%s'",
                           DEFAULT_PROFILE)
            return DEFAULT_PROFILE
        name = extract_profile_name(output)
        if name is None:
            logger.warning("Unexpected 'current' output %r, assuming profile '%s'",
                           output.strip(), DEFAULT_PROFILE)
            return DEFAULT_PROFILE
        return name

    def list_profiles(self) -> list[Profile]:
        """Profile directories in enumeration order, the current one active."""
        root = self.cfg.profiles_dir
        if not root.is_dir():
            return []
        try:
            names = [p.name for p in root.iterdir() if p.is_dir()]
        except OSError as e:
            logger.error("Could not read %s: %s", root, e)
            return []

        current = self.current_profile_name()
        return [Profile(name=name, active=name == current) for name in names]

    def profile_exists(self, name: str) -> bool:
        return bool(name) and (self.cfg.profiles_dir / name).exists()

    def switch_to(self, name: str) -> None:
        """Run ``switch <name>`` on the terminal; raises SwitchFailed."""
        ok = self.runner.run_inheriting_terminal(
            script_argv(self.cfg, "switch", name))
        if not ok:
            logger.error("Switch to profile '%s' failed", name)
            raise SwitchFailed(name)
        logger.info("Switched to profile '%s'", name)

    def run_script(self, action: str) -> bool:
        """Run a state-changing script command (sync, deploy, init)."""
        ok = self.runner.run_inheriting_terminal(script_argv(self.cfg, action))
        if not ok:
            logger.error("Sync script '%s' failed", action)
        return ok
