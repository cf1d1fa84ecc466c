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

"""Current profile and repository cleanliness, sampled per refresh tick."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .config import Config
from .profiles import ProfileRegistry
from .runner import CommandRunner

logger = logging.getLogger(__name__)


class RepositoryState(enum.Enum):
    CLEAN = "Clean"
    MODIFIED = "Modified"
    UNINITIALIZED = "Not initialized"
    UNKNOWN = "Unknown"


class Severity(enum.Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


# Every RepositoryState has an entry; no fallback lookup.
STATE_SEVERITY: dict[RepositoryState, Severity] = {
    RepositoryState.CLEAN: Severity.SUCCESS,
    RepositoryState.MODIFIED: Severity.WARNING,
    RepositoryState.UNINITIALIZED: Severity.DANGER,
    RepositoryState.UNKNOWN: Severity.DANGER,
}


def status_severity(state: RepositoryState) -> Severity:
    return STATE_SEVERITY[state]


@dataclass(frozen=True)
class StatusSnapshot:
    current_profile: str
    repository_state: RepositoryState

    @property
    def severity(self) -> Severity:
        return status_severity(self.repository_state)


# Tracked changes in the working tree or the index; untracked files ignored.
CLEANLINESS_CHECK = ["git", "status", "--porcelain", "--untracked-files=no"]


class StatusMonitor:
    def __init__(self, cfg: Config, registry: ProfileRegistry, runner: CommandRunner) -> None:
        self.cfg = cfg
        self.registry = registry
        self.runner = runner

    def repository_state(self) -> RepositoryState:
        if not self.cfg.git_dir.exists():
            return RepositoryState.UNINITIALIZED
        output, ok = self.runner.run(CLEANLINESS_CHECK, cwd=self.cfg.sync_dir)
        if not ok:
            logger.warning("Cleanliness check failed in %s", self.cfg.sync_dir)
            return RepositoryState.UNKNOWN
        return RepositoryState.MODIFIED if output.strip() else RepositoryState.CLEAN

    def sample(self) -> StatusSnapshot:
        """Fresh snapshot; nothing is cached between calls."""
        return StatusSnapshot(
            current_profile=self.registry.current_profile_name(),
            repository_state=self.repository_state(),
        )
