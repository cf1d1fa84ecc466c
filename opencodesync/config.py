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

"""Configuration management."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


ENV_SYNC_DIR = "OPENCODE_SYNC_DIR"
ENV_STATE_HOME = "XDG_STATE_HOME"
DEFAULT_SYNC_DIR = Path.home() / ".local" / "share" / "opencode-sync"
# Logs live outside the sync dir, which is a git working tree that gets pushed.
DEFAULT_LOG_DIR = Path.home() / ".local" / "state" / "opencode-sync-tui"


@dataclass(frozen=True)
class Palette:
    """Colors used by the full-screen UI (hex strings understood by rich)."""

    accent: str = "#3b82f6"
    success: str = "#22c55e"
    warning: str = "#eab308"
    danger: str = "#ef4444"
    text: str = "#ffffff"
    muted: str = "#9ca3af"
    background: str = "#001122"
    selected_background: str = "#334455"
    selected_text: str = "#ffff00"
    focused_border: str = "#00aaff"


@dataclass(frozen=True)
class LayoutMetrics:
    """Fixed row counts for the stacked UI regions."""

    header_height: int = 4
    status_height: int = 3
    instructions_height: int = 2
    list_margin: int = 2

    def list_height(self, terminal_height: int) -> int:
        """Rows left for the selectable list at a given terminal height."""
        used = (self.header_height + self.status_height
                + self.instructions_height + 2)
        return max(terminal_height - used, 3)

    def list_width(self, terminal_width: int) -> int:
        return max(terminal_width - 2 * self.list_margin, 10)


@dataclass(frozen=True)
class Config:
    """Application configuration, built once at startup."""

    sync_dir: Path = DEFAULT_SYNC_DIR
    log_dir: Path = DEFAULT_LOG_DIR
    fallback_shell: str = "bash"
    refresh_interval: float = 1.0
    palette: Palette = field(default_factory=Palette)
    layout: LayoutMetrics = field(default_factory=LayoutMetrics)

    @property
    def sync_script(self) -> Path:
        return self.sync_dir / "sync" / "sync.sh"

    @property
    def fallback_tui(self) -> Path:
        return self.sync_dir / "tui" / "opencode-sync-tui-bash"

    @property
    def profiles_dir(self) -> Path:
        return self.sync_dir / "profiles"

    @property
    def git_dir(self) -> Path:
        return self.sync_dir / ".git"

    @property
    def log_path(self) -> Path:
        return self.log_dir / "tui.log"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Defaults, overridden by OPENCODE_SYNC_DIR and XDG_STATE_HOME."""
        env = os.environ if environ is None else environ
        cfg = Config()
        raw = env.get(ENV_SYNC_DIR, "").strip()
        if raw:
            cfg = cfg.with_sync_dir(Path(raw))
        state_home = env.get(ENV_STATE_HOME, "").strip()
        if state_home:
            cfg = cfg.with_log_dir(Path(state_home) / "opencode-sync-tui")
        return cfg

    def with_sync_dir(self, sync_dir: Path) -> "Config":
        return dataclasses.replace(self, sync_dir=Path(sync_dir).expanduser())

    def with_log_dir(self, log_dir: Path) -> "Config":
        return dataclasses.replace(self, log_dir=Path(log_dir).expanduser())

    def with_refresh_interval(self, seconds: float) -> "Config":
        if seconds <= 0:
            raise ValueError("refresh interval must be positive")
        return dataclasses.replace(self, refresh_interval=seconds)

    def as_dict(self) -> dict:
        return {
            "sync_dir": str(self.sync_dir),
            "sync_script": str(self.sync_script),
            "fallback_tui": str(self.fallback_tui),
            "fallback_shell": self.fallback_shell,
            "profiles_dir": str(self.profiles_dir),
            "refresh_interval": self.refresh_interval,
            "log_path": str(self.log_path),
            "palette": dataclasses.asdict(self.palette),
            "layout": dataclasses.asdict(self.layout),
        }
