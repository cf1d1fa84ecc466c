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

"""
View state machine for the full-screen UI.

The controller knows nothing about widgets. The Textual app feeds it
events, then mirrors ``controller.state`` onto the screen, shows any
queued notices, and exits with ``controller.outcome`` once one is set.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from .profiles import Profile, ProfileRegistry, SwitchFailed

logger = logging.getLogger(__name__)

T = TypeVar("T")


class View(enum.Enum):
    MENU = "menu"
    PROFILE_LIST = "profiles"
    DELEGATED = "delegated"


class MenuAction(enum.Enum):
    SWITCH_PROFILE = "switch"
    CREATE_PROFILE = "create"
    SYNC = "sync"
    DEPLOY = "deploy"
    VIEW_DETAILS = "details"
    INIT_REPO = "init"
    OPEN_DIR = "open"
    EXIT = "exit"


@dataclass(frozen=True)
class MenuItem:
    action: MenuAction
    label: str
    description: str


MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem(MenuAction.SWITCH_PROFILE, "Switch Profile",
             "Change to a different profile"),
    MenuItem(MenuAction.CREATE_PROFILE, "Create Profile",
             "Create a new profile"),
    MenuItem(MenuAction.SYNC, "Sync with Remote",
             "Synchronize with remote repository"),
    MenuItem(MenuAction.DEPLOY, "Deploy Current Profile",
             "Deploy current profile to opencode config"),
    MenuItem(MenuAction.VIEW_DETAILS, "View Profile Details",
             "View detailed profile information"),
    MenuItem(MenuAction.INIT_REPO, "Initialize Git Repository",
             "Initialize git repository for sync"),
    MenuItem(MenuAction.OPEN_DIR, "Open Profile Directory",
             "Open profile directory in editor"),
    MenuItem(MenuAction.EXIT, "Exit", "Exit the application"),
)

# Actions the rich view does not implement; the bash interface takes over.
FALLBACK_ARGUMENTS: dict[MenuAction, str] = {
    MenuAction.CREATE_PROFILE: "create_profile",
    MenuAction.VIEW_DETAILS: "view_profile_details",
    MenuAction.OPEN_DIR: "open_profile_dir",
}

SCRIPT_COMMANDS: dict[MenuAction, str] = {
    MenuAction.SYNC: "sync",
    MenuAction.DEPLOY: "deploy",
    MenuAction.INIT_REPO: "init",
}


@dataclass(frozen=True)
class ProfileOption:
    label: str
    description: str
    value: str


NO_PROFILES = ProfileOption("No profiles found", "Create a profile first", "")


def profile_options(profiles: list[Profile]) -> tuple[ProfileOption, ...]:
    if not profiles:
        return (NO_PROFILES,)
    return tuple(
        ProfileOption(p.name, "(currently active)" if p.active else "", p.name)
        for p in profiles
    )


@dataclass(frozen=True)
class ViewState:
    view: View = View.MENU
    options: tuple[ProfileOption, ...] = ()
    highlighted: int = 0
    fallback_argument: Optional[str] = None


# ── Events ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MenuSelected:
    action: MenuAction


@dataclass(frozen=True)
class ProfileSelected:
    value: str


@dataclass(frozen=True)
class EscapePressed:
    pass


@dataclass(frozen=True)
class InterruptPressed:
    pass


@dataclass(frozen=True)
class RendererFailed:
    pass


Event = Union[MenuSelected, ProfileSelected, EscapePressed,
              InterruptPressed, RendererFailed]


# ── Outcomes ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Exit:
    code: int = 0


@dataclass(frozen=True)
class Handoff:
    argument: Optional[str] = None


Outcome = Union[Exit, Handoff]


@dataclass(frozen=True)
class Notice:
    message: str
    severity: str = "information"


def _direct(fn: Callable[[], T]) -> T:
    return fn()


class ViewController:
    """Owns ViewState; ``dispatch`` is the only way it changes."""

    def __init__(
        self,
        registry: ProfileRegistry,
        terminal: Optional[Callable[[Callable[[], Any]], Any]] = None,
    ) -> None:
        self.registry = registry
        # Wraps calls that need the real terminal (the app suspends itself).
        self.terminal = terminal or _direct
        self.state = ViewState()
        self.outcome: Optional[Outcome] = None
        self.notices: list[Notice] = []

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def drain_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def dispatch(self, event: Event) -> ViewState:
        if self.finished:
            return self.state

        previous = self.state.view
        if isinstance(event, InterruptPressed):
            self.outcome = Exit(0)
        elif isinstance(event, RendererFailed):
            self._delegate(None)
        elif isinstance(event, EscapePressed):
            if self.state.view is not View.MENU:
                self.state = ViewState()
        elif isinstance(event, MenuSelected):
            if self.state.view is View.MENU:
                self._on_menu(event.action)
        elif isinstance(event, ProfileSelected):
            if self.state.view is View.PROFILE_LIST:
                self._on_profile(event.value)

        if self.state.view is not previous:
            logger.debug("View %s -> %s", previous.value, self.state.view.value)
        return self.state

    # ── handlers ────────────────────────────────────────────────────────

    def _on_menu(self, action: MenuAction) -> None:
        if action is MenuAction.SWITCH_PROFILE:
            self._show_profiles()
        elif action is MenuAction.EXIT:
            self.outcome = Exit(0)
        elif action in FALLBACK_ARGUMENTS:
            self._delegate(FALLBACK_ARGUMENTS[action])
        elif action in SCRIPT_COMMANDS:
            self._run_script(SCRIPT_COMMANDS[action])

    def _show_profiles(self) -> None:
        profiles = self.registry.list_profiles()
        active = next(
            (i for i, p in enumerate(profiles) if p.active), 0)
        self.state = ViewState(
            view=View.PROFILE_LIST,
            options=profile_options(profiles),
            highlighted=active,
        )

    def _on_profile(self, value: str) -> None:
        if not value:
            return
        try:
            self.terminal(lambda: self.registry.switch_to(value))
        except SwitchFailed as e:
            self.notices.append(Notice(str(e), "error"))
        else:
            self.notices.append(Notice(f"✓ Switched to profile '{value}'"))
        self.state = ViewState()

    def _run_script(self, command: str) -> None:
        ok = self.terminal(lambda: self.registry.run_script(command))
        if ok:
            self.notices.append(Notice(f"✓ {command.capitalize()} finished"))
        else:
            self.notices.append(Notice(
                f"{command.capitalize()} failed — see the log for details",
                "error"))

    def _delegate(self, argument: Optional[str]) -> None:
        self.state = ViewState(view=View.DELEGATED, fallback_argument=argument)
        self.outcome = Handoff(argument)
