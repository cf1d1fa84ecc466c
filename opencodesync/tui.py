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

"""Textual front-end for switching opencode profiles."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from .config import Config, Palette
from .controller import (
    EscapePressed,
    Event,
    InterruptPressed,
    MENU_ITEMS,
    MenuAction,
    MenuSelected,
    Outcome,
    ProfileSelected,
    View,
    ViewController,
    ViewState,
)
from .status import Severity, StatusMonitor, StatusSnapshot

logger = logging.getLogger(__name__)

BANNER = (
    "╔══════════════════════════════════════════════════════════════╗\n"
    "║                      opencode-sync TUI                       ║\n"
    "║                Manage your opencode profiles                 ║\n"
    "╚══════════════════════════════════════════════════════════════╝"
)

INSTRUCTIONS = (
    "Use ↑↓ to navigate, Enter to select, Escape to go back, Ctrl+C to exit")


# ── Status builder ──────────────────────────────────────────────────────────


def severity_color(severity: Severity, palette: Palette) -> str:
    return {
        Severity.SUCCESS: palette.success,
        Severity.WARNING: palette.warning,
        Severity.DANGER: palette.danger,
    }[severity]


def build_status_text(snapshot: StatusSnapshot, palette: Palette) -> Text:
    """Build Rich Text for the status panel."""
    text = Text()
    text.append(f"Current Profile: {snapshot.current_profile}\n",
                style=palette.accent)
    text.append(f"Git Status: {snapshot.repository_state.value}",
                style=severity_color(snapshot.severity, palette))
    return text


def menu_options() -> list[Option]:
    options = []
    for item in MENU_ITEMS:
        label = Text()
        label.append(item.label, style="bold")
        label.append(f" — {item.description}", style="dim")
        options.append(Option(label, id=item.action.value))
    return options


def profile_list_options(state: ViewState) -> list[Option]:
    options = []
    for i, opt in enumerate(state.options):
        label = Text(opt.label, style="bold" if opt.value else "dim italic")
        if opt.description:
            label.append(f"  {opt.description}", style="dim")
        options.append(Option(label, id=f"profile-{i}", disabled=not opt.value))
    return options


# ── Textual App ─────────────────────────────────────────────────────────────


class ProfileApp(App[Outcome]):
    """opencode-sync interactive profile switcher."""

    TITLE = "opencode-sync"

    CSS = """
    Screen { layout: vertical; }

    #header {
        width: auto;
    }

    #status-panel {
        padding: 0 1;
    }

    #menu, #profile-list {
        margin: 0 2;
        border: round $primary;
        border-title-align: left;
    }

    #menu:focus, #profile-list:focus {
        border: round $accent;
    }

    #instructions {
        dock: bottom;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Exit", priority=True, show=False),
        Binding("escape", "back", "Back", priority=True, show=False),
    ]

    def __init__(
        self,
        cfg: Config,
        controller: ViewController,
        monitor: StatusMonitor,
    ) -> None:
        super().__init__()
        self.cfg = cfg
        self.controller = controller
        self.monitor = monitor
        self.ui_ready = False
        controller.terminal = self.run_in_terminal

    def compose(self) -> ComposeResult:
        yield Static(BANNER, id="header")
        yield Static("", id="status-panel")
        yield OptionList(*menu_options(), id="menu")
        yield Static(INSTRUCTIONS, id="instructions")

    def on_mount(self) -> None:
        palette = self.cfg.palette
        layout = self.cfg.layout
        self.screen.styles.background = palette.background

        header = self.query_one("#header", Static)
        header.styles.color = palette.accent
        header.styles.height = layout.header_height
        status = self.query_one("#status-panel", Static)
        status.styles.height = layout.status_height
        instructions = self.query_one("#instructions", Static)
        instructions.styles.color = palette.muted
        instructions.styles.height = layout.instructions_height

        menu = self.query_one("#menu", OptionList)
        menu.border_title = "Choose an action:"
        menu.highlighted = 0
        menu.focus()

        self.apply_layout(self.size.width, self.size.height)
        self.refresh_status()
        self.set_interval(self.cfg.refresh_interval, self.refresh_status)
        self.ui_ready = True
        logger.debug("UI started at %dx%d", self.size.width, self.size.height)

    # ── rendering ───────────────────────────────────────────────────────

    def refresh_status(self) -> None:
        snapshot = self.monitor.sample()
        self.query_one("#status-panel", Static).update(
            build_status_text(snapshot, self.cfg.palette))

    def apply_layout(self, width: int, height: int) -> None:
        """Size the visible lists for the current terminal geometry."""
        layout = self.cfg.layout
        for widget in self.query(OptionList):
            widget.styles.height = layout.list_height(height)
            widget.styles.width = layout.list_width(width)

    def on_resize(self, event: events.Resize) -> None:
        self.apply_layout(event.size.width, event.size.height)

    async def show_state(self, state: ViewState) -> None:
        """Mirror the controller's state onto the mounted widgets."""
        menu = self.query_one("#menu", OptionList)
        await self.query("#profile-list").remove()

        if state.view is View.PROFILE_LIST:
            menu.display = False
            profile_list = OptionList(
                *profile_list_options(state), id="profile-list")
            profile_list.border_title = "Available Profiles:"
            await self.mount(profile_list, before="#instructions")
            self.apply_layout(self.size.width, self.size.height)
            if state.options and state.options[0].value:
                profile_list.highlighted = state.highlighted
            profile_list.focus()
        else:
            menu.display = True
            menu.focus()
            self.refresh_status()

    # ── terminal handoff ────────────────────────────────────────────────

    def run_in_terminal(self, fn: Callable[[], Any]) -> Any:
        """Run fn with the screen released so a child can use the terminal."""
        failure: Optional[Exception] = None
        result = None
        try:
            with self.suspend():
                try:
                    result = fn()
                except Exception as e:
                    # Re-raised once the screen is back.
                    failure = e
        except SuspendNotSupported:
            logger.debug("Driver cannot suspend, running in place")
            return fn()
        if failure is not None:
            raise failure
        return result

    # ── events ──────────────────────────────────────────────────────────

    async def handle_view_event(self, event: Event) -> None:
        state = self.controller.dispatch(event)
        for notice in self.controller.drain_notices():
            self.notify(notice.message, severity=notice.severity)
        if self.controller.outcome is not None:
            self.exit(self.controller.outcome)
            return
        await self.show_state(state)

    async def on_option_list_option_selected(
        self, event: OptionList.OptionSelected,
    ) -> None:
        if event.option_list.id == "menu":
            await self.handle_view_event(
                MenuSelected(MenuAction(event.option_id)))
        elif event.option_list.id == "profile-list":
            options = self.controller.state.options
            if 0 <= event.option_index < len(options):
                await self.handle_view_event(
                    ProfileSelected(options[event.option_index].value))

    async def action_back(self) -> None:
        if self.controller.state.view is View.MENU:
            return
        await self.handle_view_event(EscapePressed())

    async def action_interrupt(self) -> None:
        await self.handle_view_event(InterruptPressed())
