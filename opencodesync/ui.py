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

"""Plain terminal output (outside the full-screen UI) - colors and formatting."""

from __future__ import annotations

import platform
import sys

import colorama
from colorama import Fore, Style

from .profiles import Profile
from .status import Severity, StatusSnapshot

# Enables ANSI handling on legacy Windows consoles; no-op elsewhere.
colorama.just_fix_windows_console()


SEVERITY_COLORS: dict[Severity, str] = {
    Severity.SUCCESS: Fore.LIGHTGREEN_EX,
    Severity.WARNING: Fore.LIGHTYELLOW_EX,
    Severity.DANGER: Fore.LIGHTRED_EX,
}


def color(text: str, color_code: str, bold: bool = False, stream=None) -> str:
    """Wrap text in color codes when writing to a TTY"""
    stream = stream or sys.stdout
    if not stream.isatty():
        return text

    prefix = f"{Style.BRIGHT}{color_code}" if bold else color_code
    return f"{prefix}{text}{Style.RESET_ALL}"


def success(text: str) -> str:
    return color(text, Fore.LIGHTGREEN_EX)


def warning(text: str) -> str:
    return color(text, Fore.LIGHTYELLOW_EX, stream=sys.stderr)


def error(text: str) -> str:
    return color(text, Fore.LIGHTRED_EX, stream=sys.stderr)


def info(text: str) -> str:
    """Blue text for the current profile name"""
    return color(text, Fore.BLUE)


def highlight(text: str) -> str:
    return color(text, Fore.WHITE, bold=True)


def dim(text: str) -> str:
    return color(text, Fore.LIGHTBLACK_EX)


def get_check_symbol() -> str:
    """Unicode checkmarks don't display properly in the Windows terminal"""
    if platform.system() == "Windows":
        return "[OK]"
    return "✓"


def format_status(snapshot: StatusSnapshot) -> str:
    state = snapshot.repository_state.value
    return "\n".join([
        f"Current Profile: {info(snapshot.current_profile)}",
        f"Git Status: {color(state, SEVERITY_COLORS[snapshot.severity])}",
    ])


def format_profile(profile: Profile) -> str:
    if profile.active:
        return f"  {success(get_check_symbol())} {highlight(profile.name)} {dim('(currently active)')}"
    return f"    {profile.name}"
