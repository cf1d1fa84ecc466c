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

"""opencodesync - Terminal front-end for switching opencode profiles."""

__version__ = "2.0.0"

from .config import Config, LayoutMetrics, Palette
from .controller import MenuAction, View, ViewController, ViewState
from .profiles import Profile, ProfileRegistry, SwitchFailed
from .runner import CommandRunner
from .status import RepositoryState, StatusMonitor, StatusSnapshot

__all__ = [
    "__version__",
    "CommandRunner",
    "Config",
    "LayoutMetrics",
    "MenuAction",
    "Palette",
    "Profile",
    "ProfileRegistry",
    "RepositoryState",
    "StatusMonitor",
    "StatusSnapshot",
    "SwitchFailed",
    "View",
    "ViewController",
    "ViewState",
]
