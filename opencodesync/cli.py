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

"""Command-line entry point for opencode-sync-tui."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional

from . import __version__
from .config import Config
from .controller import Exit, Handoff, Outcome, RendererFailed, ViewController
from .logging_setup import setup_logging
from .profiles import ProfileRegistry
from .runner import CommandRunner, fallback_argv
from .status import StatusMonitor
from .ui import error, format_profile, format_status, warning

logger = logging.getLogger(__name__)


class RendererUnavailable(RuntimeError):
    """The full-screen UI cannot run in this environment."""


def ensure_terminal() -> None:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise RendererUnavailable("stdin/stdout is not a terminal")


def ensure_sync_script(cfg: Config) -> bool:
    """
    Check the sync script is installed before anything else runs.

    Runs before logging is configured, so the report goes straight to stderr.
    """
    if cfg.sync_script.is_file():
        return True
    print(error(f"Sync script not found at {cfg.sync_script}."), file=sys.stderr)
    print("Please ensure opencode-sync is properly installed.", file=sys.stderr)
    return False


def start_ui(cfg: Config, controller: ViewController, monitor: StatusMonitor) -> Optional[Outcome]:
    """Run the Textual app; raises if it never got as far as mounting."""
    from .tui import ProfileApp

    ensure_terminal()
    app = ProfileApp(cfg=cfg, controller=controller, monitor=monitor)
    outcome = app.run()
    if not app.ui_ready:
        raise RendererUnavailable(
            f"renderer stopped during startup (status {app.return_code})")
    return outcome


def run_interactive(cfg: Config, runner: CommandRunner) -> int:
    registry = ProfileRegistry(cfg, runner)
    monitor = StatusMonitor(cfg, registry, runner)
    controller = ViewController(registry)

    try:
        outcome = start_ui(cfg, controller, monitor)
    except Exception as e:
        logger.exception("Full-screen UI failed to start")
        print(warning("Failed to start the full-screen UI. Falling back to bash TUI..."),
              file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        controller.dispatch(RendererFailed())
        outcome = controller.outcome

    if isinstance(outcome, Handoff):
        # The renderer has stopped by now; this never returns.
        runner.hand_off(fallback_argv(cfg, outcome.argument))
    if isinstance(outcome, Exit):
        logger.info("Exiting with status %d", outcome.code)
        return outcome.code
    logger.error("UI stopped without an outcome")
    return 1


def show_status(cfg: Config, runner: CommandRunner) -> int:
    registry = ProfileRegistry(cfg, runner)
    print(format_status(StatusMonitor(cfg, registry, runner).sample()))
    return 0


def show_profiles(cfg: Config, runner: CommandRunner) -> int:
    profiles = ProfileRegistry(cfg, runner).list_profiles()
    if not profiles:
        print("No profiles found. Create a profile first.")
        return 0
    for profile in profiles:
        print(format_profile(profile))
    return 0


def build_config(args: argparse.Namespace) -> Config:
    cfg = Config.from_env()
    if args.sync_dir:
        cfg = cfg.with_sync_dir(Path(args.sync_dir))
    if args.log_dir:
        cfg = cfg.with_log_dir(Path(args.log_dir))
    if args.refresh is not None:
        cfg = cfg.with_refresh_interval(args.refresh)
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opencode-sync-tui",
        description="Switch between opencode profiles managed by opencode-sync.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              opencode-sync-tui                     # Interactive profile switcher
              opencode-sync-tui --status            # Current profile and git status
              opencode-sync-tui --list              # Available profiles
              opencode-sync-tui --sync-dir ~/sync   # Use another sync directory
        """)
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--sync-dir",
        help="opencode-sync directory (default: $OPENCODE_SYNC_DIR or "
             "~/.local/share/opencode-sync)")
    parser.add_argument(
        "--log-dir",
        help="Directory for tui.log (default: $XDG_STATE_HOME/opencode-sync-tui or "
             "~/.local/state/opencode-sync-tui)")
    parser.add_argument(
        "--refresh", type=float,
        help="Seconds between status refreshes (default: 1.0)")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Write debug output to the log file")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--status", action="store_true",
        help="Print the current profile and repository state, then exit")
    mode.add_argument(
        "--list", action="store_true",
        help="Print available profiles, then exit")
    mode.add_argument(
        "--print-config", action="store_true",
        help="Print the resolved configuration as JSON, then exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    if args.print_config:
        print(json.dumps(cfg.as_dict(), indent=2))
        return 0

    # Nothing is created on disk until the installation checks out.
    if not ensure_sync_script(cfg):
        return 1

    setup_logging(cfg.log_path, verbose=args.verbose)
    runner = CommandRunner(cwd=cfg.sync_dir)

    try:
        if args.status:
            return show_status(cfg, runner)
        if args.list:
            return show_profiles(cfg, runner)
        return run_interactive(cfg, runner)
    except KeyboardInterrupt:
        print("\nAborted by user.")
        return 130
