"""Shared test fixtures."""

import logging
import stat
import textwrap
from unittest.mock import MagicMock

import pytest

from opencodesync.config import Config
from opencodesync.profiles import Profile, ProfileRegistry
from opencodesync.runner import CommandRunner


@pytest.fixture
def sync_dir(tmp_path):
    """An opencode-sync directory with an empty profiles/ folder."""
    root = tmp_path / "opencode-sync"
    (root / "profiles").mkdir(parents=True)
    return root


@pytest.fixture
def cfg(sync_dir):
    return Config(sync_dir=sync_dir)


@pytest.fixture
def sync_script(cfg):
    """A stand-in sync.sh that reports 'work' as the current profile."""
    script = cfg.sync_script
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(textwrap.dedent("""\
        #!/bin/sh
        case "$1" in
          current) echo "Current profile: work" ;;
          switch) [ -d "$(dirname "$0")/../profiles/$2" ] || exit 1 ;;
          *) exit 0 ;;
        esac
    """))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def runner():
    return MagicMock(spec=CommandRunner)


@pytest.fixture
def registry():
    """A ProfileRegistry double with two profiles, 'work' active."""
    reg = MagicMock(spec=ProfileRegistry)
    reg.list_profiles.return_value = [
        Profile("default", False),
        Profile("work", True),
    ]
    reg.current_profile_name.return_value = "work"
    reg.run_script.return_value = True
    return reg


def make_profiles(cfg, *names):
    for name in names:
        (cfg.profiles_dir / name).mkdir()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    pkg_logger = logging.getLogger("opencodesync")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.propagate = True


@pytest.fixture(autouse=True)
def state_home(tmp_path, monkeypatch):
    state = tmp_path / "state"
    monkeypatch.setenv("XDG_STATE_HOME", str(state))
    return state
