"""Tests for status sampling."""

import pytest

from opencodesync.profiles import ProfileRegistry
from opencodesync.status import (
    CLEANLINESS_CHECK,
    RepositoryState,
    Severity,
    StatusMonitor,
    StatusSnapshot,
    status_severity,
)


def fake_run(status_output="", status_ok=True, current="Current profile: work"):
    calls = []

    def _run(cmd, cwd=None):
        calls.append(list(cmd))
        if cmd[0] == "git":
            return status_output, status_ok
        return current + "\n", True

    _run.calls = calls
    return _run


def monitor_for(cfg, runner):
    return StatusMonitor(cfg, ProfileRegistry(cfg, runner), runner)


class TestRepositoryState:
    def test_no_git_dir_is_uninitialized(self, cfg, runner):
        runner.run.side_effect = fake_run()
        snapshot = monitor_for(cfg, runner).sample()
        assert snapshot == StatusSnapshot("work", RepositoryState.UNINITIALIZED)
        assert not any(c[0] == "git" for c in runner.run.side_effect.calls)

    def test_no_diff_is_clean(self, cfg, runner):
        cfg.git_dir.mkdir()
        runner.run.side_effect = fake_run(status_output="")
        assert monitor_for(cfg, runner).sample().repository_state is RepositoryState.CLEAN

    def test_diff_is_modified(self, cfg, runner):
        cfg.git_dir.mkdir()
        runner.run.side_effect = fake_run(status_output=" M profiles/work/opencode.json\n")
        assert monitor_for(cfg, runner).sample().repository_state is RepositoryState.MODIFIED

    def test_failing_check_is_unknown(self, cfg, runner):
        cfg.git_dir.mkdir()
        runner.run.side_effect = fake_run(status_ok=False)
        assert monitor_for(cfg, runner).sample().repository_state is RepositoryState.UNKNOWN

    def test_check_runs_in_sync_dir(self, cfg, runner):
        cfg.git_dir.mkdir()
        runner.run.side_effect = fake_run()
        monitor_for(cfg, runner).repository_state()
        runner.run.assert_called_once_with(CLEANLINESS_CHECK, cwd=cfg.sync_dir)


class TestSample:
    def test_each_sample_is_fresh(self, cfg, runner):
        runner.run.side_effect = fake_run(current="Current profile: work")
        monitor = monitor_for(cfg, runner)
        first = monitor.sample()
        runner.run.side_effect = fake_run(current="Current profile: home")
        second = monitor.sample()
        assert first.current_profile == "work"
        assert second.current_profile == "home"

    def test_current_failure_reports_default(self, cfg, runner):
        runner.run.return_value = ("", False)
        assert monitor_for(cfg, runner).sample().current_profile == "default"


class TestSeverity:
    @pytest.mark.parametrize("state, severity", [
        (RepositoryState.CLEAN, Severity.SUCCESS),
        (RepositoryState.MODIFIED, Severity.WARNING),
        (RepositoryState.UNINITIALIZED, Severity.DANGER),
        (RepositoryState.UNKNOWN, Severity.DANGER),
    ])
    def test_mapping(self, state, severity):
        assert status_severity(state) is severity

    def test_mapping_is_total(self):
        for state in RepositoryState:
            assert isinstance(status_severity(state), Severity)

    def test_snapshot_severity(self):
        assert StatusSnapshot("x", RepositoryState.MODIFIED).severity is Severity.WARNING
