"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

import pytest

from opencodesync.cli import RendererUnavailable, main
from opencodesync.controller import Exit, Handoff

from conftest import make_profiles


class TestStartup:
    def test_missing_script_exits_one_without_ui(self, sync_dir, capsys):
        with patch("opencodesync.tui.ProfileApp") as mock_app, \
                patch("opencodesync.cli.start_ui") as mock_start:
            code = main(["--sync-dir", str(sync_dir)])
        assert code == 1
        mock_app.assert_not_called()
        mock_start.assert_not_called()
        assert "Sync script not found" in capsys.readouterr().err

    def test_missing_script_blocks_status_too(self, sync_dir):
        assert main(["--sync-dir", str(sync_dir), "--status"]) == 1

    def test_print_config(self, sync_dir, capsys):
        assert main(["--sync-dir", str(sync_dir), "--print-config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["sync_dir"] == str(sync_dir)
        assert data["sync_script"].endswith("sync.sh")

    def test_env_var_selects_sync_dir(self, sync_dir, monkeypatch, capsys):
        monkeypatch.setenv("OPENCODE_SYNC_DIR", str(sync_dir))
        main(["--print-config"])
        assert json.loads(capsys.readouterr().out)["sync_dir"] == str(sync_dir)

    def test_bad_refresh_is_usage_error(self, sync_dir):
        with pytest.raises(SystemExit) as exc:
            main(["--sync-dir", str(sync_dir), "--refresh", "0"])
        assert exc.value.code == 2

    def test_writes_log_file_outside_sync_dir(self, cfg, sync_script, state_home):
        main(["--sync-dir", str(cfg.sync_dir), "--status"])
        assert (state_home / "opencode-sync-tui" / "tui.log").exists()
        assert not (cfg.sync_dir / "logs").exists()

    def test_log_dir_flag(self, cfg, sync_script, tmp_path):
        log_dir = tmp_path / "custom-logs"
        main(["--sync-dir", str(cfg.sync_dir), "--log-dir", str(log_dir), "--status"])
        assert (log_dir / "tui.log").exists()

    def test_status_leaves_sync_dir_untouched(self, cfg, sync_script):
        before = sorted(cfg.sync_dir.rglob("*"))
        assert main(["--sync-dir", str(cfg.sync_dir), "--status"]) == 0
        assert sorted(cfg.sync_dir.rglob("*")) == before

    def test_mistyped_sync_dir_is_not_created(self, tmp_path, state_home):
        typo = tmp_path / "typo-sync-dir"
        assert main(["--sync-dir", str(typo)]) == 1
        assert not typo.exists()
        assert not state_home.exists()


class TestPrintModes:
    def test_status(self, cfg, sync_script, capsys):
        assert main(["--sync-dir", str(cfg.sync_dir), "--status"]) == 0
        out = capsys.readouterr().out
        assert "Current Profile: work" in out
        assert "Git Status: Not initialized" in out

    def test_list(self, cfg, sync_script, capsys):
        make_profiles(cfg, "default", "work")
        assert main(["--sync-dir", str(cfg.sync_dir), "--list"]) == 0
        out = capsys.readouterr().out
        assert "default" in out
        assert "work (currently active)" in out

    def test_list_empty(self, cfg, sync_script, capsys):
        assert main(["--sync-dir", str(cfg.sync_dir), "--list"]) == 0
        assert "No profiles found" in capsys.readouterr().out


class TestInteractive:
    @patch("opencodesync.cli.start_ui")
    def test_exit_outcome(self, mock_start, cfg, sync_script):
        mock_start.return_value = Exit(0)
        assert main(["--sync-dir", str(cfg.sync_dir)]) == 0

    @patch("opencodesync.runner.CommandRunner.hand_off")
    @patch("opencodesync.cli.start_ui")
    def test_handoff_outcome_launches_fallback(self, mock_start, mock_hand_off, cfg, sync_script):
        mock_start.return_value = Handoff("create_profile")
        mock_hand_off.side_effect = SystemExit(0)
        with pytest.raises(SystemExit) as exc:
            main(["--sync-dir", str(cfg.sync_dir)])
        assert exc.value.code == 0
        mock_hand_off.assert_called_once_with(
            ["bash", str(cfg.fallback_tui), "create_profile"])

    @patch("opencodesync.runner.CommandRunner.hand_off")
    @patch("opencodesync.cli.ensure_terminal")
    def test_renderer_failure_falls_back(self, mock_terminal, mock_hand_off, cfg, sync_script, capsys):
        mock_terminal.side_effect = RendererUnavailable("not a terminal")
        mock_hand_off.side_effect = SystemExit(0)
        with patch("opencodesync.tui.ProfileApp") as mock_app:
            with pytest.raises(SystemExit) as exc:
                main(["--sync-dir", str(cfg.sync_dir)])
        assert exc.value.code == 0
        mock_app.assert_not_called()
        mock_hand_off.assert_called_once_with(["bash", str(cfg.fallback_tui)])
        assert "Falling back" in capsys.readouterr().err

    @patch("opencodesync.runner.CommandRunner.hand_off")
    @patch("opencodesync.cli.ensure_terminal")
    def test_mount_failure_falls_back(self, mock_terminal, mock_hand_off, cfg, sync_script):
        from opencodesync.tui import ProfileApp

        def broken_mount(self):
            raise RuntimeError("renderer could not draw")

        run = ProfileApp.run

        def headless_run(self):
            return run(self, headless=True)

        mock_hand_off.side_effect = SystemExit(0)
        with patch.object(ProfileApp, "on_mount", broken_mount), \
                patch.object(ProfileApp, "run", headless_run):
            with pytest.raises(SystemExit) as exc:
                main(["--sync-dir", str(cfg.sync_dir)])
        assert exc.value.code == 0
        mock_hand_off.assert_called_once_with(["bash", str(cfg.fallback_tui)])

    @patch("opencodesync.cli.start_ui")
    def test_no_outcome_is_failure(self, mock_start, cfg, sync_script):
        mock_start.return_value = None
        assert main(["--sync-dir", str(cfg.sync_dir)]) == 1
