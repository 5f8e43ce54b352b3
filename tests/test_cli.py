"""Tests for CLI interface."""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from rudu.cli import app

runner = CliRunner()


def make_tree(root):
    (root / "big").mkdir()
    (root / "big" / "data.bin").write_bytes(os.urandom(64 * 1024))
    (root / "small.txt").write_bytes(os.urandom(100))
    (root / "empty").mkdir()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "rudu version" in result.stdout

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "rudu version" in result.stdout


class TestHelp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--bar-width" in result.stdout
        assert "--jobs" in result.stdout


class TestListing:
    def test_lists_entries(self, tmp_path):
        make_tree(tmp_path)
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 0
        assert "File Name" in result.stdout
        assert "big" in result.stdout
        assert "small.txt" in result.stdout
        assert "empty" in result.stdout
        assert "Total size:" in result.stdout

    def test_sorted_largest_first(self, tmp_path):
        make_tree(tmp_path)
        result = runner.invoke(app, [str(tmp_path)])
        assert result.stdout.index("big") < result.stdout.index("small.txt")

    def test_default_path_is_current_directory(self, tmp_path):
        make_tree(tmp_path)
        cwd = os.getcwd()
        os.chdir(tmp_path)
        try:
            result = runner.invoke(app, [])
        finally:
            os.chdir(cwd)
        assert result.exit_code == 0
        assert "small.txt" in result.stdout

    def test_bar_width(self, tmp_path):
        (tmp_path / "only.bin").write_bytes(os.urandom(4096))
        result = runner.invoke(app, [str(tmp_path), "--bar-width", "5"])
        assert result.exit_code == 0
        assert "[#####] 100.0%" in result.stdout

    def test_files_column(self, tmp_path):
        make_tree(tmp_path)
        result = runner.invoke(app, [str(tmp_path), "--files"])
        assert result.exit_code == 0
        assert "Files" in result.stdout

    def test_jobs(self, tmp_path):
        make_tree(tmp_path)
        result = runner.invoke(app, [str(tmp_path), "--jobs", "3"])
        assert result.exit_code == 0
        assert "Total size:" in result.stdout

    def test_empty_directory(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 0
        assert "No entries found" in result.stdout
        assert "Total size: 0.00 B" in result.stdout

    def test_verbose(self, tmp_path):
        make_tree(tmp_path)
        result = runner.invoke(app, [str(tmp_path), "--verbose"])
        assert result.exit_code == 0
        assert "Total size:" in result.stdout


class TestErrors:
    def test_nonexistent_path(self, tmp_path):
        missing = tmp_path / "missing"
        result = runner.invoke(app, [str(missing)])
        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert "Total size" not in result.output

    def test_unlistable_path(self, tmp_path):
        with patch("rudu.report.os.scandir", side_effect=PermissionError(13, "Permission denied")):
            result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot list" in result.output

    def test_invalid_bar_width(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path), "--bar-width", "0"])
        assert result.exit_code == 2

    def test_invalid_jobs(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path), "--jobs", "0"])
        assert result.exit_code == 2


class TestUndecodableNames:
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX byte file names only")
    def test_listing_survives_bad_name(self, tmp_path):
        try:
            (tmp_path / os.fsdecode(b"bad\xffname.bin")).write_bytes(os.urandom(5000))
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")
        (tmp_path / "good.txt").write_bytes(os.urandom(100))

        result = runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "bad�name.bin" in result.stdout
        assert "good.txt" in result.stdout
        assert "Total size:" in result.stdout


class TestProgress:
    def test_progress_shown_on_terminal(self, tmp_path):
        make_tree(tmp_path)
        progress = MagicMock()

        with patch("rudu.cli.err_console") as mock_err_console, patch(
            "rudu.cli.show_scanning_progress"
        ) as mock_show_progress:
            mock_err_console.is_terminal = True
            mock_show_progress.return_value.__enter__.return_value = progress
            result = runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == 0, result.output
        mock_show_progress.assert_called_once()
        progress.add_task.assert_called_once()
        assert progress.update.call_count == 3
        last = progress.update.call_args
        assert last.kwargs["completed"] == 3
        assert last.kwargs["total"] == 3
        assert "Total size:" in result.stdout

    def test_no_progress_when_not_a_terminal(self, tmp_path):
        make_tree(tmp_path)
        with patch("rudu.cli.show_scanning_progress") as mock_show_progress:
            result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 0
        mock_show_progress.assert_not_called()
