"""Tests for startup directory and log file checks."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from folder_mirror.bootstrap import ensure_directories
from folder_mirror.errors import BootstrapError


class TestEnsureDirectories:
    def test_creates_everything_missing(self, tmp_path: Path):
        src = tmp_path / "src"
        rep = tmp_path / "nested" / "rep"
        log = tmp_path / "logs" / "deep" / "sync.log"

        ensure_directories(src, rep, log)

        assert src.is_dir()
        assert rep.is_dir()
        assert log.is_file()
        assert log.read_text() == ""

    def test_existing_paths_untouched(self, tmp_path: Path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "keep.txt").write_text("keep")
        log = tmp_path / "sync.log"
        log.write_text("history\n")

        ensure_directories(src, tmp_path / "rep", log)

        assert (src / "keep.txt").read_text() == "keep"
        assert log.read_text() == "history\n"

    def test_log_in_current_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ensure_directories(Path("src"), Path("rep"), Path("sync.log"))
        assert (tmp_path / "sync.log").is_file()

    def test_file_in_place_of_directory_is_fatal(self, tmp_path: Path):
        src = tmp_path / "src"
        src.write_text("not a dir")
        with pytest.raises(BootstrapError, match="not a directory"):
            ensure_directories(src, tmp_path / "rep", tmp_path / "log")

    def test_log_path_is_directory_is_fatal(self, tmp_path: Path):
        (tmp_path / "log").mkdir()
        with pytest.raises(BootstrapError):
            ensure_directories(
                tmp_path / "src", tmp_path / "rep", tmp_path / "log"
            )

    def test_mkdir_failure_is_fatal(self, tmp_path: Path):
        with patch.object(
            Path, "mkdir", side_effect=PermissionError(13, "Permission denied")
        ):
            with pytest.raises(BootstrapError, match="Permission denied"):
                ensure_directories(
                    tmp_path / "src", tmp_path / "rep", tmp_path / "log"
                )
