"""Tests for logging setup, the summary reporter and the CLI entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_packaging import cli
from release_packaging.build import ReleaseReport
from release_packaging.errors import MissingToolError
from release_packaging.logger import setup_logging
from release_packaging.report import list_artifacts


def test_setup_logging_creates_log_directory(tmp_path: Path) -> None:
    log_file = setup_logging(console_level="debug", log_directory=tmp_path / "logs")
    assert log_file == (tmp_path / "logs" / "release_packaging.log").resolve()
    assert log_file.parent.is_dir()


def test_setup_logging_console_only() -> None:
    assert setup_logging() is None


def test_list_artifacts_sorted(tmp_path: Path) -> None:
    for name in ("b.zip", "a.tar.gz"):
        (tmp_path / name).write_bytes(b"x")
    assert list_artifacts(tmp_path) == ["a.tar.gz", "b.zip"]
    assert list_artifacts(tmp_path / "missing") == []


def test_main_returns_report_exit_code(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_build_release(config):
        seen["root"] = config.project_root
        return ReleaseReport(failure=MissingToolError("lipo", "Install Xcode Command Line Tools."))

    monkeypatch.setenv("RELEASE_PROJECT_ROOT", str(project))
    monkeypatch.delenv("RELEASE_LOG_DIR", raising=False)
    monkeypatch.setattr(cli, "build_release", fake_build_release)
    assert cli.main([]) == 2
    assert seen["root"] == project.resolve()


def test_main_rejects_arguments() -> None:
    with pytest.raises(SystemExit):
        cli.main(["--platforms", "macos"])
