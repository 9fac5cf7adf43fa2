"""Tests for the universal binary merger."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_packaging.errors import MissingBinaryError
from release_packaging.universal import merge_universal


def test_merge_creates_output(tmp_path: Path, runner) -> None:
    arm = tmp_path / "arm64" / "demo"
    x64 = tmp_path / "x86_64" / "demo"
    for path, payload in ((arm, b"arm"), (x64, b"x64")):
        path.parent.mkdir()
        path.write_bytes(payload)
    output = tmp_path / "universal2" / "demo"

    assert merge_universal(runner, [arm, x64], output) == output
    assert output.read_bytes() == b"armx64"
    assert runner.commands[-1] == ["lipo", "-create", "-output", str(output), str(arm), str(x64)]


def test_missing_input_is_fatal(tmp_path: Path, runner) -> None:
    present = tmp_path / "demo"
    present.write_bytes(b"arm")
    with pytest.raises(MissingBinaryError):
        merge_universal(runner, [present, tmp_path / "absent"], tmp_path / "universal2" / "demo")
    assert runner.commands == []
