"""Pytest configuration and a simulated cargo toolchain."""

from __future__ import annotations

import json
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple

import pytest
from loguru import logger


ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from release_packaging.build_config import BuildConfig  # noqa: E402
from release_packaging.commands import CommandRunner  # noqa: E402


class FakeRunner(CommandRunner):
    """Stand-in for cargo, rustup, lipo, strip and zig.

    Builds write small placeholder binaries under ``target/`` so the later
    steps have real files to merge and archive.
    """

    def __init__(self, cwd: Path, app_name: str = "demo", version: str = "1.2.3") -> None:
        super().__init__(cwd)
        self.app_name = app_name
        self.version = version
        self.commands: List[List[str]] = []
        self.installed: Set[str] = set()
        self.missing: Set[str] = set()
        self.failures: Dict[Tuple[str, ...], int] = {}
        self.metadata_stdout: str | None = None

    def which(self, binary: str) -> str | None:
        if binary in self.missing:
            return None
        return f"/usr/bin/{binary}"

    def ran(self, *prefix: str) -> List[List[str]]:
        return [cmd for cmd in self.commands if tuple(cmd[: len(prefix)]) == prefix]

    def _spawn(self, cmd: list[str], *, capture: bool) -> subprocess.CompletedProcess[str]:
        self.commands.append(cmd)
        for prefix, code in self.failures.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                return subprocess.CompletedProcess(cmd, code, "", "simulated failure")

        stdout = ""
        if cmd[:4] == ["rustup", "target", "list", "--installed"]:
            stdout = "\n".join(sorted(self.installed)) + "\n"
        elif cmd[:3] == ["rustup", "target", "add"]:
            self.installed.add(cmd[3])
        elif cmd[:2] == ["cargo", "metadata"]:
            stdout = self.metadata_stdout
            if stdout is None:
                stdout = json.dumps({"packages": [{"name": self.app_name, "version": self.version}]})
        elif cmd[0] == "cargo":
            self._fake_build(cmd[cmd.index("--target") + 1])
        elif cmd[0] == "lipo":
            output = Path(cmd[3])
            output.write_bytes(b"".join(Path(source).read_bytes() for source in cmd[4:]))
        elif cmd[:2] == ["zig", "objcopy"]:
            shutil.copy2(cmd[3], cmd[4])
        return subprocess.CompletedProcess(cmd, 0, stdout, "")

    def _fake_build(self, triple: str) -> None:
        suffix = ".exe" if "windows" in triple else ""
        binary = self.cwd / "target" / triple / "release" / f"{self.app_name}{suffix}"
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_bytes(f"binary for {triple}".encode())
        binary.chmod(0o755)


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    yield
    logger.remove()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    (root / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "1.2.3"\nedition = "2021"\n\n[dependencies]\nclap = "4"\n',
        encoding="utf-8",
    )
    (root / "LICENSE").write_text("MIT License\n", encoding="utf-8")
    (root / "README.md").write_text("# demo\n", encoding="utf-8")
    return root


@pytest.fixture
def runner(project: Path) -> FakeRunner:
    return FakeRunner(project)


@pytest.fixture
def config(project: Path, monkeypatch: pytest.MonkeyPatch) -> BuildConfig:
    monkeypatch.delenv("RELEASE_LOG_DIR", raising=False)
    monkeypatch.delenv("RELEASE_LOG_LEVEL", raising=False)
    return BuildConfig.default(project)
