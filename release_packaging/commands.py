"""Thin wrapper over subprocess for running toolchain commands."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from loguru import logger

from .errors import CommandFailedError


class CommandRunner:
    """Run external commands from the project root.

    All pipeline steps go through this class so that tests can substitute
    the toolchain without touching the filesystem PATH.
    """

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd

    def which(self, binary: str) -> str | None:
        return shutil.which(binary)

    def run(
        self,
        args: Sequence[str],
        *,
        capture: bool = False,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        cmd = [str(arg) for arg in args]
        logger.debug("Running: {}", " ".join(cmd))
        try:
            result = self._spawn(cmd, capture=capture)
        except FileNotFoundError as exc:
            raise CommandFailedError(cmd, 127, str(exc)) from exc
        if check and result.returncode != 0:
            raise CommandFailedError(cmd, result.returncode, result.stderr or "")
        return result

    def _spawn(self, cmd: list[str], *, capture: bool) -> subprocess.CompletedProcess[str]:
        return subprocess.run(cmd, cwd=self.cwd, capture_output=capture, text=True)


__all__ = ["CommandRunner"]
