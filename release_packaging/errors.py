"""Error taxonomy for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence


class Severity(str, Enum):
    OK = "ok"
    WARNING = "warning"
    FATAL = "fatal"


class PackagingError(Exception):
    """Fatal failure that stops the pipeline."""

    exit_code: int = 1


class MissingToolError(PackagingError):
    """A required executable is not on PATH."""

    exit_code = 2

    def __init__(self, tool: str, hint: str) -> None:
        super().__init__(f"Missing tool '{tool}'. {hint}")
        self.tool = tool
        self.hint = hint


class CommandFailedError(PackagingError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(command)}")
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        if returncode < 0:
            self.exit_code = 128 + abs(returncode)
        else:
            self.exit_code = returncode or 1


class MissingBinaryError(PackagingError):
    """An expected build output does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Expected binary not found: {path}")
        self.path = path


class MetadataError(PackagingError):
    """Package metadata could not be parsed."""


class OutputError(PackagingError):
    """Writing to the output directory or an archive failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path


@dataclass(slots=True)
class PackagingWarning:
    """Non-fatal problem recorded by a step, e.g. a failed strip."""

    step: str
    message: str


__all__ = [
    "CommandFailedError",
    "MetadataError",
    "MissingBinaryError",
    "MissingToolError",
    "OutputError",
    "PackagingError",
    "PackagingWarning",
    "Severity",
]
