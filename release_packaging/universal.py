"""Merge single-architecture macOS binaries into a universal binary."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from loguru import logger

from .commands import CommandRunner
from .errors import MissingBinaryError, OutputError


def merge_universal(runner: CommandRunner, inputs: Sequence[Path], output: Path) -> Path:
    for binary in inputs:
        if not binary.is_file():
            raise MissingBinaryError(binary)

    logger.info("Creating {} binary", output.parent.name)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(output, str(exc)) from exc
    runner.run(["lipo", "-create", "-output", str(output), *[str(binary) for binary in inputs]])
    if not output.is_file():
        raise MissingBinaryError(output)
    return output


__all__ = ["merge_universal"]
