"""Required executable checks."""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from .build_config import ToolRequirement
from .commands import CommandRunner
from .errors import MissingToolError


def ensure_tool(runner: CommandRunner, requirement: ToolRequirement) -> str:
    location = runner.which(requirement.binary)
    if not location:
        raise MissingToolError(requirement.binary, requirement.install_hint)
    logger.debug("Found {} at {}", requirement.binary, location)
    return location


def validate_toolchain(runner: CommandRunner, requirements: Iterable[ToolRequirement]) -> None:
    for requirement in requirements:
        ensure_tool(runner, requirement)


__all__ = ["ensure_tool", "validate_toolchain"]
