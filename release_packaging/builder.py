"""Per-target cargo builds and symbol stripping."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from .build_config import Backend, StripTool, TargetDescriptor
from .commands import CommandRunner
from .errors import CommandFailedError, MissingBinaryError, PackagingWarning


BUILD_COMMANDS = {
    Backend.NATIVE: ["cargo", "build"],
    Backend.XWIN: ["cargo", "xwin", "build"],
    Backend.ZIGBUILD: ["cargo", "zigbuild"],
}


def installed_targets(runner: CommandRunner) -> set[str]:
    result = runner.run(["rustup", "target", "list", "--installed"], capture=True)
    return {line.strip() for line in (result.stdout or "").splitlines() if line.strip()}


def ensure_target_installed(runner: CommandRunner, triple: str) -> bool:
    """Add the rustup target if missing. Returns True when it was installed."""

    if triple in installed_targets(runner):
        return False
    logger.info("Installing rustup target {}", triple)
    runner.run(["rustup", "target", "add", triple])
    return True


def build_binary(runner: CommandRunner, target: TargetDescriptor, target_dir: Path, app_name: str) -> Path:
    logger.info("Building {} {} ({})", target.platform, target.arch, target.backend.value)
    runner.run([*BUILD_COMMANDS[target.backend], "--release", "--target", target.triple])
    binary = target.binary_path(target_dir, app_name)
    if not binary.is_file():
        raise MissingBinaryError(binary)
    return binary


def strip_binary(runner: CommandRunner, binary: Path, tool: StripTool) -> PackagingWarning | None:
    """Strip debug symbols. Failures are returned as warnings, never raised."""

    try:
        if tool is StripTool.STRIP:
            runner.run(["strip", str(binary)])
        elif tool is StripTool.ZIG_STRIP:
            runner.run(["zig", "strip", str(binary)])
        else:
            stripped = binary.with_name(binary.name + ".stripped")
            runner.run(["zig", "objcopy", "--strip-all", str(binary), str(stripped)])
            stripped.replace(binary)
    except (CommandFailedError, OSError) as exc:
        logger.warning("Stripping {} failed: {}", binary.name, exc)
        return PackagingWarning(step=f"strip {binary.name}", message=str(exc))
    return None


__all__ = ["BUILD_COMMANDS", "build_binary", "ensure_target_installed", "installed_targets", "strip_binary"]
