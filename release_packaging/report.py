"""Summary of produced artifacts."""

from __future__ import annotations

from pathlib import Path

from loguru import logger


def list_artifacts(dist_dir: Path) -> list[str]:
    if not dist_dir.is_dir():
        return []
    return sorted(entry.name for entry in dist_dir.iterdir())


def report_summary(dist_dir: Path) -> list[str]:
    names = list_artifacts(dist_dir)
    logger.success("Build complete. Artifacts:")
    for name in names:
        logger.info("  {}", name)
    return names


__all__ = ["list_artifacts", "report_summary"]
