"""Read the package name and version from the Cargo manifest."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .commands import CommandRunner
from .errors import MetadataError


_QUOTED_VALUE = re.compile(r'=\s*"([^"]+)"')


@dataclass(frozen=True, slots=True)
class PackageMetadata:
    name: str
    version: str


def read_package_metadata(manifest_path: Path, runner: CommandRunner) -> PackageMetadata:
    """Return the package name and version.

    ``cargo metadata`` is used when cargo is available. Otherwise the manifest
    text is scanned for the first ``name =`` and ``version =`` lines. Missing
    values come back as empty strings; callers are not stopped by them.
    """

    if runner.which("cargo"):
        metadata = _from_cargo_metadata(manifest_path, runner)
    else:
        logger.warning("cargo not installed, falling back to simple parsing of {}", manifest_path.name)
        metadata = _from_manifest_text(manifest_path)

    if not metadata.name or not metadata.version:
        logger.warning("Incomplete package metadata: name={!r} version={!r}", metadata.name, metadata.version)
    return metadata


def _from_cargo_metadata(manifest_path: Path, runner: CommandRunner) -> PackageMetadata:
    result = runner.run(
        [
            "cargo",
            "metadata",
            "--format-version",
            "1",
            "--no-deps",
            "--manifest-path",
            str(manifest_path),
        ],
        capture=True,
    )
    try:
        payload = json.loads(result.stdout or "{}")
        packages = payload.get("packages") or [{}]
        first = packages[0]
        name, version = first.get("name"), first.get("version")
    except (json.JSONDecodeError, AttributeError, IndexError, KeyError, TypeError) as exc:
        raise MetadataError(f"Unreadable cargo metadata output: {exc}") from exc
    return PackageMetadata(name=str(name or ""), version=str(version or ""))


def _from_manifest_text(manifest_path: Path) -> PackageMetadata:
    try:
        lines = manifest_path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        logger.warning("Manifest not found at {}", manifest_path)
        lines = []
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataError(f"Cannot read {manifest_path}: {exc}") from exc
    return PackageMetadata(
        name=_first_value(lines, "name"),
        version=_first_value(lines, "version"),
    )


def _first_value(lines: list[str], key: str) -> str:
    pattern = re.compile(rf"^\s*{key}\s*=")
    for line in lines:
        if pattern.match(line):
            match = _QUOTED_VALUE.search(line)
            return match.group(1) if match else ""
    return ""


__all__ = ["PackageMetadata", "read_package_metadata"]
