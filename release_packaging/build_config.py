"""Packaging configuration dataclasses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class Backend(str, Enum):
    """How cargo is invoked for a target."""

    NATIVE = "native"
    XWIN = "xwin"
    ZIGBUILD = "zigbuild"


class StripTool(str, Enum):
    STRIP = "strip"
    ZIG_OBJCOPY = "zig-objcopy"
    ZIG_STRIP = "zig-strip"


class ArchiveFormat(str, Enum):
    ZIP = "zip"
    TAR_GZ = "tar.gz"


def artifact_filename(
    name: str,
    version: str,
    platform: str,
    arch: str,
    archive_format: ArchiveFormat,
    libc: Optional[str] = None,
) -> str:
    suffix = f"-{libc}" if libc else ""
    return f"{name}-{version}-{platform}-{arch}{suffix}.{archive_format.value}"


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    """A single compiler target and how to build, strip and ship it."""

    key: str
    triple: str
    platform: str
    arch: str
    backend: Backend
    strip_tool: StripTool
    archive_format: ArchiveFormat
    libc: Optional[str] = None
    binary_suffix: str = ""

    def binary_path(self, target_dir: Path, app_name: str) -> Path:
        return target_dir / self.triple / "release" / f"{app_name}{self.binary_suffix}"

    def artifact_name(self, name: str, version: str) -> str:
        return artifact_filename(name, version, self.platform, self.arch, self.archive_format, self.libc)


@dataclass(frozen=True, slots=True)
class UniversalTarget:
    """A fat binary merged from several single-architecture builds."""

    key: str
    platform: str
    arch: str
    sources: Tuple[str, ...]
    strip_tool: StripTool = StripTool.STRIP
    archive_format: ArchiveFormat = ArchiveFormat.ZIP

    def binary_path(self, target_dir: Path, app_name: str) -> Path:
        return target_dir / self.arch / app_name

    def artifact_name(self, name: str, version: str) -> str:
        return artifact_filename(name, version, self.platform, self.arch, self.archive_format)


@dataclass(frozen=True, slots=True)
class ToolRequirement:
    binary: str
    install_hint: str


TARGETS: Tuple[TargetDescriptor, ...] = (
    TargetDescriptor(
        key="macos-arm64",
        triple="aarch64-apple-darwin",
        platform="macos",
        arch="arm64",
        backend=Backend.NATIVE,
        strip_tool=StripTool.STRIP,
        archive_format=ArchiveFormat.ZIP,
    ),
    TargetDescriptor(
        key="macos-x86_64",
        triple="x86_64-apple-darwin",
        platform="macos",
        arch="x86_64",
        backend=Backend.NATIVE,
        strip_tool=StripTool.STRIP,
        archive_format=ArchiveFormat.ZIP,
    ),
    TargetDescriptor(
        key="windows-x86_64",
        triple="x86_64-pc-windows-msvc",
        platform="windows",
        arch="x86_64",
        backend=Backend.XWIN,
        strip_tool=StripTool.ZIG_OBJCOPY,
        archive_format=ArchiveFormat.ZIP,
        binary_suffix=".exe",
    ),
    TargetDescriptor(
        key="linux-x86_64-musl",
        triple="x86_64-unknown-linux-musl",
        platform="linux",
        arch="x86_64",
        backend=Backend.ZIGBUILD,
        strip_tool=StripTool.ZIG_STRIP,
        archive_format=ArchiveFormat.TAR_GZ,
        libc="musl",
    ),
    TargetDescriptor(
        key="linux-aarch64-musl",
        triple="aarch64-unknown-linux-musl",
        platform="linux",
        arch="aarch64",
        backend=Backend.ZIGBUILD,
        strip_tool=StripTool.ZIG_STRIP,
        archive_format=ArchiveFormat.TAR_GZ,
        libc="musl",
    ),
)

UNIVERSAL_MACOS = UniversalTarget(
    key="macos-universal2",
    platform="macos",
    arch="universal2",
    sources=("macos-arm64", "macos-x86_64"),
)

REQUIRED_TOOLS: Tuple[ToolRequirement, ...] = (
    ToolRequirement("cargo", "Install Rust (rustup)."),
    ToolRequirement("rustup", "Install Rust (rustup)."),
    ToolRequirement("strip", "Install Xcode Command Line Tools (xcode-select --install)."),
    ToolRequirement("lipo", "Install Xcode Command Line Tools."),
    ToolRequirement("zig", "brew install zig"),
    ToolRequirement("cargo-zigbuild", "cargo install cargo-zigbuild"),
    ToolRequirement("cargo-xwin", "cargo install cargo-xwin"),
)

OPTIONAL_FILES: Tuple[str, ...] = ("LICENSE", "README.md")


@dataclass(slots=True)
class BuildConfig:
    """Top-level configuration handed to every pipeline step."""

    project_root: Path
    manifest_path: Path
    dist_dir: Path
    target_dir: Path
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    optional_files: Tuple[str, ...] = OPTIONAL_FILES
    targets: Tuple[TargetDescriptor, ...] = TARGETS
    universal: Optional[UniversalTarget] = UNIVERSAL_MACOS
    required_tools: Tuple[ToolRequirement, ...] = field(default=REQUIRED_TOOLS)

    @classmethod
    def default(cls, project_root: Path) -> "BuildConfig":
        project_root = project_root.resolve()
        log_dir = os.getenv("RELEASE_LOG_DIR")
        return cls(
            project_root=project_root,
            manifest_path=project_root / "Cargo.toml",
            dist_dir=project_root / "dist",
            target_dir=project_root / "target",
            log_level=os.getenv("RELEASE_LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
        )

    def target(self, key: str) -> TargetDescriptor:
        for descriptor in self.targets:
            if descriptor.key == key:
                return descriptor
        raise KeyError(f"Unknown target {key}")


__all__ = [
    "ArchiveFormat",
    "Backend",
    "BuildConfig",
    "OPTIONAL_FILES",
    "REQUIRED_TOOLS",
    "StripTool",
    "TARGETS",
    "TargetDescriptor",
    "ToolRequirement",
    "UNIVERSAL_MACOS",
    "UniversalTarget",
    "artifact_filename",
]
