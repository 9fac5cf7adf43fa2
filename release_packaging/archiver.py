"""Stage release files and compress them into distributable archives."""

from __future__ import annotations

import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable

from loguru import logger

from .build_config import ArchiveFormat
from .errors import OutputError


def stage_files(binary: Path, extras: Iterable[Path], staging_dir: Path) -> list[Path]:
    """Copy the binary and any existing extras flat into ``staging_dir``."""

    staged = [Path(shutil.copy2(binary, staging_dir / binary.name))]
    for extra in extras:
        if extra.is_file():
            staged.append(Path(shutil.copy2(extra, staging_dir / extra.name)))
        else:
            logger.debug("Skipping absent {}", extra.name)
    return staged


def create_archive(
    binary: Path,
    output: Path,
    archive_format: ArchiveFormat,
    extras: Iterable[Path] = (),
) -> Path:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="release-stage-") as tmp:
            staged = stage_files(binary, extras, Path(tmp))
            if archive_format is ArchiveFormat.ZIP:
                _write_zip(staged, output)
            else:
                _write_tar_gz(staged, output)
    except (OSError, ValueError, tarfile.TarError, zipfile.BadZipFile) as exc:
        raise OutputError(output, str(exc)) from exc
    logger.info("Wrote {}", output.name)
    return output


def _write_zip(files: list[Path], output: Path) -> None:
    with zipfile.ZipFile(
        output, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9, strict_timestamps=False
    ) as archive:
        for path in files:
            archive.write(path, arcname=path.name)


def _write_tar_gz(files: list[Path], output: Path) -> None:
    with tarfile.open(output, "w:gz") as archive:
        for path in files:
            archive.add(path, arcname=path.name)


__all__ = ["create_archive", "stage_files"]
