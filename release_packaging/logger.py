"""Centralized logging configuration using Loguru."""

from __future__ import annotations

import pathlib
import sys

from loguru import logger


def setup_logging(
    *,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_directory: str | pathlib.Path | None = None,
    log_filename: str = "release_packaging.log",
) -> pathlib.Path | None:
    """Configure logging sinks for a release run.

    Parameters
    ----------
    console_level:
        Minimum log level for console output.
    file_level:
        Minimum log level for file output.
    log_directory:
        Where the JSON log file should be stored. No file sink is added when
        this is ``None``.
    log_filename:
        Name of the file that captures structured log output.

    Existing handlers are removed so that repeated calls do not duplicate
    entries. Returns the log file path when a file sink was added.
    """

    logger.remove()

    logger.add(
        sys.stdout,
        level=console_level.upper(),
        backtrace=True,
        diagnose=False,
        colorize=True,
    )

    if log_directory is None:
        logger.bind(console_level=console_level).debug("Logging configured")
        return None

    log_path = pathlib.Path(log_directory).expanduser().resolve()
    log_path.mkdir(parents=True, exist_ok=True)
    file_path = log_path / log_filename

    logger.add(
        file_path,
        level=file_level.upper(),
        backtrace=False,
        diagnose=False,
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        serialize=True,
    )

    logger.bind(
        console_level=console_level,
        file_level=file_level,
        log_directory=str(log_path),
        log_file=str(file_path),
    ).debug("Logging configured")
    return file_path


__all__ = ["setup_logging"]
