"""Command-line entry point that builds every release archive."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from .build import build_release
from .build_config import BuildConfig
from .logger import setup_logging


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build and package release archives for every supported target",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    parse_args(argv)
    project_root = Path(os.getenv("RELEASE_PROJECT_ROOT") or Path.cwd())
    load_dotenv(project_root / ".env", override=False)

    config = BuildConfig.default(project_root)
    setup_logging(console_level=config.log_level, log_directory=config.log_dir)
    report = build_release(config)
    return report.exit_code


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
