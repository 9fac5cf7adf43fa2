"""Release packaging utilities for multi-target cargo builds."""

from .build import ReleasePipeline, ReleaseReport, build_release
from .build_config import BuildConfig, TargetDescriptor, UniversalTarget

__all__ = [
    "BuildConfig",
    "ReleasePipeline",
    "ReleaseReport",
    "TargetDescriptor",
    "UniversalTarget",
    "build_release",
]
