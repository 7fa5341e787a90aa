"""Build orchestration.

This package provides the main entry point for building the static site,
including configuration and result types.
"""

from waypoint.build.config import BuildConfig, BuildResult
from waypoint.build.runner import run_build

__all__ = [
    "BuildConfig",
    "BuildResult",
    "run_build",
]
