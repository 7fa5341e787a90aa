"""Helper utilities for audit logging.

Run ID generation and environment information. For timestamp and hashing
utilities, see waypoint.utils.
"""

import importlib.metadata
import platform
import secrets
import sys
from datetime import UTC, datetime
from typing import Any

__all__ = [
    "AUDITED_DEPENDENCIES",
    "generate_run_id",
    "get_package_version",
    "get_python_version",
    "get_platform_info",
    "get_dependency_versions",
    "get_environment_info",
]

AUDITED_DEPENDENCIES = ["click", "jsonschema", "jinja2", "PyYAML"]


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    timestamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
    suffix = secrets.token_hex(4)
    return f"{timestamp}__{suffix}"


def get_package_version() -> str:
    """Get the installed waypoint version, or "unknown"."""
    try:
        return importlib.metadata.version("waypoint")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_python_version() -> str:
    """Get Python version string (e.g., "3.12.3")."""
    return sys.version.split()[0]


def get_platform_info() -> str:
    """Get platform information (e.g., "Linux-6.8.0-x86_64")."""
    return f"{platform.system()}-{platform.release()}-{platform.machine()}"


def get_dependency_versions(packages: list[str] | None = None) -> dict[str, str]:
    """Get versions of specified packages.

    Parameters
    ----------
    packages : list[str] | None, optional
        Distribution names to query, defaults to the runtime dependencies.

    Returns
    -------
    dict[str, str]
        Mapping of package name to version.
    """
    versions: dict[str, str] = {}
    for package in packages or AUDITED_DEPENDENCIES:
        try:
            versions[package] = importlib.metadata.version(package)
        except importlib.metadata.PackageNotFoundError:
            versions[package] = "unknown"
    return versions


def get_environment_info() -> dict[str, Any]:
    """Snapshot of the build environment recorded with run_started."""
    return {
        "waypoint_version": get_package_version(),
        "python_version": get_python_version(),
        "platform": get_platform_info(),
        "dependencies": get_dependency_versions(),
    }
