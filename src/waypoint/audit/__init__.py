"""Audit logging subsystem for waypoint builds.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent / ArtifactInfo: event and artifact records
"""

from waypoint.audit.helpers import generate_run_id, get_dependency_versions, get_environment_info
from waypoint.audit.logger import LOG_LEVELS, AuditLogger
from waypoint.audit.models import ArtifactInfo, LogEvent

__all__ = [
    "AuditLogger",
    "ArtifactInfo",
    "LOG_LEVELS",
    "LogEvent",
    "generate_run_id",
    "get_dependency_versions",
    "get_environment_info",
]
