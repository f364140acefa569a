"""Audit logging subsystem for bibresolve.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: one structured event
"""

from bibresolve.audit.helpers import generate_run_id, get_package_version
from bibresolve.audit.logger import RESOLVE_STAGE, AuditLogger
from bibresolve.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "RESOLVE_STAGE",
    "generate_run_id",
    "get_package_version",
]
