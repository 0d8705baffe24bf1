"""Audit logging package."""

from hubplanner.audit.logger import AuditLogger, configure_logging, create_correlation_id
from hubplanner.audit.sink import AuditSink, AuditSinkError, InMemoryAuditSink

__all__ = [
    "AuditLogger",
    "AuditSink",
    "AuditSinkError",
    "InMemoryAuditSink",
    "configure_logging",
    "create_correlation_id",
]
