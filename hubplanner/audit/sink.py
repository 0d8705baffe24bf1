"""
Audit Sink Interface

DESIGN DECISION: The audit logger writes to an abstract sink.
Persistence is not the planner's concern, so the only implementation
shipped here keeps events in memory (for tests and for a UI that shows
the current session's history). A real backend can implement the same
interface later without touching the planner.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from hubplanner.models.audit import AuditEvent, AuditEventType


class AuditSinkError(Exception):
    """Base exception for audit sink operations."""
    pass


class AuditSink(ABC):
    """Abstract interface for audit event storage."""

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Args:
            event: The event to record

        Returns:
            True if recorded successfully

        Raises:
            AuditSinkError: If the write fails
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one planner run).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class InMemoryAuditSink(AuditSink):
    """Keeps events in a list. Not shared between processes."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def events_of_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        return [e for e in self._events if e.event_type == event_type]
