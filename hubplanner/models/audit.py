"""
Audit Models for the Financial Hub Planner

Every plan run leaves an audit trail. This provides:
1. Traceability of which configuration produced which plan
2. A visible record of the engine's silent degradations
   (danger days, leftover with no destination pot)
3. Debugging information when a forecast looks wrong

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of a planner run has its own event type.
    """
    # Configuration
    CONFIGURATION_VALIDATED = "configuration_validated"
    CONFIGURATION_SUGGESTED = "configuration_suggested"

    # Projection
    PLAN_GENERATED = "plan_generated"
    DANGER_DAYS_DETECTED = "danger_days_detected"
    LEFTOVER_UNALLOCATED = "leftover_unallocated"
    WEEKLY_PLANS_GENERATED = "weekly_plans_generated"

    # Export
    PLAN_EXPORTED = "plan_exported"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'plan', 'configuration', 'export')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events of one run)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.plan_generated(run_id, start, 12, 365, "1234.00", cid)
        event = AuditEventBuilder.leftover_unallocated(run_id, day, "40.00", "buffer", cid)
    """

    @staticmethod
    def configuration_validated(
        warning_count: int,
        warnings: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFIGURATION_VALIDATED,
            severity=AuditSeverity.WARNING if warning_count else AuditSeverity.INFO,
            entity_type="configuration",
            correlation_id=correlation_id,
            description=f"Configuration checked with {warning_count} warnings",
            details={
                "warning_count": warning_count,
                "warnings": warnings,
            },
        )

    @staticmethod
    def configuration_suggested(
        expense_count: int,
        pot_count: int,
        transaction_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFIGURATION_SUGGESTED,
            entity_type="configuration",
            correlation_id=correlation_id,
            description=(
                f"Configuration suggested from {transaction_count} transactions"
            ),
            details={
                "expense_count": expense_count,
                "pot_count": pot_count,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def plan_generated(
        run_id: UUID,
        start_date: date,
        months: int,
        days: int,
        final_balance: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PLAN_GENERATED,
            entity_type="plan",
            entity_id=run_id,
            correlation_id=correlation_id,
            description=f"Plan generated: {months} months from {start_date.isoformat()}",
            details={
                "start_date": start_date.isoformat(),
                "months": months,
                "days": days,
                "final_balance": final_balance,
            },
        )

    @staticmethod
    def danger_days_detected(
        run_id: UUID,
        count: int,
        first_date: date,
        lowest_balance: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DANGER_DAYS_DETECTED,
            severity=AuditSeverity.WARNING,
            entity_type="plan",
            entity_id=run_id,
            correlation_id=correlation_id,
            description=f"{count} days below the danger threshold, first on {first_date.isoformat()}",
            details={
                "count": count,
                "first_date": first_date.isoformat(),
                "lowest_balance": lowest_balance,
            },
        )

    @staticmethod
    def leftover_unallocated(
        run_id: UUID,
        day: date,
        amount: str,
        pot_type: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEFTOVER_UNALLOCATED,
            severity=AuditSeverity.WARNING,
            entity_type="plan",
            entity_id=run_id,
            correlation_id=correlation_id,
            description=f"Weekly leftover of {amount} had no '{pot_type}' pot",
            details={
                "date": day.isoformat(),
                "amount": amount,
                "pot_type": pot_type,
            },
        )

    @staticmethod
    def weekly_plans_generated(
        run_id: UUID,
        month_key: str,
        week_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEEKLY_PLANS_GENERATED,
            entity_type="plan",
            entity_id=run_id,
            correlation_id=correlation_id,
            description=f"{week_count} weekly plans for {month_key}",
            details={
                "month": month_key,
                "week_count": week_count,
            },
        )

    @staticmethod
    def plan_exported(
        run_id: UUID,
        path: str,
        row_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PLAN_EXPORTED,
            entity_type="export",
            entity_id=run_id,
            correlation_id=correlation_id,
            description=f"Plan exported: {row_count} rows",
            details={
                "path": path,
                "row_count": row_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )


def decimal_str(value: Decimal) -> str:
    """Render an amount for audit details (JSON-safe)."""
    return f"{value:.2f}"
