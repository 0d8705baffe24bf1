"""
Audit Logger

DESIGN DECISION: Every planner run is logged.
This provides:
1. Traceability from configuration to plan
2. Visibility of the engine's silent degradations
3. Debugging capability

The audit logger:
- Gracefully handles sink failures (a broken sink never breaks planning)
- Supports correlation IDs to trace related events
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from hubplanner.audit.sink import AuditSink
from hubplanner.models.audit import AuditEvent, AuditEventBuilder, decimal_str


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

ROOT_LOGGER_NAME = "hubplanner"


def configure_logging(level: str) -> None:
    """
    Apply a stdlib log level to every hubplanner logger.

    filter_by_level above drops events below the stdlib logger's
    effective level, so without this only WARNING and up are emitted.
    """
    logging.basicConfig(format="%(message)s")
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional AuditSink (for the session history)
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Sink for recorded events.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("hubplanner.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Records to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_configuration_validated(
        self,
        warnings: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log the outcome of the configuration checks."""
        event = AuditEventBuilder.configuration_validated(
            warning_count=len(warnings),
            warnings=warnings,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_configuration_suggested(
        self,
        expense_count: int,
        pot_count: int,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.configuration_suggested(
            expense_count=expense_count,
            pot_count=pot_count,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_plan_generated(
        self,
        run_id: UUID,
        start_date: date,
        months: int,
        days: int,
        final_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log a completed engine run."""
        event = AuditEventBuilder.plan_generated(
            run_id=run_id,
            start_date=start_date,
            months=months,
            days=days,
            final_balance=decimal_str(final_balance),
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_danger_days(
        self,
        run_id: UUID,
        count: int,
        first_date: date,
        lowest_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.danger_days_detected(
            run_id=run_id,
            count=count,
            first_date=first_date,
            lowest_balance=decimal_str(lowest_balance),
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_leftover_unallocated(
        self,
        run_id: UUID,
        day: date,
        amount: Decimal,
        pot_type: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.leftover_unallocated(
            run_id=run_id,
            day=day,
            amount=decimal_str(amount),
            pot_type=pot_type,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_weekly_plans_generated(
        self,
        run_id: UUID,
        month_key: str,
        week_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.weekly_plans_generated(
            run_id=run_id,
            month_key=month_key,
            week_count=week_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_plan_exported(
        self,
        run_id: UUID,
        path: str,
        row_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.plan_exported(
            run_id=run_id,
            path=path,
            row_count=row_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a planner run and pass it through
    every subsequent operation on that run.
    """
    return uuid4()
