"""
Audit Logger

DESIGN DECISION: Every state change in the tracker is logged.
This provides:
1. Traceability of user actions
2. Debugging capability when stored data is malformed
3. A short in-session history the UI can show

The audit logger:
- Writes structured JSON logs through structlog
- Keeps the most recent events in memory
- Never raises (a logging failure must not break an expense action)
"""

import logging
import sys
from collections import deque
from typing import Callable, Optional
from uuid import UUID

import structlog

from spendify.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for local JSON logs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
        force=True,
    )
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


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events to:
    1. Structured local log (for debugging)
    2. An in-memory ring of recent events (for the UI)
    """

    def __init__(self, history_size: int = 100):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("spendify.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written, False if logging itself failed.
        """
        self._history.append(event)

        try:
            log_dict = event.to_log_dict()
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            print(f"WARNING: Failed to write audit event {event.event_id}: {e}", file=sys.stderr)
            return False

        return True

    def _emit(self, build: Callable[..., AuditEvent], *args) -> bool:
        """Build an event and log it. A builder failure is reported, not raised."""
        try:
            event = build(*args)
        except Exception as e:
            print(f"WARNING: Failed to build audit event {build.__name__}: {e}", file=sys.stderr)
            return False
        return self.log(event)

    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(self._history)
        events.reverse()
        return events[:limit]

    def log_expense_added(
        self,
        expense_id: UUID,
        name: str,
        amount: str,
        category: str,
    ) -> None:
        """Log a new expense."""
        self._emit(AuditEventBuilder.expense_added, expense_id, name, amount, category)

    def log_expense_updated(
        self,
        expense_id: UUID,
        name: str,
        amount: str,
        category: str,
    ) -> None:
        """Log an edited expense."""
        self._emit(AuditEventBuilder.expense_updated, expense_id, name, amount, category)

    def log_expense_deleted(self, expense_id: UUID) -> None:
        """Log a deleted expense."""
        self._emit(AuditEventBuilder.expense_deleted, expense_id)

    def log_expense_rejected(self, reason: str) -> None:
        """Log form input that did not produce an expense."""
        self._emit(AuditEventBuilder.expense_rejected, reason)

    def log_budget_set(self, category: str, limit: str) -> None:
        """Log a budget being created or overwritten."""
        self._emit(AuditEventBuilder.budget_set, category, limit)

    def log_budget_exceeded(
        self,
        category: str,
        limit: str,
        spent: str,
        month: str,
    ) -> None:
        """Log an overspend alert."""
        self._emit(AuditEventBuilder.budget_exceeded, category, limit, spent, month)

    def log_export_generated(self, record_count: int) -> None:
        """Log a CSV export."""
        self._emit(AuditEventBuilder.export_generated, record_count)

    def log_notification_permission(self, granted: bool) -> None:
        """Log the answer to the notification permission request."""
        self._emit(AuditEventBuilder.notification_permission_requested, granted)

    def log_data_loaded(self, key: str, record_count: int) -> None:
        """Log a successful blob load."""
        self._emit(AuditEventBuilder.data_loaded, key, record_count)

    def log_data_load_failed(self, key: str, error_message: str) -> None:
        """Log a blob that could not be decoded."""
        self._emit(AuditEventBuilder.data_load_failed, key, error_message)

    def log_data_save_failed(self, key: str, error_message: str) -> None:
        """Log a blob that could not be written."""
        self._emit(AuditEventBuilder.data_save_failed, key, error_message)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self._emit(AuditEventBuilder.system_error, error_type, error_message, details)
