"""
Audit Models for Spendify

Every state change in the tracker is logged for audit purposes.
This provides:
1. Traceability of what the user did and when
2. Debugging information when stored data fails to load or save
3. A record of every overspend alert that was raised

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense lifecycle
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_REJECTED = "expense_rejected"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Export
    EXPORT_GENERATED = "export_generated"

    # Notifications
    NOTIFICATION_PERMISSION_REQUESTED = "notification_permission_requested"

    # Persistence
    DATA_LOADED = "data_loaded"
    DATA_LOAD_FAILED = "data_load_failed"
    DATA_SAVE_FAILED = "data_save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
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
        description="Type of entity (e.g., 'expense', 'budget', 'storage')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID or key of the entity this event relates to"
    )

    # Event details
    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

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
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, name, amount, category)
        event = AuditEventBuilder.data_save_failed("expenses", error)
    """

    @staticmethod
    def expense_added(
        expense_id: UUID,
        name: str,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {name} - {amount}",
            details={
                "name": name,
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: UUID,
        name: str,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense updated: {name} - {amount}",
            details={
                "name": name,
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense_id),
            description="Expense deleted",
            is_user_action=True,
        )

    @staticmethod
    def expense_rejected(reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            description="Expense form input rejected",
            details={
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_set(category: str, limit: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=category,
            description=f"Budget set: {category} - {limit}",
            details={
                "category": category,
                "limit": limit,
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_exceeded(
        category: str,
        limit: str,
        spent: str,
        month: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_id=category,
            description=f"Budget exceeded for {category} in {month}",
            details={
                "limit": limit,
                "spent": spent,
                "month": month,
            },
        )

    @staticmethod
    def export_generated(record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_GENERATED,
            entity_type="export",
            description=f"CSV export generated with {record_count} records",
            details={
                "record_count": record_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def notification_permission_requested(granted: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_PERMISSION_REQUESTED,
            entity_type="notifications",
            description=(
                "Notification permission granted"
                if granted
                else "Notification permission denied"
            ),
            details={
                "granted": granted,
            },
        )

    @staticmethod
    def data_loaded(key: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="storage",
            entity_id=key,
            description=f"Loaded {record_count} records from '{key}'",
            details={
                "record_count": record_count,
            },
        )

    @staticmethod
    def data_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Stored data under '{key}' could not be read, using empty default",
            error_message=error_message,
        )

    @staticmethod
    def data_save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_SAVE_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Data under '{key}' could not be saved, previous state kept",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
