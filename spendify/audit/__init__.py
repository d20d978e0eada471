"""Audit logging package."""

from spendify.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
