"""Notification services package."""

from spendify.services.notifications.notifier import (
    AlertChannelInterface,
    BudgetNotifier,
    InMemoryAlertChannel,
)

__all__ = [
    "AlertChannelInterface",
    "BudgetNotifier",
    "InMemoryAlertChannel",
]
