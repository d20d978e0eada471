"""
Budget Overspend Notifications

DESIGN DECISION: Delivery is behind a small channel interface.
The notifier decides WHEN to alert; the channel decides HOW:
- Streamlit shows a toast (see app/main.py)
- Tests use InMemoryAlertChannel

RULES:
1. Permission is requested once; without it nothing is sent
2. A category is alerted once per month while it stays over budget
3. Dropping back to or under the budget re-arms the alert
"""

from abc import ABC, abstractmethod
from typing import Optional

from spendify.audit import AuditLogger
from spendify.models.expense import Budgets, BudgetAlert, MonthlySummary
from spendify.queries import overspent_categories


class AlertChannelInterface(ABC):
    """Somewhere a local alert can be shown."""

    @abstractmethod
    def request_permission(self) -> bool:
        """
        Ask for permission to show alerts.

        Returns:
            True if alerts may be shown
        """
        pass

    @abstractmethod
    def send(self, alert: BudgetAlert) -> bool:
        """
        Show one alert.

        Returns:
            True if the alert was delivered
        """
        pass


class InMemoryAlertChannel(AlertChannelInterface):
    """Collects alerts in a list. Used in tests and headless runs."""

    def __init__(self, grant: bool = True):
        self._grant = grant
        self.permission_requests = 0
        self.sent: list[BudgetAlert] = []

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self._grant

    def send(self, alert: BudgetAlert) -> bool:
        self.sent.append(alert)
        return True


class BudgetNotifier:
    """Fires overspend alerts for the current month through a channel."""

    def __init__(
        self,
        channel: AlertChannelInterface,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        self._channel = channel
        self._audit_logger = audit_logger
        self._currency_symbol = currency_symbol
        self._permission: Optional[bool] = None
        self._alerted: set[tuple[str, int, int]] = set()

    @property
    def permission_granted(self) -> bool:
        return bool(self._permission)

    def request_permission_once(self) -> bool:
        """Ask the channel on first call only; later calls return the cached answer."""
        if self._permission is None:
            try:
                self._permission = bool(self._channel.request_permission())
            except Exception as e:
                self._permission = False
                if self._audit_logger:
                    self._audit_logger.log_error("notification_permission", str(e))
            if self._audit_logger:
                self._audit_logger.log_notification_permission(self._permission)
        return self._permission

    def check(self, budgets: Budgets, summary: MonthlySummary) -> list[BudgetAlert]:
        """
        Alert every category newly over its budget this month.

        Returns the alerts that were delivered.
        """
        over = overspent_categories(budgets, summary)
        still_over = {(status.category, summary.year, summary.month) for status in over}
        self._alerted &= still_over

        if not self.permission_granted:
            return []

        delivered: list[BudgetAlert] = []
        for status in over:
            alert = BudgetAlert.from_status(
                status,
                year=summary.year,
                month=summary.month,
                currency_symbol=self._currency_symbol,
            )
            if alert.dedupe_key in self._alerted:
                continue
            if not self._deliver(alert):
                continue

            self._alerted.add(alert.dedupe_key)
            delivered.append(alert)
            if self._audit_logger:
                self._audit_logger.log_budget_exceeded(
                    category=status.category,
                    limit=str(status.limit),
                    spent=str(status.spent),
                    month=summary.label,
                )
        return delivered

    def _deliver(self, alert: BudgetAlert) -> bool:
        try:
            return bool(self._channel.send(alert))
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    "notification_delivery",
                    str(e),
                    details={"category": alert.category},
                )
            return False
