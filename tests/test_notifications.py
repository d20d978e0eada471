"""Tests for the budget notifier."""

from decimal import Decimal

from spendify.models.audit import AuditEventType
from spendify.models.expense import BudgetAlert, MonthlySummary
from spendify.services.notifications import (
    AlertChannelInterface,
    BudgetNotifier,
    InMemoryAlertChannel,
)


def summary(**totals) -> MonthlySummary:
    return MonthlySummary(
        year=2024,
        month=6,
        totals={category: Decimal(amount) for category, amount in totals.items()},
    )


class BrokenChannel(AlertChannelInterface):
    """Channel that fails on every call."""

    def request_permission(self) -> bool:
        raise RuntimeError("no notification service")

    def send(self, alert: BudgetAlert) -> bool:
        raise RuntimeError("no notification service")


class TestBudgetNotifier:
    """Tests for BudgetNotifier."""

    def test_permission_asked_once(self):
        """Test the channel is only asked the first time."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        assert notifier.request_permission_once() is True
        assert notifier.request_permission_once() is True
        assert channel.permission_requests == 1

    def test_nothing_sent_before_permission(self):
        """Test that alerts need permission to have been granted."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        assert notifier.check({"Food": Decimal("10")}, summary(Food="20")) == []
        assert channel.sent == []

    def test_alert_for_each_overspent_category(self):
        """Test one alert per category over budget."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        notifier.request_permission_once()
        budgets = {"Food": Decimal("10"), "Travel": Decimal("10"), "Bills": Decimal("100")}
        alerts = notifier.check(budgets, summary(Food="20", Travel="10.01", Bills="50"))
        assert [a.category for a in alerts] == ["Food", "Travel"]
        assert channel.sent == alerts

    def test_no_repeat_while_still_over(self):
        """Test the same month and category is not alerted twice."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        notifier.request_permission_once()
        budgets = {"Food": Decimal("10")}
        notifier.check(budgets, summary(Food="20"))
        assert notifier.check(budgets, summary(Food="30")) == []
        assert len(channel.sent) == 1

    def test_rearms_after_dropping_under(self):
        """Test a category alerts again after going back under budget."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        notifier.request_permission_once()
        budgets = {"Food": Decimal("10")}
        notifier.check(budgets, summary(Food="20"))
        notifier.check(budgets, summary(Food="5"))
        notifier.check(budgets, summary(Food="15"))
        assert len(channel.sent) == 2

    def test_new_month_alerts_again(self):
        """Test the dedupe is per month."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel)
        notifier.request_permission_once()
        budgets = {"Food": Decimal("10")}
        notifier.check(budgets, summary(Food="20"))
        july = MonthlySummary(year=2024, month=7, totals={"Food": Decimal("20")})
        assert [a.month for a in notifier.check(budgets, july)] == [7]

    def test_currency_symbol_in_body(self):
        """Test the configured currency symbol is used."""
        channel = InMemoryAlertChannel()
        notifier = BudgetNotifier(channel, currency_symbol="£")
        notifier.request_permission_once()
        alert = notifier.check({"Food": Decimal("10")}, summary(Food="12"))[0]
        assert "£12.00" in alert.body

    def test_broken_channel_never_raises(self, audit_logger):
        """Test channel failures are logged and swallowed."""
        notifier = BudgetNotifier(BrokenChannel(), audit_logger=audit_logger)
        assert notifier.request_permission_once() is False
        assert notifier.check({"Food": Decimal("1")}, summary(Food="2")) == []
        types = [e.event_type for e in audit_logger.recent_events()]
        assert AuditEventType.SYSTEM_ERROR in types
        assert AuditEventType.NOTIFICATION_PERMISSION_REQUESTED in types

    def test_alerts_are_audited(self, audit_logger):
        """Test a delivered alert leaves a budget_exceeded event."""
        notifier = BudgetNotifier(InMemoryAlertChannel(), audit_logger=audit_logger)
        notifier.request_permission_once()
        notifier.check({"Food": Decimal("1")}, summary(Food="2"))
        event = audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.BUDGET_EXCEEDED
        assert event.details["month"] == "June 2024"
