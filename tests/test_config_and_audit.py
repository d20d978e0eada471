"""Tests for settings and the audit logger."""

import pytest
from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from spendify.audit import AuditLogger
from spendify.config import AppSettings, StorageSettings, validate_all_settings
from spendify.models.audit import AuditEventBuilder, AuditEventType


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_storage_defaults(self, monkeypatch):
        """Test default keys and data directory."""
        monkeypatch.delenv("SPENDIFY_STORAGE_DATA_DIR", raising=False)
        settings = StorageSettings()
        assert settings.expenses_key == "expenses"
        assert settings.budgets_key == "budgets"
        assert settings.data_dir == Path.home() / ".spendify"

    def test_storage_from_environment(self, monkeypatch, tmp_path):
        """Test env prefix overrides."""
        monkeypatch.setenv("SPENDIFY_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SPENDIFY_STORAGE_WRITE_ATTEMPTS", "5")
        settings = StorageSettings()
        assert settings.data_dir == tmp_path
        assert settings.write_attempts == 5

    def test_write_attempts_bounds(self, monkeypatch):
        """Test out-of-range retry counts are rejected."""
        monkeypatch.setenv("SPENDIFY_STORAGE_WRITE_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_app_settings(self, monkeypatch):
        """Test app settings from the environment."""
        monkeypatch.setenv("CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("NOTIFICATIONS_ENABLED", "false")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = AppSettings()
        assert settings.currency_symbol == "€"
        assert settings.notifications_enabled is False
        assert settings.log_level == "DEBUG"

    def test_validate_all_settings(self, monkeypatch):
        """Test the status dict reports a broken section."""
        monkeypatch.setenv("CHART_HEIGHT", "5")
        status = validate_all_settings()
        assert status["storage"] is True
        assert status["app"] is False
        assert "app_error" in status


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_keeps_history(self):
        """Test a logged event lands in the history."""
        logger = AuditLogger()
        logger.log_expense_deleted(uuid4())
        assert logger.recent_events()[0].event_type == AuditEventType.EXPENSE_DELETED

    def test_long_text_is_logged(self):
        """Test user text of any length makes a valid event."""
        logger = AuditLogger()
        logger.log_budget_set("Food", "9" * 1000)
        assert logger.recent_events()[0].event_type == AuditEventType.BUDGET_SET

    def test_builder_failure_does_not_raise(self, monkeypatch):
        """Test a failing event builder is swallowed by the helpers."""
        def broken(*args):
            raise ValueError("bad event")

        monkeypatch.setattr(AuditEventBuilder, "budget_set", staticmethod(broken))
        logger = AuditLogger()
        logger.log_budget_set("Food", "10")
        assert logger.recent_events() == []

    def test_recent_events_newest_first_and_bounded(self):
        """Test history order and size limit."""
        logger = AuditLogger(history_size=3)
        for index in range(5):
            logger.log_export_generated(index)
        events = logger.recent_events()
        assert len(events) == 3
        assert [e.details["record_count"] for e in events] == [4, 3, 2]
        assert len(logger.recent_events(limit=1)) == 1
