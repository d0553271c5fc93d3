"""
Tests for logging setup and persisted error records.
"""

import logging

import pytest

from subs_api.core.exceptions import PersistenceError
from subs_api.models.error_log import ErrorLog
from subs_api.services.error_logging import (
    ErrorLogger,
    configure_logging,
    sanitize_data,
    truncate_string,
)


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestSanitize:
    """Test sanitize_data and truncate_string."""

    def test_redacts_sensitive_keys(self):
        data = {
            "operation": "create subscription",
            "DB_PASSWORD": "hunter2",
            "nested": {"api_key": "abc", "items": [{"token": "t"}, {"ok": 1}]},
        }

        assert sanitize_data(data) == {
            "operation": "create subscription",
            "DB_PASSWORD": "[REDACTED]",
            "nested": {"api_key": "[REDACTED]", "items": [{"token": "[REDACTED]"}, {"ok": 1}]},
        }

    def test_scalars_pass_through(self):
        assert sanitize_data(42) == 42

    def test_truncate(self):
        assert truncate_string("short", 10) == "short"
        assert truncate_string("x" * 20, 10).startswith("x" * 10 + "... [TRUNCATED, total 20 chars]")


class TestErrorLogger:
    """Test ErrorLogger.log_error."""

    def _raise_persistence_error(self):
        try:
            try:
                raise RuntimeError("connection refused")
            except RuntimeError as e:
                raise PersistenceError("create subscription") from e
        except PersistenceError as e:
            return e

    def test_without_database(self):
        error_logger = ErrorLogger()

        assert error_logger.log_error(self._raise_persistence_error()) is None

    def test_persists_record(self, database):
        error_logger = ErrorLogger()
        error_logger.set_db_session_factory(database.session_factory)

        error_id = error_logger.log_error(
            self._raise_persistence_error(),
            context={"password": "hunter2", "subscription": "x"},
        )

        assert error_id is not None
        with database.session() as db:
            record = db.get(ErrorLog, error_id)
            assert record.error_type == "PersistenceError"
            assert record.operation == "create subscription"
            assert record.severity == "error"
            assert record.message == "create subscription failed"
            assert "connection refused" in record.stack_trace
            assert record.context_data == {"password": "[REDACTED]", "subscription": "x"}

    def test_save_to_db_disabled(self, database):
        error_logger = ErrorLogger()
        error_logger.set_db_session_factory(database.session_factory)

        assert error_logger.log_error(ValueError("x"), save_to_db=False) is None

    def test_emits_log_record(self, caplog):
        with caplog.at_level(logging.WARNING, logger="error_logging"):
            ErrorLogger().log_error(ValueError("bad thing"), severity="warning")

        assert "ValueError: bad thing" in caplog.text


class TestConfigureLogging:
    """Test configure_logging."""

    def test_console_only(self, restore_root_logger):
        assert configure_logging("WARNING") is False
        assert restore_root_logger.level == logging.WARNING

    def test_rotating_files(self, restore_root_logger, tmp_path):
        log_dir = tmp_path / "logs"

        assert configure_logging("INFO", str(log_dir)) is True
        assert (log_dir / "errors.log").exists()
        assert (log_dir / "app_detailed.log").exists()

    def test_idempotent(self, restore_root_logger, tmp_path):
        configure_logging("INFO", str(tmp_path))
        count = len(restore_root_logger.handlers)

        configure_logging("INFO", str(tmp_path))

        assert len(restore_root_logger.handlers) == count

    def test_unwritable_directory(self, restore_root_logger, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        assert configure_logging("INFO", str(blocker / "logs")) is False
