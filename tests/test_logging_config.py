"""
Tests for logging configuration.
"""
import logging

import pytest


@pytest.fixture(autouse=True)
def restore_logger_levels():
    """setup_logging changes logger levels; put them back for later tests."""
    from thali_club.logging_config import QUIET_LOGGERS
    loggers = [logging.getLogger(name) for name in ("thali_club",) + QUIET_LOGGERS]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from thali_club.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("thali_club")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from thali_club.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("thali_club")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from thali_club.logging_config import setup_logging
        setup_logging(level="ERROR")

        logger = logging.getLogger("thali_club")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from thali_club.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("thali_club")
        assert logger.level == logging.INFO

    def test_third_party_noise_reduced(self):
        from thali_club.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("slowapi").level == logging.WARNING

    def test_debug_lets_library_logs_through(self):
        from thali_club.logging_config import QUIET_LOGGERS, setup_logging
        setup_logging(level="WARNING")
        setup_logging(level="DEBUG")

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.NOTSET

    def test_level_names_are_normalized(self, monkeypatch):
        from thali_club.logging_config import resolve_level
        monkeypatch.setenv("LOG_LEVEL", " debug ")

        assert resolve_level() == "DEBUG"
        assert resolve_level("Warning") == "WARNING"
        assert resolve_level("verbose") == "INFO"

    def test_lines_name_the_thread(self):
        """Snapshot writes log from their own thread; the format shows which."""
        from thali_club.logging_config import DATE_FORMAT, LOG_FORMAT
        record = logging.LogRecord("thali_club.catering.persistence", logging.WARNING, __file__, 1,
                                   "Snapshot save failed", None, None)
        record.threadName = "snapshot-writer"

        line = logging.Formatter(LOG_FORMAT, DATE_FORMAT).format(record)

        assert " - snapshot-writer - thali_club.catering.persistence - WARNING - Snapshot save failed" in line


class TestNoSensitiveDataInLogs:
    """Customer details are only logged at DEBUG level."""

    def test_debug_logs_not_shown_at_info_level(self, caplog):
        """Test that DEBUG logs don't appear when level is INFO."""
        from thali_club.logging_config import setup_logging
        setup_logging(level="INFO")

        with caplog.at_level(logging.INFO):
            logger = logging.getLogger("thali_club.test")
            logger.debug("This should not appear")
            logger.info("This should appear")

            messages = [r.message for r in caplog.records]
            assert "This should not appear" not in messages
            assert "This should appear" in messages

    def test_customer_email_not_logged_at_info(self, client, caplog):
        """Opening an order and updating the contact form logs no contact details at INFO."""
        with caplog.at_level(logging.INFO, logger="thali_club"):
            client.post("/catering/order", json={"package": "Vegetarian"})
            client.patch(
                "/catering/order/contact",
                json={"full_name": "Priya Sharma", "email": "priya.sharma@gmail.com"},
            )

        for record in caplog.records:
            if record.levelno >= logging.INFO:
                assert "priya.sharma@gmail.com" not in record.getMessage()
                assert "Priya Sharma" not in record.getMessage()
