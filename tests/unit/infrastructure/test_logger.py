"""Tests for structured logging setup."""

import logging

from stdsched.config.schemas import LoggingConfig
from stdsched.infrastructure.logging.logger import get_logger, setup_logging


class TestLogging:
    """Test get_logger and setup_logging."""

    def test_get_logger_routes_through_stdlib(self, caplog):
        logger = get_logger("stdsched.test")

        with caplog.at_level(logging.INFO):
            logger.info("hello from structlog", answer=42)

        record = next(r for r in caplog.records if r.getMessage() == "hello from structlog")
        assert record.name == "stdsched.test"
        assert record.answer == 42

    def test_setup_logging_stdout(self, restore_root_logger):
        setup_logging(LoggingConfig(level="DEBUG", destination="stdout"))

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)

    def test_setup_logging_file_and_stdout(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "sched.log"

        setup_logging(LoggingConfig(level="INFO", destination="both", file_path=str(log_file)))
        get_logger("stdsched.test").warning("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert len(restore_root_logger.handlers) == 2
        assert "written to file" in log_file.read_text()
