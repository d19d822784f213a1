"""
Unit tests for utils.py
"""

import logging
import tempfile
from pathlib import Path

import pytest

from sqldump.models import LiteralMode, OutputSettings
from sqldump.utils import print_dry_run_info, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Reset logging configuration around each test."""
        root_logger = logging.getLogger()
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        for handler in saved_handlers:
            root_logger.removeHandler(handler)
        root_logger.setLevel(logging.NOTSET)
        yield
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(saved_level)

    def test_default_log_level(self):
        setup_logging({})
        assert logging.getLogger().level == logging.INFO

    def test_custom_log_level(self):
        setup_logging({"level": "DEBUG"})
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_case_insensitive(self):
        setup_logging({"level": "warning"})
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_existing_configuration(self):
        """Test an already configured root logger is reconfigured."""
        previous = logging.NullHandler()
        logging.getLogger().addHandler(previous)
        logging.getLogger().setLevel(logging.ERROR)

        setup_logging({"level": "DEBUG"})

        assert logging.getLogger().level == logging.DEBUG
        assert previous not in logging.getLogger().handlers

    def test_log_to_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "nested" / "dump.log"
            setup_logging({"file": str(log_file)})

            logging.info("Test message")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert log_file.exists()
            assert "Test message" in log_file.read_text()
            for handler in logging.getLogger().handlers[:]:
                logging.getLogger().removeHandler(handler)
                handler.close()


class TestPrintDryRunInfo:
    """Tests for print_dry_run_info function."""

    def test_logs_each_database(self, caplog):
        caplog.set_level(logging.INFO)
        settings = OutputSettings(directory="/backups", literal_mode=LiteralMode.ESCAPED)

        print_dry_run_info(
            [
                {"name": "shop", "instance": "primary"},
                {"name": "analytics", "instance": "replica"},
            ],
            settings
        )

        assert "Would dump database: shop from instance: primary" in caplog.text
        assert "Would dump database: analytics from instance: replica" in caplog.text
        assert str(Path("/backups") / "shop") in caplog.text
        assert "escaped" in caplog.text

    def test_no_databases(self, caplog):
        caplog.set_level(logging.INFO)
        print_dry_run_info([], OutputSettings())
        assert caplog.text == ""
