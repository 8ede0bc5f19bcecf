"""Unit tests for structured logging setup."""

import json

import pytest
import structlog

from credit_core.core.logging import setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_json_output(self, capsys):
        setup_logging(level="INFO", log_format="json")

        structlog.get_logger("credit_core.test").info("credit_score_calculated", score=720)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "credit_score_calculated"
        assert record["score"] == 720
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")

        logger = structlog.get_logger("credit_core.test")
        logger.info("application_submitted")
        logger.warning("credit_event_not_delivered")

        out = capsys.readouterr().out
        assert "application_submitted" not in out
        assert "credit_event_not_delivered" in out

    def test_console_output(self, capsys):
        setup_logging(level="DEBUG", log_format="console")

        structlog.get_logger("credit_core.test").debug("stage_history_reconstructed")

        assert "stage_history_reconstructed" in capsys.readouterr().out
