"""Tests for structlog configuration."""

import json
import logging

from mammoth_mcp.logging_config import configure_logging, get_logger


def test_level_name_is_accepted():
    try:
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging()
    assert logging.getLogger().level == logging.INFO


def test_events_render_as_json(capsys):
    configure_logging()
    get_logger("mammoth_mcp.test").info("conversion_started", tool="extract_raw_text")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "conversion_started"
    assert record["tool"] == "extract_raw_text"
    assert record["level"] == "info"
    assert record["logger"] == "mammoth_mcp.test"
    assert "timestamp" in record
