"""Tests for project logging setup and structured events."""

import json
import logging

import pytest

from catalog.logging_config import (
    ROOT_LOGGER_NAME,
    ConsoleFormatter,
    get_logger,
    log_search_event,
    setup_logging,
)


@pytest.fixture
def jsonl_logging(tmp_path):
    """File-only logging into a temporary directory; handlers removed afterwards."""
    logger = setup_logging(level=logging.INFO, log_to_file=True, log_to_console=False, log_dir=tmp_path)
    yield tmp_path
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _entries(log_dir):
    files = list(log_dir.glob("search_*.jsonl"))
    assert len(files) == 1
    return [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]


class TestLogging:
    """Test logger naming and JSONL output."""

    def test_child_logger_names(self):
        """Test that module loggers hang off the project logger."""
        assert get_logger("engine.cache").name == f"{ROOT_LOGGER_NAME}.engine.cache"
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_search_event_written_as_jsonl(self, jsonl_logging):
        """Test that structured events carry their type and fields."""
        log_search_event("index_build_complete", {
            "message": "Index for 'atmos' built",
            "keyword": "atmos",
            "urls_searched": 5,
        }, logger_name="engine.indexer")

        entry = _entries(jsonl_logging)[-1]

        assert entry["event_type"] == "index_build_complete"
        assert entry["message"] == "Index for 'atmos' built"
        assert entry["keyword"] == "atmos"
        assert entry["urls_searched"] == 5
        assert entry["logger"] == f"{ROOT_LOGGER_NAME}.engine.indexer"

    def test_events_below_level_are_dropped(self, jsonl_logging):
        """Test that debug events are filtered at INFO level."""
        log_search_event("cache_hit", {"url": "https://a"}, level=logging.DEBUG)
        log_search_event("fetch_failed", {"url": "https://a"}, level=logging.WARNING)

        entries = _entries(jsonl_logging)

        assert [e["event_type"] for e in entries] == ["fetch_failed"]

    def test_exceptions_are_recorded(self, jsonl_logging):
        """Test that logger.exception output includes the traceback."""
        try:
            raise ValueError("bad page")
        except ValueError:
            get_logger("fetch").exception("Could not parse page")

        entry = _entries(jsonl_logging)[-1]

        assert entry["level"] == "ERROR"
        assert "ValueError: bad page" in entry["exception"]

    def test_plain_records_get_default_event_type(self, jsonl_logging):
        """Test that ordinary log calls are tagged as plain logs with their thread."""
        get_logger("engine.cache").info("Content cache cleared")

        entry = _entries(jsonl_logging)[-1]

        assert entry["event_type"] == "log"
        assert entry["thread"] == "MainThread"
        assert entry["message"] == "Content cache cleared"


class TestConsoleFormatter:
    """Test the console line layout."""

    def _record(self, **extra):
        record = logging.LogRecord(
            f"{ROOT_LOGGER_NAME}.engine.indexer", logging.WARNING, __file__, 1,
            "Index build for 'atmos' cancelled", (), None,
        )
        record.__dict__.update(extra)
        return record

    def test_event_type_tag(self):
        """Test that structured events show their type before the message."""
        line = ConsoleFormatter(use_color=False).format(self._record(event_type="index_build_complete"))

        assert "[index_build_complete] Index build for 'atmos' cancelled" in line
        assert "\033[" not in line

    def test_color_wraps_line(self):
        """Test that TTY output is wrapped in the level color."""
        line = ConsoleFormatter(use_color=True).format(self._record())

        assert line.startswith(ConsoleFormatter.COLORS["WARNING"])
        assert line.endswith(ConsoleFormatter.RESET)
        plain = line[len(ConsoleFormatter.COLORS["WARNING"]):-len(ConsoleFormatter.RESET)]
        assert "[" not in plain
