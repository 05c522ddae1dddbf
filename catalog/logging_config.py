"""Logging configuration for the catalog, engines and web app.

Console output is plain text tagged with the event type. Search and indexing
events also go to a daily JSONL file, one object per line, so a slow or
partial keyword scan can be traced after the fact.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, IO, Optional

from catalog.config import LOG_DIR

__all__ = [
    "setup_logging",
    "get_logger",
    "log_search_event",
    "ROOT_LOGGER_NAME",
]

ROOT_LOGGER_NAME = "theatrecraft"

# Plain log calls carry no event type of their own
DEFAULT_EVENT_TYPE = "log"


class SearchEventFileHandler(logging.Handler):
    """Writes each record as one JSON line to ``<prefix>_<YYYYMMDD>.jsonl``.

    Entries carry the event type, the emitting thread and any event fields
    at the top level.
    """

    def __init__(self, log_dir: Path, prefix: str = "search"):
        super().__init__()
        self.log_dir = log_dir
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix
        self._day: Optional[str] = None
        self._stream: Optional[IO[str]] = None

    def _stream_for_today(self) -> IO[str]:
        day = datetime.now().strftime("%Y%m%d")
        if day != self._day or self._stream is None:
            if self._stream is not None:
                self._stream.close()
            self._stream = open(self.log_dir / f"{self.prefix}_{day}.jsonl", "a", encoding="utf-8")
            self._day = day
        return self._stream

    def _entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event_type": getattr(record, "event_type", DEFAULT_EVENT_TYPE),
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_data", {}))
        if record.exc_info:
            entry["exception"] = logging.Formatter().formatException(record.exc_info)
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = self._stream_for_today()
            stream.write(json.dumps(self._entry(record), ensure_ascii=False, default=str) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if self._stream is not None:
                self._stream.close()
                self._stream = None
        finally:
            self.release()
        super().close()


class ConsoleFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger [event_type] message``, colored on a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s %(event_tag)s%(message)s", datefmt="%H:%M:%S")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        event_type = getattr(record, "event_type", None)
        record.event_tag = f"[{event_type}] " if event_type else ""
        message = super().format(record)
        if self.use_color:
            return f"{self.COLORS.get(record.levelname, '')}{message}{self.RESET}"
        return message


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging for the whole project.

    Args:
        level: Logging level (default: INFO)
        log_to_file: Whether to log to JSONL file
        log_to_console: Whether to log to console
        log_dir: Custom log directory (default: project logs/)

    Returns:
        Configured project root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Repeated setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ConsoleFormatter(use_color=sys.stderr.isatty()))
        logger.addHandler(console_handler)

    if log_to_file:
        file_handler = SearchEventFileHandler(log_dir or LOG_DIR)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (will be prefixed with 'theatrecraft.')

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_search_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.INFO,
    logger_name: str = ROOT_LOGGER_NAME,
) -> None:
    """Log a structured search/indexing event.

    Args:
        event_type: Type of event (e.g., 'index_build_complete', 'fetch_failed')
        data: Event-specific data
        level: Log level
        logger_name: Logger to use
    """
    logger = get_logger(logger_name)
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name,
        level,
        "(search)",
        0,
        data.get("message", event_type),
        (),
        None,
    )
    record.event_type = event_type
    record.extra_data = {k: v for k, v in data.items() if k != "message"}

    logger.handle(record)
