"""Search-frequency ledger: how often each product was found by name.

Counts are loaded once at startup and the whole file is rewritten on every
increment. A file that cannot be read or written is logged and the ledger
carries on in memory.
"""

import csv
import os
import tempfile
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from catalog.logging_config import get_logger, log_search_event

__all__ = ["SearchFrequency", "FrequencyLedger", "LEDGER_HEADER"]

logger = get_logger("engine.ledger")

LEDGER_HEADER = ["modelName", "count"]


@dataclass(frozen=True)
class SearchFrequency:
    search_term: str
    count: int

    def to_dict(self) -> Dict[str, object]:
        return {"searchTerm": self.search_term, "count": self.count}


class FrequencyLedger:
    """Model name -> successful search count, persisted as a two-column CSV.

    Pass ``path=None`` for an in-memory ledger.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()
        if path:
            self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            logger.info(f"No search frequency file at {self.path}; starting fresh")
            return

        skipped = 0
        try:
            with open(self.path, "r", newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    name = (row.get("modelName") or "").strip()
                    try:
                        count = int((row.get("count") or "").strip())
                    except ValueError:
                        skipped += 1
                        continue
                    if name:
                        self._counts[name] = count
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            # A partly read file is discarded
            logger.error(f"Could not read search frequencies from {self.path}: {e}")
            self._counts.clear()
            return

        if skipped:
            logger.warning(f"Skipped {skipped} malformed rows in {self.path}")
        logger.info(f"Loaded {len(self._counts)} search frequencies")

    def _flush(self) -> None:
        """Rewrite the ledger file atomically. Caller holds the lock."""
        if not self.path:
            return

        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".search_frequency_", suffix=".csv", dir=directory)
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(LEDGER_HEADER)
                for name, count in self._counts.items():
                    writer.writerow([name, count])
            os.replace(tmp_path, self.path)
        except OSError as e:
            # Counts stay in memory; the next successful flush writes them
            logger.error(f"Could not save search frequencies to {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def increment(self, model_name: str) -> int:
        """Add one search for ``model_name`` and persist. Returns the new count."""
        name = model_name.strip()
        with self._lock:
            count = self._counts.get(name, 0) + 1
            self._counts[name] = count
            self._flush()

        logger.info(f"Incremented frequency for '{name}' to {count}")
        log_search_event("ledger_increment", {"model_name": name, "count": count},
                         logger_name="engine.ledger")
        return count

    def get(self, model_name: str) -> int:
        with self._lock:
            return self._counts.get(model_name.strip(), 0)

    def top(self, limit: int) -> List[SearchFrequency]:
        """Most searched names first."""
        if limit <= 0:
            return []
        with self._lock:
            items = list(self._counts.items())
        items.sort(key=lambda item: item[1], reverse=True)
        return [SearchFrequency(name, count) for name, count in items[:limit]]

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
