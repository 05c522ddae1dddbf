"""Request timing tracker for search and index-build operations.

Provides structured timing measurements so request logs show where the time
of a ranking or frequency request went.

Example:
    from web.timing import timer, get_timings

    with timer("page_ranking"):
        result = engine.search(keyword)

    log_search_event("search_request", {"timings": get_timings()})
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from flask import g, has_request_context

__all__ = ["timer", "get_timings", "reset_timings", "TimingTracker"]


class TimingTracker:
    """Track timing for multiple operations within a request."""

    def __init__(self):
        self.timings: Dict[str, Dict[str, Any]] = {}
        self.active_timers: Dict[str, float] = {}

    def start(self, operation: str) -> None:
        """Start timing an operation."""
        self.active_timers[operation] = time.monotonic()

    def end(self, operation: str) -> float:
        """End timing and return duration in seconds."""
        if operation not in self.active_timers:
            return 0.0

        duration = time.monotonic() - self.active_timers.pop(operation)

        if operation not in self.timings:
            self.timings[operation] = {
                "count": 0,
                "total_seconds": 0.0,
                "min_seconds": float("inf"),
                "max_seconds": 0.0,
            }

        stats = self.timings[operation]
        stats["count"] += 1
        stats["total_seconds"] += duration
        stats["min_seconds"] = min(stats["min_seconds"], duration)
        stats["max_seconds"] = max(stats["max_seconds"], duration)

        return duration

    @contextmanager
    def measure(self, operation: str):
        """Context manager for timing an operation."""
        self.start(operation)
        try:
            yield
        finally:
            self.end(operation)

    def get_all(self) -> Dict[str, Any]:
        """Get all timings, cleaned up for JSON serialization."""
        result = {}
        for op, stats in self.timings.items():
            result[op] = {
                "count": stats["count"],
                "total_seconds": round(stats["total_seconds"], 3),
                "avg_seconds": round(stats["total_seconds"] / stats["count"], 3) if stats["count"] > 0 else 0,
                "min_seconds": round(stats["min_seconds"], 3) if stats["min_seconds"] != float("inf") else 0,
                "max_seconds": round(stats["max_seconds"], 3),
            }

        if result:
            slowest = max(self.timings, key=lambda op: self.timings[op]["total_seconds"])
            result["__summary__"] = {
                "total_seconds": round(sum(s["total_seconds"] for s in self.timings.values()), 3),
                "slowest_operation": slowest,
            }

        return result

    def reset(self) -> None:
        """Reset all timings."""
        self.timings.clear()
        self.active_timers.clear()


# Global tracker instance for non-request contexts (CLI tools, tests)
_tracker: Optional[TimingTracker] = None


def _get_tracker() -> TimingTracker:
    """Get or create the tracker for the current context.

    In a Flask request context, uses flask.g for per-request storage.
    Otherwise, uses a global tracker.
    """
    if has_request_context():
        if not hasattr(g, "timing_tracker"):
            g.timing_tracker = TimingTracker()
        return g.timing_tracker

    global _tracker
    if _tracker is None:
        _tracker = TimingTracker()
    return _tracker


@contextmanager
def timer(operation: str):
    """Context manager for timing an operation.

    Args:
        operation: Name of the operation (e.g., "page_ranking", "product_search")
    """
    tracker = _get_tracker()
    with tracker.measure(operation):
        yield


def get_timings() -> Dict[str, Any]:
    """Get all recorded timings with a ``__summary__`` entry.

    The summary holds ``total_seconds`` and the name of the
    ``slowest_operation``.
    """
    return _get_tracker().get_all()


def reset_timings() -> None:
    """Reset all timings for a new request."""
    _get_tracker().reset()
