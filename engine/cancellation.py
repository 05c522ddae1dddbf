"""Per-request cancellation and deadlines for index builds.

An index build walks every product page, and a single slow host can hold
it up for the full fetch timeout. Callers pass a CancellationToken to bound
the whole build; the build loop checks it between pages and the fetch
timeout is capped by whatever time is left.
"""

import threading
import time
from typing import Optional

__all__ = ["CancellationToken"]


class CancellationToken:
    """Cooperative cancel flag with an optional deadline.

    Usage:
        token = CancellationToken(timeout=30)
        engine.search("atmos", cancel=token)

        # from another thread
        token.cancel()
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline: Optional[float] = None
        if timeout is not None and timeout > 0:
            self._deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        """Request that work stop at the next check."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """True once cancelled explicitly or past the deadline."""
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (None when there is no deadline)."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def bound_timeout(self, timeout: float) -> float:
        """Cap a per-call timeout so it never runs past the deadline."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)
