"""Interval scheduling for repeated mirror passes."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class Scheduler:
    """Call a tick function, then wait, until stopped.

    The wait happens on a ``threading.Event`` so another thread (or a test)
    can end the loop with ``stop()`` without waiting out the interval.

    Args:
        interval: Seconds to wait after each completed tick.
        stop_event: Cancellation token; a fresh one is created if omitted.
        max_passes: Stop after this many ticks (``None`` runs forever).
    """

    def __init__(
        self,
        interval: float,
        stop_event: threading.Event | None = None,
        max_passes: int | None = None,
    ) -> None:
        if not 0 < interval <= threading.TIMEOUT_MAX:
            raise ValueError(
                f"Invalid interval {interval}: must be positive and at most "
                f"{threading.TIMEOUT_MAX} seconds"
            )
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self.max_passes = max_passes
        self.passes = 0

    def stop(self) -> None:
        self.stop_event.set()

    def run(self, tick: Callable[[], object]) -> int:
        """Run *tick* once per interval.

        Exceptions raised by *tick* propagate and end the loop.

        Returns:
            Number of completed ticks.
        """
        logger.info("Scheduler started (interval=%ss)", self.interval)
        while not self.stop_event.is_set():
            tick()
            self.passes += 1
            if self.max_passes is not None and self.passes >= self.max_passes:
                break
            self.stop_event.wait(self.interval)
        logger.info("Scheduler stopped after %d passes", self.passes)
        return self.passes
