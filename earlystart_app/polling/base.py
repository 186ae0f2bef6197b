"""
Periodic background polling with teardown-safe result application.

Each poller owns one daemon thread that runs a tick immediately on start and
then once per interval until stopped. Every tick carries the generation
number that was current when it was issued; results are applied only while
that generation is still current, so nothing lands after stop() returns.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..logging.config import get_logger

logger = get_logger(__name__)


class Poller(ABC):
    """Base class for the live count and deployment status pollers."""

    def __init__(self, name: str, interval_seconds: float):
        self.name = name
        self.interval_seconds = interval_seconds
        self.logger = logger.bind(poller=name)

        self._lock = threading.Lock()
        self._generation = 0
        self._running = False
        self._stopped = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._tick_count = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        """Begin polling: one tick now, then one per interval."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._stopped = False
            self._generation += 1
            generation = self._generation
            self._stop_event = threading.Event()
            stop_event = self._stop_event

        self._thread = threading.Thread(
            target=self._run,
            args=(generation, stop_event),
            name=f"poller-{self.name}",
            daemon=True,
        )
        self._thread.start()
        self.logger.info("Poller started", interval_seconds=self.interval_seconds)

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop polling and invalidate in-flight ticks.

        Once this returns no further state is applied. The worker thread is
        joined only when a timeout is given; a tick blocked on the network
        finishes in the background and its result is discarded.
        """
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stopped = True
            self._generation += 1
            self._stop_event.set()

        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread() and timeout:
            thread.join(timeout)

        self.logger.info("Poller stopped", ticks=self._tick_count)

    def refresh(self) -> None:
        """
        Run one tick on the caller's thread under the current generation.

        Allowed before start() and while running; a stopped poller ignores it.
        """
        with self._lock:
            if self._stopped:
                self.logger.debug("Ignoring refresh on stopped poller")
                return
            generation = self._generation
        self._tick(generation)

    def _run(self, generation: int, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self._tick(generation)
            if stop_event.wait(self.interval_seconds):
                break

    def _tick(self, generation: int) -> None:
        self._tick_count += 1
        try:
            self.poll_once(generation)
        except Exception:
            # The next tick still runs; a poller only ends through stop()
            self.logger.exception("Poll tick failed", generation=generation)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def apply_if_current(self, generation: int, apply: Callable[[], None]) -> bool:
        """Run apply under the lock only if generation is still current."""
        with self._lock:
            if generation != self._generation:
                self.logger.debug("Discarding stale poll result", generation=generation)
                return False
            apply()
            return True

    @abstractmethod
    def poll_once(self, generation: int) -> None:
        """
        Fetch once and apply the result via apply_if_current(generation, ...).

        Implementations must not raise for expected failures; a failed tick
        leaves the previous state in place.
        """
