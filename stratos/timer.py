"""Timer allocation and busy-wait delays."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any, Optional

TICKS_PER_USEC = 1
TICKS_PER_MS = 1000 * TICKS_PER_USEC
TICKS_PER_SECOND = 1000 * TICKS_PER_MS

_US_PER_SECOND = 1_000_000


class TimerError(Exception):
    """Raised when a timer cannot be allocated."""


class SimTimer:
    """A simulated system timer that calls a callback from a background thread.

    The callback is invoked first and the thread then sleeps for the configured
    interval, over and over, until :meth:`stop` is called. Allocating again
    replaces the callback and interval used by the running timer.
    """

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], Any]] = None
        self._interval_us = 0
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def alloc(self, callback: Callable[[], Any], interval_us: int) -> int:
        """Start calling ``callback`` every ``interval_us`` microseconds.

        Returns the identifier of the allocated timer.
        """
        if callback is None or not callable(callback):
            raise TimerError("a callable timer callback is required")
        if interval_us < 0:
            raise TimerError(f"timer interval must not be negative, got {interval_us}")

        with self._lock:
            self._callback = callback
            self._interval_us = interval_us
            if self.running:
                return 0
            self._stop.clear()
            thread = threading.Thread(
                target=self._run, name="stratos-sim-timer", daemon=True
            )
            try:
                thread.start()
            except RuntimeError as exc:
                raise TimerError("failed to create timer thread") from exc
            self._thread = thread
        return 0

    def stop(self) -> None:
        """Stop the timer thread and wait for it to finish."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            with self._lock:
                callback = self._callback
                interval_us = self._interval_us
            if callback is not None:
                callback()
            self._stop.wait(TICKS_PER_USEC * interval_us / _US_PER_SECOND)


def delay_us(us: int) -> None:
    """Busy-wait for ``us`` microseconds."""
    end = time.perf_counter() + us / _US_PER_SECOND
    while time.perf_counter() < end:
        pass


def delay_ms(ms: int) -> None:
    """Busy-wait for ``ms`` milliseconds."""
    delay_us(TICKS_PER_MS * ms)


def delay_sec(sec: int) -> None:
    """Busy-wait for ``sec`` seconds."""
    delay_us(TICKS_PER_SECOND * sec)