"""Timer abstraction used by sync sessions.

``ThreadingScheduler`` runs callbacks on daemon threads; ``ManualScheduler``
keeps a virtual clock that tests advance explicitly.
"""

from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, Protocol

from pageship.core.logging import get_logger

logger = get_logger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> TimerHandle: ...

    def call_every(self, interval: float, callback: Callback) -> TimerHandle: ...


def _run_safely(callback: Callback) -> None:
    try:
        callback()
    except Exception:  # noqa: BLE001 - keep timer threads alive
        logger.exception("Scheduled callback failed")


class _ThreadTimer:
    def __init__(self, delay: float, callback: Callback, repeat: bool) -> None:
        self._delay = delay
        self._callback = callback
        self._repeat = repeat
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True, name="pageship-timer")
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self._delay):
            _run_safely(self._callback)
            if not self._repeat:
                break

    def cancel(self) -> None:
        self._stop.set()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()


class ThreadingScheduler:
    def call_later(self, delay: float, callback: Callback) -> _ThreadTimer:
        return _ThreadTimer(delay, callback, repeat=False)

    def call_every(self, interval: float, callback: Callback) -> _ThreadTimer:
        return _ThreadTimer(interval, callback, repeat=True)


class _ManualTimer:
    def __init__(self, callback: Callback, interval: float | None) -> None:
        self.callback = callback
        self.interval = interval
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance`."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._counter = itertools.count()
        self._lock = threading.Lock()

    @property
    def now(self) -> float:
        return self._now

    def _push(self, due: float, timer: _ManualTimer) -> None:
        with self._lock:
            heapq.heappush(self._queue, (due, next(self._counter), timer))

    def call_later(self, delay: float, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(callback, None)
        self._push(self._now + delay, timer)
        return timer

    def call_every(self, interval: float, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(callback, interval)
        self._push(self._now + interval, timer)
        return timer

    def pending(self) -> int:
        with self._lock:
            return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every due timer in order."""
        target = self._now + seconds
        while True:
            with self._lock:
                if not self._queue or self._queue[0][0] > target:
                    break
                due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            timer.callback()
            if timer.interval is not None and not timer.cancelled:
                self._push(due + timer.interval, timer)
        self._now = target


__all__ = ["TimerHandle", "Scheduler", "ThreadingScheduler", "ManualScheduler"]
