"""
scheduler.py — Delayed-Callback Scheduling
===========================================
The playback engine only needs two things from its host:

    token = scheduler.schedule(delay_seconds, callback)
    scheduler.cancel(token)

Both hosts keep one heap of (due time, sequence, callback), so callbacks
always fire in (due time, scheduling order), even when delays are equal.

  • TimerScheduler  – wall-clock time, used by the Flask server.  A single
                      daemon worker thread drains the heap; callbacks run
                      on that thread, one at a time.
  • ManualScheduler – a virtual clock advanced explicitly by the caller
                      (tests, or any host with its own tick loop).  Nothing
                      fires until advance() / run_pending() is called.
"""

import heapq
import itertools
import logging
import threading
import time
from typing import Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

Entry = Tuple[float, int, Callable[[], None]]


class Scheduler:
    """Interface: schedule a callback after a relative delay, cancel it by token."""

    def schedule(self, delay: float, callback: Callable[[], None]):
        raise NotImplementedError

    def cancel(self, token) -> None:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Wall clock
# ---------------------------------------------------------------------------
class TimerScheduler(Scheduler):

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._cond = threading.Condition()
        self._queue: List[Entry] = []
        self._pending: Set[int] = set()
        self._seq = itertools.count()
        self._worker: Optional[threading.Thread] = None

    def schedule(self, delay: float, callback: Callable[[], None]) -> int:
        with self._cond:
            token = next(self._seq)
            heapq.heappush(self._queue, (self._clock() + max(0.0, delay), token, callback))
            self._pending.add(token)
            if self._worker is None:
                self._worker = threading.Thread(target=self._drain, name="playback-scheduler", daemon=True)
                self._worker.start()
            self._cond.notify()
            return token

    def cancel(self, token: int) -> None:
        with self._cond:
            self._pending.discard(token)

    def cancel_all(self) -> None:
        with self._cond:
            self._queue = []
            self._pending.clear()

    @property
    def pending(self) -> int:
        with self._cond:
            return len(self._pending)

    def _next_due(self) -> Entry:
        """Block until the earliest live entry is due, then pop it."""
        with self._cond:
            while True:
                while self._queue and self._queue[0][1] not in self._pending:
                    heapq.heappop(self._queue)
                if not self._queue:
                    self._cond.wait()
                    continue
                wait = self._queue[0][0] - self._clock()
                if wait <= 0:
                    entry = heapq.heappop(self._queue)
                    self._pending.discard(entry[1])
                    return entry
                self._cond.wait(wait)

    def _drain(self) -> None:
        while True:
            _, token, callback = self._next_due()
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback %d failed", token)


# ---------------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------------
class ManualScheduler(Scheduler):
    """
    Attributes:
        now : current virtual time in seconds.
    """

    def __init__(self):
        self.now: float = 0.0
        self._queue: List[Entry] = []
        self._pending: Set[int] = set()
        self._seq = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> int:
        token = next(self._seq)
        heapq.heappush(self._queue, (self.now + max(0.0, delay), token, callback))
        self._pending.add(token)
        return token

    def cancel(self, token: int) -> None:
        self._pending.discard(token)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything now due.  Returns callbacks fired."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, token, callback = heapq.heappop(self._queue)
            self.now = due
            if token not in self._pending:
                continue
            self._pending.discard(token)
            callback()
            fired += 1
        self.now = target
        return fired

    def run_pending(self) -> int:
        """Fire every scheduled callback, jumping the clock as needed."""
        if not self._queue:
            return 0
        return self.advance(max(due for due, _, _ in self._queue) - self.now)

    @property
    def pending(self) -> int:
        return len(self._pending)
