"""scheduler.py - one cooperative queue for everything that happens later.

key events, command submissions, and timer callbacks all land here.
items run to completion, one at a time, in due order. nothing preempts.
every timer is a handle you can cancel, and teardown cancels them all.

in the world: the metronome. it only ticks when someone asks it to.
"""

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from blakkout.log import debug, warn


# ============================================================
# CLOCKS
# ============================================================

class MonotonicClock:
    """wall-independent milliseconds. never goes backwards."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """a clock that only moves when told to. for tests and replays."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        self._now += ms
        return self._now

    def set(self, now_ms: float):
        self._now = float(now_ms)


# ============================================================
# TIMERS
# ============================================================

@dataclass(order=True)
class Timer:
    """a scheduled callback. sorts by (due, seq)."""
    due_ms: float
    seq: int
    fn: Callable = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self):
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired


class Scheduler:
    """single-threaded work queue with cancellable timers.

    Usage:
        sched = Scheduler(ManualClock())
        t = sched.call_later(2000, lambda: print("later"), label="grand")
        sched.clock.advance(2000)
        sched.run_due()   # prints "later"
    """

    def __init__(self, clock=None):
        self.clock = clock or MonotonicClock()
        self._queue: list[Timer] = []
        self._seq = itertools.count()
        self._errors = 0

    def now_ms(self) -> float:
        return self.clock.now_ms()

    def call_later(self, delay_ms: float, fn: Callable, label: str = "") -> Timer:
        """run fn once, delay_ms from now."""
        timer = Timer(
            due_ms=self.clock.now_ms() + max(0.0, float(delay_ms)),
            seq=next(self._seq),
            fn=fn,
            label=label,
        )
        heapq.heappush(self._queue, timer)
        return timer

    def post(self, fn: Callable, label: str = "") -> Timer:
        """queue immediate work. runs on the next run_due()."""
        return self.call_later(0, fn, label=label)

    def run_due(self) -> int:
        """run every item that is due. returns how many ran.

        items scheduled by a running callback run in the same pass
        if they are already due.
        """
        ran = 0
        while self._queue:
            head = self._queue[0]
            if head.cancelled:
                heapq.heappop(self._queue)
                continue
            if head.due_ms > self.clock.now_ms():
                break
            heapq.heappop(self._queue)
            head.fired = True
            ran += 1
            try:
                head.fn()
            except Exception as e:
                self._errors += 1
                warn("scheduler", f"callback {head.label or '?'} failed: {e}")
        return ran

    def next_due_ms(self) -> Optional[float]:
        """due time of the earliest live timer, or None."""
        for timer in sorted(self._queue):
            if not timer.cancelled:
                return timer.due_ms
        return None

    def pending(self, label: str = "") -> list[Timer]:
        """live timers, soonest first. filter by label if given."""
        return [
            t for t in sorted(self._queue)
            if not t.cancelled and (not label or t.label == label)
        ]

    def cancel_all(self) -> int:
        """cancel every pending timer. returns how many were live."""
        live = 0
        for timer in self._queue:
            if not timer.cancelled:
                timer.cancel()
                live += 1
        self._queue.clear()
        if live:
            debug("scheduler", f"cancelled {live} pending timers")
        return live

    def stats(self) -> dict:
        return {"pending": len(self.pending()), "errors": self._errors}
