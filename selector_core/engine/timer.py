"""
Cancelable timers for debounced work

A CancelableTimer holds at most one pending callback: scheduling again
cancels the previous one, and a callback fires at most once. Timers run on
an injected Scheduler so tests can drive time by hand.

Usage:
    clock = LogicalClock()
    timer = CancelableTimer(clock, delay=0.5)
    timer.schedule(lambda: print("fired"))
    clock.advance(0.5)
"""

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Protocol, Tuple

from ..exceptions import SelectorCoreError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class _ScheduledCall:
    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], Any]):
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class LogicalClock:
    """
    Manually advanced scheduler.

    Nothing fires until ``advance`` moves time past a deadline; due calls
    run in deadline order, ties in scheduling order.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: List[Tuple[float, int, _ScheduledCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _ScheduledCall:
        call = _ScheduledCall(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.deadline, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due callbacks. Returns how many fired."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = deadline
            call.callback()
            fired += 1
        self.now = target
        return fired

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @classmethod
    def running(cls) -> "AsyncioScheduler":
        """
        Scheduler bound to the event loop running right now.

        Raises:
            SelectorCoreError: called outside a running event loop
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SelectorCoreError(
                "No running event loop for debounced validation; "
                "create the session inside a coroutine or pass scheduler=LogicalClock()"
            ) from e
        return cls(loop)

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class CancelableTimer:
    """Single-slot timer: schedule, cancel-if-pending, fire-at-most-once."""

    def __init__(self, scheduler: Scheduler, delay: float):
        self.scheduler = scheduler
        self.delay = delay
        self._handle: Optional[TimerHandle] = None
        self._callback: Optional[Callable[[], Any]] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], Any]) -> None:
        """Arm the timer, replacing whatever was pending."""
        if self.cancel():
            logger.debug("Replaced pending timer")
        generation = self._generation + 1
        # State changes only once the scheduler has accepted the call
        handle = self.scheduler.call_later(self.delay, lambda: self._fire(generation))
        self._generation = generation
        self._callback = callback
        self._handle = handle

    def cancel(self) -> bool:
        """Drop the pending callback. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._callback = None
        return True

    def flush(self) -> bool:
        """Run the pending callback now instead of waiting. Returns True if one ran."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire(self._generation)
        return True

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._handle is None:
            return
        callback = self._callback
        self._handle = None
        self._callback = None
        callback()
