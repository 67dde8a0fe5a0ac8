"""
Scheduler
=========

Single-threaded timers and the frame-tick subscription. The host supplies the
clock in milliseconds; every callback runs to completion before the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class Timer:
    """A named pending callback."""
    name: str
    due_ms: float
    callback: Callable[[], None]
    interval_ms: Optional[float] = None  # None for one-shot timers
    seq: int = 0

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None


class TimerScheduler:
    """
    Named one-shot and interval timers on a host-driven clock.

    Scheduling a timer under an existing name replaces it. ``advance`` fires
    due timers in due-time order; while a callback runs, ``now_ms`` is that
    timer's due time so timers it schedules are placed relative to it.
    """

    def __init__(self, now_ms: float = 0.0):
        self._now_ms = float(now_ms)
        self._timers: Dict[str, Timer] = {}
        self._seq = 0

    @property
    def now_ms(self) -> float:
        """Current clock reading."""
        return self._now_ms

    def pending(self, name: str) -> bool:
        return name in self._timers

    def get(self, name: str) -> Optional[Timer]:
        return self._timers.get(name)

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def schedule_once(self, name: str, delay_ms: float, callback: Callable[[], None]) -> Timer:
        """Run ``callback`` once, ``delay_ms`` from now."""
        timer = Timer(
            name=name,
            due_ms=self._now_ms + delay_ms,
            callback=callback,
            seq=self._next_seq()
        )
        self._timers[name] = timer
        return timer

    def schedule_interval(self, name: str, interval_ms: float, callback: Callable[[], None]) -> Timer:
        """Run ``callback`` every ``interval_ms``, first firing one interval from now."""
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        timer = Timer(
            name=name,
            due_ms=self._now_ms + interval_ms,
            callback=callback,
            interval_ms=interval_ms,
            seq=self._next_seq()
        )
        self._timers[name] = timer
        return timer

    def cancel(self, name: str) -> bool:
        """Cancel a timer. Returns True if one was pending."""
        return self._timers.pop(name, None) is not None

    def cancel_all(self) -> None:
        self._timers.clear()

    def _earliest_due(self, now_ms: float) -> Optional[Timer]:
        due = [t for t in self._timers.values() if t.due_ms <= now_ms]
        if not due:
            return None
        return min(due, key=lambda t: (t.due_ms, t.seq))

    def advance(self, now_ms: float) -> int:
        """
        Move the clock forward and fire every timer that came due.

        An interval timer that fell more than one interval behind fires once
        and re-arms relative to ``now_ms``.

        Args:
            now_ms: New clock reading. Readings earlier than the current one
                are ignored.

        Returns:
            Number of callbacks fired.
        """
        if now_ms < self._now_ms:
            return 0

        fired = 0
        while True:
            timer = self._earliest_due(now_ms)
            if timer is None:
                break

            self._now_ms = max(self._now_ms, timer.due_ms)
            if timer.repeating:
                timer.due_ms += timer.interval_ms
                if timer.due_ms <= now_ms:
                    timer.due_ms = now_ms + timer.interval_ms
                timer.seq = self._next_seq()
            else:
                del self._timers[timer.name]

            timer.callback()
            fired += 1

        self._now_ms = now_ms
        return fired

    def reset(self, now_ms: float = 0.0) -> None:
        """Drop all timers and set the clock."""
        self._timers.clear()
        self._now_ms = float(now_ms)


class FrameLoop:
    """
    Frame-tick subscription: run a step, then request the next one while the
    game is still playing. Cancelling clears the request.
    """

    def __init__(self):
        self._requested = False
        self._frames = 0

    @property
    def active(self) -> bool:
        """True if a frame has been requested."""
        return self._requested

    @property
    def frames(self) -> int:
        """Frames consumed since the last reset."""
        return self._frames

    def request_next(self) -> None:
        self._requested = True

    def cancel(self) -> None:
        self._requested = False

    def consume(self) -> bool:
        """Take the pending request. Returns False if none was pending."""
        if not self._requested:
            return False
        self._requested = False
        self._frames += 1
        return True

    def reset(self) -> None:
        self._requested = False
        self._frames = 0
