"""
Tests for timers and the frame loop.
"""

import pytest

from planet_slicer.slicer_core.scheduler import FrameLoop, TimerScheduler


class TestTimerScheduler:
    """One-shot and interval timers on a simulated clock."""

    def test_once_fires_when_due(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_once("a", 100, lambda: fired.append("a"))

        assert scheduler.advance(99) == 0
        assert scheduler.advance(100) == 1
        assert fired == ["a"]
        assert not scheduler.pending("a")

    def test_fires_in_due_order(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_once("late", 200, lambda: fired.append("late"))
        scheduler.schedule_once("early", 50, lambda: fired.append("early"))

        scheduler.advance(500)

        assert fired == ["early", "late"]

    def test_interval_repeats(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_interval("tick", 100, lambda: fired.append(scheduler.now_ms))

        for now in range(0, 501, 10):
            scheduler.advance(now)

        assert fired == [100, 200, 300, 400, 500]

    def test_lagging_interval_fires_once(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_interval("tick", 100, lambda: fired.append(1))

        assert scheduler.advance(450) == 1
        assert scheduler.get("tick").due_ms == 550

    def test_rescheduling_replaces(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_interval("spawn", 100, lambda: fired.append("old"))
        scheduler.advance(50)
        scheduler.schedule_interval("spawn", 300, lambda: fired.append("new"))

        scheduler.advance(340)
        assert fired == []
        scheduler.advance(350)
        assert fired == ["new"]

    def test_cancel(self):
        scheduler = TimerScheduler(0.0)
        fired = []
        scheduler.schedule_once("a", 10, lambda: fired.append("a"))

        assert scheduler.cancel("a")
        assert not scheduler.cancel("a")
        scheduler.advance(100)
        assert fired == []

    def test_callback_sees_due_time(self):
        scheduler = TimerScheduler(0.0)
        seen = []
        scheduler.schedule_once("a", 100, lambda: seen.append(scheduler.now_ms))

        scheduler.advance(160)

        assert seen == [100]
        assert scheduler.now_ms == 160

    def test_time_never_goes_back(self):
        scheduler = TimerScheduler(100.0)
        assert scheduler.advance(50) == 0
        assert scheduler.now_ms == 100

    def test_rejects_non_positive_interval(self):
        scheduler = TimerScheduler()
        with pytest.raises(ValueError):
            scheduler.schedule_interval("bad", 0, lambda: None)

    def test_reset_drops_timers(self):
        scheduler = TimerScheduler(0.0)
        scheduler.schedule_once("a", 10, lambda: None)
        scheduler.reset(1000)

        assert not scheduler.pending("a")
        assert scheduler.now_ms == 1000


class TestFrameLoop:
    """Request/consume/cancel."""

    def test_consume_requires_request(self):
        loop = FrameLoop()
        assert not loop.consume()

        loop.request_next()
        assert loop.active
        assert loop.consume()
        assert not loop.active
        assert loop.frames == 1

    def test_cancel_clears_request(self):
        loop = FrameLoop()
        loop.request_next()
        loop.cancel()

        assert not loop.consume()
        assert loop.frames == 0
