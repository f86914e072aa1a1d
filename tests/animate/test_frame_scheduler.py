import os
import sys
import asyncio
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from animate.frame_scheduler import AsyncioFrameScheduler, ManualFrameScheduler, run_blocking
from animate.smooth_value import SmoothCounter


class FakeClock:
    """Clock and sleep pair that advances time only when slept."""

    def __init__(self):
        self.now = 8.0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class TestManualFrameScheduler:
    """Tests for the manually driven scheduler."""

    def test_callbacks_receive_frame_timestamp(self):
        scheduler = ManualFrameScheduler()
        stamps = []
        scheduler.request_frame(stamps.append)
        scheduler.request_frame(stamps.append)
        assert scheduler.run_frame(42.0) == 2
        assert stamps == [42.0, 42.0]
        assert scheduler.now_ms == 42.0

    def test_requests_during_a_frame_wait_for_the_next(self):
        scheduler = ManualFrameScheduler()
        fired = []

        def again(ts):
            fired.append(ts)
            scheduler.request_frame(fired.append)

        scheduler.request_frame(again)
        scheduler.run_frame(1)
        assert fired == [1]
        assert scheduler.pending == 1
        scheduler.run_frame(2)
        assert fired == [1, 2]

    def test_cancel_before_frame(self):
        scheduler = ManualFrameScheduler()
        fired = []
        handle = scheduler.request_frame(fired.append)
        scheduler.cancel_frame(handle)
        assert scheduler.run_frame(5) == 0
        assert fired == []

    def test_cancel_from_within_same_frame(self):
        scheduler = ManualFrameScheduler()
        fired = []
        handles = {}
        handles['first'] = scheduler.request_frame(lambda ts: scheduler.cancel_frame(handles['second']))
        handles['second'] = scheduler.request_frame(fired.append)
        scheduler.run_frame(5)
        assert fired == []

    def test_cancel_unknown_handle_is_ignored(self):
        scheduler = ManualFrameScheduler()
        scheduler.cancel_frame(999)
        assert scheduler.pending == 0

    def test_advance_moves_clock(self):
        scheduler = ManualFrameScheduler(start_ms=100)
        stamps = []
        scheduler.request_frame(stamps.append)
        scheduler.advance(16)
        assert stamps == [116]

    def test_run_until_idle_respects_max_frames(self):
        scheduler = ManualFrameScheduler()

        def forever(ts):
            scheduler.request_frame(forever)

        scheduler.request_frame(forever)
        assert scheduler.run_until_idle(max_frames=5) == 5
        assert scheduler.pending == 1


def test_run_blocking_plays_counter_in_real_time():
    fake = FakeClock()
    scheduler = ManualFrameScheduler()
    counter = SmoothCounter(scheduler, 0, 62.5)
    counter.set_target(5733)
    redraws = []

    frames = run_blocking(scheduler, on_frame=lambda: redraws.append(counter.display_value),
                          fps=64, clock=fake.clock, sleep=fake.sleep)

    # First frame starts the run, then 62.5ms at 15.625ms per frame
    assert frames == 5
    assert redraws[-1] == 5733
    assert redraws == sorted(redraws)
    assert all(s == 0.015625 for s in fake.sleeps)


def test_run_blocking_idle_scheduler_returns_immediately():
    fake = FakeClock()
    assert run_blocking(ManualFrameScheduler(), clock=fake.clock, sleep=fake.sleep) == 0
    assert fake.sleeps == []


@pytest.mark.asyncio
async def test_asyncio_scheduler_drives_counter_to_target():
    scheduler = AsyncioFrameScheduler(fps=200)
    updates = []
    counter = SmoothCounter(scheduler, 0, 40, on_update=updates.append)
    counter.set_target(1000)
    await scheduler.wait_idle(timeout=5)

    assert counter.display_value == 1000
    assert updates == sorted(updates)
    assert scheduler.pending == 0


@pytest.mark.asyncio
async def test_asyncio_scheduler_cancel():
    scheduler = AsyncioFrameScheduler(fps=100)
    fired = []
    handle = scheduler.request_frame(fired.append)
    scheduler.cancel_frame(handle)
    await asyncio.sleep(0.05)
    assert fired == []
    assert scheduler.pending == 0


@pytest.mark.asyncio
async def test_asyncio_retarget_mid_flight_never_regresses():
    scheduler = AsyncioFrameScheduler(fps=200)
    seen = []
    counter = SmoothCounter(scheduler, 0, 60, on_update=seen.append)
    counter.set_target(100)
    await asyncio.sleep(0.02)
    counter.set_target(200)
    await scheduler.wait_idle(timeout=5)

    assert seen == sorted(seen)
    assert counter.display_value == 200
