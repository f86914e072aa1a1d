"""Frame sources for the smoothed transition engine.

A frame scheduler hands out one-shot callbacks, each invoked with a
timestamp in milliseconds at the next display refresh, and lets callers
cancel a callback that has not fired yet. Everything runs on one thread.
"""

import time
import asyncio
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional


FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Abstract base class for all frame schedulers."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule `callback` for the next frame and return a handle."""
        pass

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        pass

    @property
    @abstractmethod
    def pending(self) -> int:
        """Number of callbacks waiting for a frame."""
        pass


class ManualFrameScheduler(FrameScheduler):
    """Scheduler whose frames fire only when `run_frame` is called.

    Used by tests with synthetic timestamps and by the blocking terminal
    loop in `run_blocking`. Callbacks requested while a frame is running
    are deferred to the following frame.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms
        self._ids = itertools.count(1)
        self._callbacks: Dict[int, FrameCallback] = {}
        self._running: Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)
        self._running.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def run_frame(self, timestamp_ms: Optional[float] = None) -> int:
        """Fire every callback pending before this call. Returns how many ran."""
        if timestamp_ms is not None:
            self.now_ms = timestamp_ms
        self._running, self._callbacks = self._callbacks, {}
        fired = 0
        while self._running:
            handle = next(iter(self._running))
            callback = self._running.pop(handle)
            callback(self.now_ms)
            fired += 1
        return fired

    def advance(self, elapsed_ms: float) -> int:
        """Move the clock forward and fire one frame."""
        return self.run_frame(self.now_ms + elapsed_ms)

    def run_until_idle(self, frame_ms: float = 16.0, max_frames: int = 10000) -> int:
        """Fire frames every `frame_ms` until nothing is pending. Returns frames run."""
        frames = 0
        while self._callbacks and frames < max_frames:
            self.advance(frame_ms)
            frames += 1
        return frames


def run_blocking(scheduler: ManualFrameScheduler,
                 on_frame: Optional[Callable[[], None]] = None,
                 fps: float = 60.0,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep) -> int:
    """Drive a manual scheduler in real time until it goes idle.

    Args:
        scheduler: The scheduler holding the pending frames.
        on_frame: Called after each frame, e.g. to redraw a terminal line.
        fps: Target refresh rate.
        clock: Seconds source; timestamps passed to callbacks are clock() * 1000.
        sleep: Blocking wait between frames.

    Returns:
        The number of frames run.
    """
    interval = 1.0 / fps
    frames = 0
    while scheduler.pending:
        sleep(interval)
        scheduler.run_frame(clock() * 1000.0)
        frames += 1
        if on_frame:
            on_frame()
    return frames


class AsyncioFrameScheduler(FrameScheduler):
    """Scheduler that fires frames on the running asyncio event loop.

    Each requested callback runs once, one frame interval after it was
    requested, with the loop clock in milliseconds as its timestamp.
    """

    def __init__(self, fps: float = 60.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval = 1.0 / fps
        self._loop = loop
        self._ids = itertools.count(1)
        self._handles: Dict[int, asyncio.TimerHandle] = {}

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._handles[handle] = self.loop.call_later(self.interval, self._fire, handle, callback)
        return handle

    def cancel_frame(self, handle: int) -> None:
        timer = self._handles.pop(handle, None)
        if timer is not None:
            timer.cancel()

    @property
    def pending(self) -> int:
        return len(self._handles)

    def _fire(self, handle: int, callback: FrameCallback) -> None:
        if self._handles.pop(handle, None) is None:
            return
        callback(self.loop.time() * 1000.0)

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait until no frames are pending."""
        async def _poll():
            while self._handles:
                await asyncio.sleep(self.interval)
        await asyncio.wait_for(_poll(), timeout)
