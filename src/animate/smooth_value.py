"""Smoothed numeric transitions for displayed figures.

An `AnimatedValue` eases its integer display value toward a target with an
ease-out quartic curve. The easing itself is a pure `step(now_ms)` so any
frame source can drive it; `SmoothCounter` binds one value to a
`FrameScheduler` and keeps at most one frame pending for it.
"""

import math
import logging
from typing import Callable, Optional

from animate.frame_scheduler import FrameScheduler


logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 300


def ease_out_quart(progress: float) -> float:
    """Decelerating curve: 1 - (1 - p)^4 for p in [0, 1]."""
    return 1 - (1 - progress) ** 4


def _floor(value: float) -> int:
    # Absorb binary rounding noise: 5850 * 2.3 == 13454.999999999998
    return math.floor(round(value, 6))


def _finite_or_zero(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class AnimatedValue:
    """Per-figure easing state.

    Idle while `display_value` rests at the floored target; animating from
    the moment a new target is adopted until a step reaches full progress.
    """

    def __init__(self, target: float = 0.0, duration_ms: float = DEFAULT_DURATION_MS):
        self.target = _finite_or_zero(target)
        self.display_value = _floor(self.target)
        self.start_value = self.display_value
        self.start_time: Optional[float] = None
        self.duration_ms = duration_ms
        self.animating = False

    def retarget(self, new_target: float, duration_ms: Optional[float] = None) -> None:
        """Start a fresh run toward `new_target` from the current display value."""
        self.target = _finite_or_zero(new_target)
        if duration_ms is not None:
            self.duration_ms = duration_ms
        # Restart from what is on screen, never from the previous target
        self.start_value = self.display_value
        self.start_time = None
        self.animating = True

    def progress(self, now_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        if self.start_time is None:
            return 0.0
        return min(max((now_ms - self.start_time) / self.duration_ms, 0.0), 1.0)

    def step(self, now_ms: float) -> int:
        """Apply one frame at timestamp `now_ms` and return the display value."""
        if not self.animating:
            return self.display_value
        if self.start_time is None:
            self.start_time = now_ms

        progress = self.progress(now_ms)
        if progress >= 1:
            self.display_value = _floor(self.target)
            self.animating = False
        else:
            eased = ease_out_quart(progress)
            self.display_value = _floor(self.start_value + (self.target - self.start_value) * eased)
        return self.display_value

    @property
    def is_idle(self) -> bool:
        return not self.animating


def advance(value: AnimatedValue, new_target: float, duration_ms: float) -> AnimatedValue:
    """Adopt a new target on `value` and return it, ready to be stepped."""
    value.retarget(new_target, duration_ms)
    return value


class SmoothCounter:
    """One animated figure driven by a frame scheduler.

    Args:
        scheduler: Source of frame callbacks.
        target: Initial value, shown immediately without animation.
        duration_ms: Length of each easing run.
        on_update: Called with the new display value after every frame.
    """

    def __init__(self, scheduler: FrameScheduler, target: float = 0.0,
                 duration_ms: float = DEFAULT_DURATION_MS,
                 on_update: Optional[Callable[[int], None]] = None):
        self.scheduler = scheduler
        self.value = AnimatedValue(target, duration_ms)
        self.on_update = on_update
        self._handle = None
        self._torn_down = False

    @property
    def display_value(self) -> int:
        return self.value.display_value

    @property
    def target(self) -> float:
        return self.value.target

    @property
    def is_animating(self) -> bool:
        return self._handle is not None

    def set_target(self, new_target: float, duration_ms: Optional[float] = None) -> None:
        """Ease toward `new_target`, superseding any run in flight."""
        if self._torn_down:
            return
        new_target = _finite_or_zero(new_target)
        if new_target == self.value.target and (duration_ms is None or duration_ms == self.value.duration_ms):
            return
        if self._handle is not None:
            logger.debug("Superseding run toward %s at display value %s", self.value.target, self.value.display_value)
        self._cancel()
        advance(self.value, new_target, self.value.duration_ms if duration_ms is None else duration_ms)
        self._handle = self.scheduler.request_frame(self._on_frame)

    def teardown(self) -> None:
        """Cancel any pending frame; later targets are ignored."""
        self._cancel()
        self._torn_down = True

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_frame(self, timestamp_ms: float) -> None:
        self._handle = None
        display = self.value.step(timestamp_ms)
        if self.on_update:
            self.on_update(display)
        if self.value.animating and not self._torn_down:
            self._handle = self.scheduler.request_frame(self._on_frame)
