"""Single-user calculator session.

Holds the one piece of user state (the `RawInput`), recomputes the gap
figures from it on every change and pushes the new targets into one
`SmoothCounter` per animated figure.
"""

from typing import Callable, Dict, Optional

from model.IncomeInput import IncomeMode, RawInput
from model.GapFigures import GapFigures
from model.field_metadata import ANIMATED_FIELDS
from tax.GrowthDetails import GrowthDetails
from calc.gap_calculator import GapCalculator
from calc.income_normalizer import toggle_mode, with_text, with_slider
from calc.opportunity_cost import opportunity_equivalents
from animate.frame_scheduler import FrameScheduler
from animate.smooth_value import SmoothCounter


DEFAULT_AMOUNT = 65000


class GapSession:
    """Owns the input, the calculator and the animated counters.

    Args:
        scheduler: Frame source shared by the counters.
        details: Rates and factors; defaults to the built-in values.
        raw_input: Starting input; defaults to 65000 annual.
        on_update: Called with (field_name, display_value) after every frame.
    """

    def __init__(self, scheduler: FrameScheduler, details: Optional[GrowthDetails] = None,
                 raw_input: Optional[RawInput] = None,
                 on_update: Optional[Callable[[str, int], None]] = None):
        self.details = details or GrowthDetails()
        self.calculator = GapCalculator(self.details)
        self.raw_input = raw_input or RawInput(DEFAULT_AMOUNT, IncomeMode.ANNUAL)
        self.figures = self.calculator.compute(self.raw_input)
        self.on_update = on_update
        self.counters: Dict[str, SmoothCounter] = {}
        for name in ANIMATED_FIELDS:
            self.counters[name] = SmoothCounter(
                scheduler,
                target=getattr(self.figures, name),
                duration_ms=self.details.animation_duration_ms,
                on_update=self._forward(name),
            )

    def _forward(self, name: str) -> Callable[[int], None]:
        def _callback(display_value: int) -> None:
            if self.on_update:
                self.on_update(name, display_value)
        return _callback

    @property
    def mode(self) -> IncomeMode:
        return self.raw_input.mode

    @property
    def amount(self) -> float:
        return self.raw_input.amount

    def display_values(self) -> Dict[str, int]:
        return {name: counter.display_value for name, counter in self.counters.items()}

    @property
    def is_animating(self) -> bool:
        return any(counter.is_animating for counter in self.counters.values())

    def enter_text(self, text: str) -> GapFigures:
        """Apply freeform entry text as the new amount."""
        return self._apply(with_text(self.raw_input, text))

    def set_slider(self, value: float) -> GapFigures:
        """Apply a slider position, clamped and snapped for the current mode."""
        return self._apply(with_slider(self.raw_input, value, self.details))

    def set_mode(self, mode: IncomeMode) -> GapFigures:
        """Switch units, converting the amount once."""
        return self._apply(toggle_mode(self.raw_input, mode, self.details))

    def reset(self) -> GapFigures:
        """Return to 65000 annual; the counters ease back like any other change."""
        return self._apply(RawInput(DEFAULT_AMOUNT, IncomeMode.ANNUAL))

    def opportunity_equivalents(self):
        return opportunity_equivalents(self.figures.gap, self.details.opportunity_items)

    def teardown(self) -> None:
        for counter in self.counters.values():
            counter.teardown()

    def _apply(self, raw_input: RawInput) -> GapFigures:
        self.raw_input = raw_input
        self.figures = self.calculator.compute(raw_input)
        for name, counter in self.counters.items():
            counter.set_target(getattr(self.figures, name))
        return self.figures
