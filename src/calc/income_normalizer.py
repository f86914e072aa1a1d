import math
import re
import logging
from dataclasses import replace
from typing import Optional

from model.IncomeInput import IncomeMode, RawInput, NormalizedIncome
from tax.GrowthDetails import GrowthDetails


logger = logging.getLogger(__name__)

# Leading numeric prefix of the entered text, same tolerance as a browser's parseFloat
_NUMBER_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_amount(text) -> float:
    """Turn freeform entry text into a non-negative amount.

    Thousands separators are ignored. Empty, non-numeric, negative and
    non-finite entries all become 0 so nothing downstream ever sees NaN.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        cleaned = str(text).replace(',', '')
        match = _NUMBER_PREFIX.match(cleaned)
        if not match:
            if cleaned.strip():
                logger.debug("Non-numeric amount %r treated as 0", text)
            return 0.0
        value = float(match.group(0))
    if not math.isfinite(value) or value < 0:
        logger.debug("Out-of-domain amount %r treated as 0", text)
        return 0.0
    return value


def normalize(raw_input: RawInput, details: Optional[GrowthDetails] = None) -> NormalizedIncome:
    """Express the entered amount in annual terms."""
    details = details or GrowthDetails()
    amount = parse_amount(raw_input.amount)
    if raw_input.mode == IncomeMode.HOURLY:
        return NormalizedIncome(annual_salary=amount * details.hours_per_year)
    return NormalizedIncome(annual_salary=amount)


def toggle_mode(raw_input: RawInput, new_mode: IncomeMode, details: Optional[GrowthDetails] = None) -> RawInput:
    """Re-express the entered amount in the unit of `new_mode`.

    Hourly amounts are rounded to cents and annual amounts to whole dollars.
    Toggling to the mode already selected returns the input unchanged.
    """
    if new_mode == raw_input.mode:
        return raw_input
    details = details or GrowthDetails()
    annual_salary = normalize(raw_input, details).annual_salary
    if new_mode == IncomeMode.HOURLY:
        amount = round(annual_salary / details.hours_per_year, 2)
    else:
        # Half-up, not banker's rounding
        amount = float(math.floor(annual_salary + 0.5))
    return RawInput(amount=amount, mode=new_mode)


def with_text(raw_input: RawInput, text) -> RawInput:
    """Replace the amount with parsed entry text, keeping the mode."""
    return replace(raw_input, amount=parse_amount(text))


def snap_to_slider(value: float, mode: IncomeMode, details: Optional[GrowthDetails] = None) -> float:
    """Clamp a slider position into the mode's range and snap it to the step grid."""
    details = details or GrowthDetails()
    slider = details.slider_range(mode)
    value = parse_amount(value)
    clamped = min(max(value, slider.minimum), slider.maximum)
    steps = math.floor((clamped - slider.minimum) / slider.step + 0.5)
    snapped = slider.minimum + steps * slider.step
    return float(min(snapped, slider.maximum))


def with_slider(raw_input: RawInput, value: float, details: Optional[GrowthDetails] = None) -> RawInput:
    """Replace the amount with a snapped slider position, keeping the mode."""
    return replace(raw_input, amount=snap_to_slider(value, raw_input.mode, details))
