"""Income input data model.

The user's entry is held as a single immutable `RawInput` (amount plus the
unit it is expressed in). Everything downstream is derived from it by pure
functions, so mode and amount can never drift out of sync.
"""

from dataclasses import dataclass
from enum import Enum


class IncomeMode(str, Enum):
    """Unit the entered amount is expressed in."""
    ANNUAL = 'annual'
    HOURLY = 'hourly'

    @classmethod
    def parse(cls, text: str) -> 'IncomeMode':
        """Look up a mode by its value or name, case-insensitive."""
        key = (text or '').strip().lower()
        for mode in cls:
            if key in (mode.value, mode.name.lower()):
                return mode
        raise ValueError(f"Unknown income mode: {text!r}")


@dataclass(frozen=True)
class RawInput:
    """The amount the user entered and the unit it is in."""
    amount: float = 0.0
    mode: IncomeMode = IncomeMode.ANNUAL


@dataclass(frozen=True)
class NormalizedIncome:
    """Income expressed in annual terms regardless of entry mode."""
    annual_salary: float = 0.0


@dataclass(frozen=True)
class SliderRange:
    """Bounded domain of the secondary slider input for one mode."""
    minimum: float
    maximum: float
    step: float
