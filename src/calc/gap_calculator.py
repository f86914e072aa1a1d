from typing import Optional

from model.IncomeInput import RawInput
from model.GapFigures import GapFigures
from tax.GrowthDetails import GrowthDetails
from calc.income_normalizer import normalize


class GapCalculator:
    """Calculator for the excess cost of budget growth over inflation.

    Pass a `GrowthDetails` instance into the constructor; the calculation
    itself is pure and never raises, so it can be rerun on every keystroke.
    """

    def __init__(self, details: Optional[GrowthDetails] = None):
        self.details = details or GrowthDetails()

    def compute(self, raw_input: RawInput) -> GapFigures:
        annual_salary = normalize(raw_input, self.details).annual_salary

        # Tax paid at the base-year rate
        tax_burden = annual_salary * self.details.tax_rate

        # What that burden would be had spending only kept pace with inflation
        fair_cost = tax_burden * self.details.inflation_factor

        # What it is at the actual budget growth
        actual_cost = tax_burden * self.details.reference_growth_factor

        gap = actual_cost - fair_cost
        gap_per_hour = gap / self.details.hours_per_year

        return GapFigures(
            annual_salary=annual_salary,
            tax_burden=tax_burden,
            fair_cost=fair_cost,
            actual_cost=actual_cost,
            gap=gap,
            gap_per_hour=gap_per_hour,
        )


def compute(raw_input: RawInput, details: Optional[GrowthDetails] = None) -> GapFigures:
    """Compute the gap figures for one input with the given (or default) details."""
    return GapCalculator(details).compute(raw_input)
