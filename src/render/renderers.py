"""Renderer classes and formatters for displaying gap results.

Renderers take the computed `GapFigures` (or a dict of animated display
values) and handle all presentation; the calculators never print.
"""

import sys
from abc import ABC, abstractmethod
from typing import Dict, Optional, TextIO

from model.IncomeInput import IncomeMode
from model.GapFigures import GapFigures
from model.field_metadata import ANIMATED_FIELDS, get_short_name, get_field_info
from tax.GrowthDetails import GrowthDetails
from calc.opportunity_cost import opportunity_equivalents


SHARE_URL = "https://wa-budget-calc.vercel.app"


def format_money(value: float) -> str:
    """Whole-dollar currency string, e.g. $5,805 or -$12."""
    sign = "-" if value < 0 and round(abs(value)) != 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_cents(value: float) -> str:
    """Currency string with cents, e.g. $2.79."""
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_currency(value: float, precision: int = 0) -> str:
    """Format with 0 (whole dollars) or 2 (cents) decimal places."""
    return format_cents(value) if precision >= 2 else format_money(value)


def format_field(field_name: str, value: float) -> str:
    info = get_field_info(field_name)
    return format_currency(value, info.precision if info else 0)


def format_input_display(amount: float, mode: IncomeMode, focused: bool = False) -> str:
    """Text shown in the amount entry box.

    Blank for 0 so the placeholder shows, the bare number while the user is
    typing, and grouped digits otherwise (always two decimals when hourly).
    """
    if amount == 0:
        return ""
    if focused:
        return str(int(amount)) if float(amount).is_integer() else repr(float(amount))
    if mode == IncomeMode.HOURLY:
        return f"{amount:,.2f}"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


def build_share_text(gap: float, details: Optional[GrowthDetails] = None) -> str:
    """Message posted when the user shares their result."""
    details = details or GrowthDetails()
    growth_percent = round((details.reference_growth_factor - 1) * 100)
    return (f"The WA State budget grew {growth_percent}% since {details.base_year}. My salary didn't. "
            f"I'm losing {format_money(gap)}/yr in hidden \"Excess Spending Costs\". "
            f"See what you lost:")


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: GapFigures) -> None:
        """Render the data to output.

        Args:
            data: The computed gap figures
        """
        pass


class GapSummaryRenderer(BaseRenderer):
    """Renderer for the full gap breakdown."""

    def __init__(self, details: Optional[GrowthDetails] = None, mode: IncomeMode = IncomeMode.ANNUAL):
        self.details = details or GrowthDetails()
        self.mode = mode

    def render(self, data: GapFigures) -> None:
        print()
        print("=" * 60)
        print(f"{'THE COST OF RUNAWAY SPENDING':^60}")
        print("=" * 60)

        print()
        print("-" * 60)
        print("YOUR INCOME")
        print("-" * 60)
        print(f"  {get_short_name('annual_salary') + ':':<40} {format_money(data.annual_salary):>15}")
        if self.mode == IncomeMode.HOURLY:
            hourly = data.annual_salary / self.details.hours_per_year
            print(f"  {'Hourly Wage:':<40} {format_cents(hourly):>15}")
        print(f"  {get_short_name('tax_burden') + ':':<40} {format_money(data.tax_burden):>15}")

        print()
        print("-" * 60)
        print("WHAT YOU PAY")
        print("-" * 60)
        inflation_pct = (self.details.inflation_factor - 1) * 100
        growth_pct = (self.details.reference_growth_factor - 1) * 100
        fair_label = f"Fair Cost (inflation +{inflation_pct:.0f}%):"
        actual_label = f"Actual Cost (budget +{growth_pct:.0f}%):"
        print(f"  {fair_label:<40} {format_money(data.fair_cost):>15}")
        print(f"  {actual_label:<40} {format_money(data.actual_cost):>15}")
        print(f"  {'-' * 56}")
        print(f"  {get_short_name('gap') + ' per Year:':<40} {format_money(data.gap):>15}")
        print(f"  {get_short_name('gap') + ' per Hour:':<40} {format_cents(data.gap_per_hour):>15}")

        print()
        print("-" * 60)
        print("WHAT THAT COULD BUY")
        print("-" * 60)
        for item in opportunity_equivalents(data.gap, self.details.opportunity_items):
            print(f"  {item.label + ':':<40} {item.quantity:>15,}  (@ {format_money(item.cost)}/ea)")
        print()


class ShareTextRenderer(BaseRenderer):
    """Renderer that prints the share message and link."""

    def __init__(self, details: Optional[GrowthDetails] = None, mode: IncomeMode = IncomeMode.ANNUAL):
        self.details = details or GrowthDetails()
        self.mode = mode

    def render(self, data: GapFigures) -> None:
        print(f"{build_share_text(data.gap, self.details)} {SHARE_URL}")


class TickerRenderer:
    """Single carriage-return-updated line of animated figures."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def format_line(self, display_values: Dict[str, int]) -> str:
        parts = []
        for name in ANIMATED_FIELDS:
            if name in display_values:
                parts.append(f"{get_short_name(name)}: {format_field(name, display_values[name]):>10}")
        return "  " + "   ".join(parts)

    def render(self, display_values: Dict[str, int]) -> None:
        self.stream.write("\r" + self.format_line(display_values))
        self.stream.flush()

    def finish(self) -> None:
        self.stream.write("\n")
        self.stream.flush()


RENDERER_REGISTRY = {
    'summary': GapSummaryRenderer,
    'share': ShareTextRenderer,
}
