import os
import sys
import math
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from model.IncomeInput import IncomeMode, RawInput
from model.GapFigures import GapFigures
from tax.GrowthDetails import GrowthDetails
from calc.gap_calculator import GapCalculator, compute


def test_standard_salary_breakdown():
    figures = compute(RawInput(65000, IncomeMode.ANNUAL))

    # 65000 * 0.09 = 5850 tax burden at the base-year rate
    assert math.isclose(figures.tax_burden, 5850, rel_tol=1e-9)
    # 5850 * 1.32 = 7722 if spending had tracked inflation
    assert math.isclose(figures.fair_cost, 7722, rel_tol=1e-9)
    # 5850 * 2.30 = 13455 at the actual budget growth
    assert math.isclose(figures.actual_cost, 13455, rel_tol=1e-9)
    # 13455 - 7722 = 5733
    assert math.isclose(figures.gap, 5733, rel_tol=1e-9)
    assert math.isclose(figures.gap_per_hour, 5733 / 2080, rel_tol=1e-9)


def test_hourly_input_is_annualized():
    hourly = compute(RawInput(31.25, IncomeMode.HOURLY))
    annual = compute(RawInput(65000, IncomeMode.ANNUAL))
    assert math.isclose(hourly.annual_salary, 65000, rel_tol=1e-12)
    assert math.isclose(hourly.gap, annual.gap, rel_tol=1e-12)


def test_compute_is_pure():
    raw = RawInput(87654.32, IncomeMode.ANNUAL)
    calculator = GapCalculator()
    assert calculator.compute(raw) == calculator.compute(raw)


def test_zero_income_gives_zero_figures():
    figures = compute(RawInput(0, IncomeMode.ANNUAL))
    assert figures == GapFigures()


def test_invalid_amount_is_treated_as_zero():
    figures = compute(RawInput(float('nan'), IncomeMode.HOURLY))
    assert figures.gap == 0
    figures = compute(RawInput(-5000, IncomeMode.ANNUAL))
    assert figures.gap == 0


def test_figures_increase_with_salary():
    previous = compute(RawInput(30000, IncomeMode.ANNUAL))
    for salary in (30001, 45000, 65000, 120000, 250000, 10_000_000):
        current = compute(RawInput(salary, IncomeMode.ANNUAL))
        assert current.tax_burden > previous.tax_burden
        assert current.fair_cost > previous.fair_cost
        assert current.actual_cost > previous.actual_cost
        assert current.gap > previous.gap
        previous = current


def test_alternate_scenario_details():
    details = GrowthDetails(tax_rate=0.10, inflation_factor=1.5, reference_growth_factor=2.0, hours_per_year=2000)
    figures = GapCalculator(details).compute(RawInput(50, IncomeMode.HOURLY))

    # 50/hr * 2000 = 100000; tax 10000; fair 15000; actual 20000
    assert math.isclose(figures.annual_salary, 100000)
    assert math.isclose(figures.gap, 5000)
    assert math.isclose(figures.gap_per_hour, 2.5)


def test_gap_negative_when_growth_below_inflation():
    details = GrowthDetails(inflation_factor=1.5, reference_growth_factor=1.2)
    figures = GapCalculator(details).compute(RawInput(100000, IncomeMode.ANNUAL))
    assert figures.gap < 0
