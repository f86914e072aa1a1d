import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from model.GapFigures import OpportunityEquivalent
from tax.GrowthDetails import DEFAULT_OPPORTUNITY_ITEMS
from calc.opportunity_cost import opportunity_equivalents


def test_equivalents_for_standard_gap():
    # 5733 / 65 = 88.2, / 250 = 22.9, / 1800 = 3.2
    result = opportunity_equivalents(5733, DEFAULT_OPPORTUNITY_ITEMS)
    assert result == [
        OpportunityEquivalent("Tanks of Gas", 65, 88),
        OpportunityEquivalent("Weeks of Groceries", 250, 22),
        OpportunityEquivalent("Months of Rent", 1800, 3),
    ]


def test_zero_and_negative_gap_buy_nothing():
    for gap in (0, -100, float('nan')):
        assert all(e.quantity == 0 for e in opportunity_equivalents(gap, DEFAULT_OPPORTUNITY_ITEMS))


def test_free_items_are_skipped_without_error():
    result = opportunity_equivalents(1000, [("Free", 0)])
    assert result == [OpportunityEquivalent("Free", 0, 0)]
