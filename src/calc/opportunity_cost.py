import math
from typing import Iterable, List, Tuple

from model.GapFigures import OpportunityEquivalent


def opportunity_equivalents(gap: float, items: Iterable[Tuple[str, float]]) -> List[OpportunityEquivalent]:
    """Express the yearly gap as whole units of everyday expenses.

    Args:
        gap: The yearly excess cost.
        items: (label, unit cost) pairs, e.g. ("Tanks of Gas", 65).

    Returns:
        One OpportunityEquivalent per item, in the order given. Items with a
        non-positive cost and gaps that are not positive give a quantity of 0.
    """
    equivalents = []
    for label, cost in items:
        if cost > 0 and gap > 0 and math.isfinite(gap):
            quantity = math.floor(gap / cost)
        else:
            quantity = 0
        equivalents.append(OpportunityEquivalent(label=label, cost=cost, quantity=quantity))
    return equivalents
