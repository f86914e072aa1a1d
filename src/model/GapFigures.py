from dataclasses import dataclass


@dataclass(frozen=True)
class GapFigures:
    """Figures derived from a normalized annual income.

    All values are recomputed on every input change; nothing here is stored
    or mutated independently.
    """
    annual_salary: float = 0.0
    tax_burden: float = 0.0   # Estimated state tax paid at the base-year rate
    fair_cost: float = 0.0    # Tax burden had spending grown with inflation
    actual_cost: float = 0.0  # Tax burden at the actual budget growth
    gap: float = 0.0          # actual_cost - fair_cost
    gap_per_hour: float = 0.0


@dataclass(frozen=True)
class OpportunityEquivalent:
    """How many units of an everyday expense the gap would buy."""
    label: str
    cost: float
    quantity: int
