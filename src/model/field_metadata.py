"""Field metadata for GapFigures fields.

Short names are used as labels in the summary block, the ticker line and
the shell 'fields' command. Precision picks the currency formatter: 0 for
whole-dollar figures, 2 for per-hour figures.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Label (unique, concise)
    description: str  # Full description of the field
    precision: int = 0  # Decimal places when formatted as currency


FIELD_METADATA: Dict[str, FieldInfo] = {
    "annual_salary": FieldInfo("Annual Salary", "Income expressed in annual terms"),
    "tax_burden": FieldInfo("Tax Burden", "Estimated state tax paid at the base-year rate"),
    "fair_cost": FieldInfo("Fair Cost", "Tax burden if spending had grown with inflation"),
    "actual_cost": FieldInfo("Actual Cost", "Tax burden at the actual budget growth"),
    "gap": FieldInfo("Excess Cost", "Actual cost minus fair cost, per year"),
    "gap_per_hour": FieldInfo("Excess / Hour", "Excess cost per working hour", precision=2),
}

# Figures that get their own animated counter on screen
ANIMATED_FIELDS = ("gap", "fair_cost", "actual_cost")


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def get_field_info(field_name: str) -> FieldInfo | None:
    """Get the full FieldInfo for a field, or None if not found."""
    return FIELD_METADATA.get(field_name)
