import os
import json
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from model.IncomeInput import IncomeMode, SliderRange


logger = logging.getLogger(__name__)

# Path to the bundled reference file (at workspace root)
REFERENCE_PATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..', 'reference', 'growth-details.json'))

# Environment variable that points at an alternate reference file
REFERENCE_ENV_VAR = 'BUDGET_GAP_REFERENCE'

DEFAULT_SLIDER_RANGES: Tuple[Tuple[IncomeMode, SliderRange], ...] = (
    (IncomeMode.ANNUAL, SliderRange(30000, 250000, 1000)),
    (IncomeMode.HOURLY, SliderRange(15, 100, 0.5)),
)

DEFAULT_OPPORTUNITY_ITEMS: Tuple[Tuple[str, float], ...] = (
    ("Tanks of Gas", 65),
    ("Weeks of Groceries", 250),
    ("Months of Rent", 1800),
)


@dataclass(frozen=True)
class GrowthDetails:
    """Immutable rates and factors the gap calculation runs on.

    The defaults are the base-year state tax rate, the cumulative inflation
    since the base year (+32%) and the cumulative budget growth (+130%).
    Pass a different instance into `GapCalculator` to try other scenarios.
    """
    base_year: int = 2015
    tax_rate: float = 0.09
    inflation_factor: float = 1.32
    reference_growth_factor: float = 2.30
    hours_per_year: int = 2080
    animation_duration_ms: float = 300
    slider_ranges: Tuple[Tuple[IncomeMode, SliderRange], ...] = DEFAULT_SLIDER_RANGES
    opportunity_items: Tuple[Tuple[str, float], ...] = DEFAULT_OPPORTUNITY_ITEMS

    def slider_range(self, mode: IncomeMode) -> SliderRange:
        return dict(self.slider_ranges)[mode]

    @classmethod
    def from_dict(cls, data: dict) -> 'GrowthDetails':
        """Build from the camelCase layout used by the reference file.

        Raises:
            ValueError: if a required key is missing or a factor is not positive.
        """
        values = {}
        for key, attr in (('taxRate', 'tax_rate'),
                          ('inflationFactor', 'inflation_factor'),
                          ('referenceGrowthFactor', 'reference_growth_factor'),
                          ('hoursPerYear', 'hours_per_year')):
            if key not in data:
                raise ValueError(f"growth details must contain '{key}'")
            value = data[key]
            if not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"'{key}' must be a positive number, got {value!r}")
            values[attr] = value

        values['base_year'] = data.get('baseYear', 2015)
        values['animation_duration_ms'] = data.get('animationDurationMs', 300)

        sliders = dict(DEFAULT_SLIDER_RANGES)
        for mode_name, bounds in data.get('sliderRanges', {}).items():
            for key in ('min', 'max', 'step'):
                if key not in bounds:
                    raise ValueError(f"slider range '{mode_name}' must contain '{key}'")
            sliders[IncomeMode.parse(mode_name)] = SliderRange(bounds['min'], bounds['max'], bounds['step'])
        values['slider_ranges'] = tuple(sliders.items())

        items = data.get('opportunityItems')
        if items is not None:
            for index, item in enumerate(items):
                for key in ('label', 'cost'):
                    if key not in item:
                        raise ValueError(f"opportunity item {index} must contain '{key}'")
            values['opportunity_items'] = tuple((item['label'], item['cost']) for item in items)

        return cls(**values)

    @classmethod
    def from_reference(cls, path: Optional[str] = None) -> 'GrowthDetails':
        """Load details from a reference JSON file.

        Resolution order: the `path` argument, then the BUDGET_GAP_REFERENCE
        environment variable, then `reference/growth-details.json`.
        """
        ref_path = path or os.environ.get(REFERENCE_ENV_VAR) or REFERENCE_PATH
        with open(ref_path, 'r') as f:
            data = json.load(f)
        logger.debug("Loaded growth details from %s", ref_path)
        return cls.from_dict(data)
