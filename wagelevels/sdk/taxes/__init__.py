"""taxes - Take-home pay calculation.

Scope:
- Federal progressive brackets, flat state rates, flat payroll (FICA) rate
- Take-home breakdown for a gross annual salary in a state

Constraints:
- Pure calculation - rules are passed in, never read from ambient state
- Year-specific rules loaded from reference_data/tax_rules/{year}.yaml

Usage:
    from wagelevels.sdk.taxes import TaxEngine, load_tax_rules

    engine = TaxEngine(load_tax_rules("2024"))
    breakdown = engine.take_home(108000, "TX")
"""

from .schemas import TaxBracket, TaxRules

from .takehome import (
    TaxEngine,
    load_tax_rules,
    get_available_years,
    calculate_federal_income_tax,
)

__all__ = [
    "TaxBracket",
    "TaxRules",
    "TaxEngine",
    "load_tax_rules",
    "get_available_years",
    "calculate_federal_income_tax",
]
