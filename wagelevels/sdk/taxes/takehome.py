"""Take-home pay calculations.

Federal tax uses progressive brackets, state tax a flat rate on taxable income,
and payroll (FICA) a flat rate on gross wages. Rules are loaded from
reference_data/tax_rules/YYYY.yaml.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from ..money import clamp_salary, round_to_dollar
from ..schemas import TaxBreakdown
from .schemas import TaxBracket, TaxRules

logger = logging.getLogger(__name__)


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "reference_data" / "tax_rules"


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def load_tax_rules(year: Optional[Union[str, int]] = None) -> TaxRules:
    """Load tax rules for a year, falling back to the nearest prior year.

    Args:
        year: Tax year (e.g. "2024"). None selects the latest bundled year.

    Raises:
        FileNotFoundError: If no rules file exists at or before the year
    """
    available = get_available_years()
    if year is None:
        candidates = available
    else:
        candidates = [y for y in available if y <= int(year)]

    if not candidates:
        raise FileNotFoundError(
            f"Tax rules not found for year {year} in {_get_tax_rules_dir()}"
        )

    chosen = candidates[0]
    if year is not None and chosen != int(year):
        logger.debug(f"tax rules: no {year}.yaml, using {chosen}")

    with open(_get_tax_rules_dir() / f"{chosen}.yaml", "r") as f:
        return TaxRules.model_validate(yaml.safe_load(f))


def calculate_federal_income_tax(taxable_income: float, tax_brackets: list[TaxBracket]) -> float:
    """Calculate federal income tax based on taxable income and tax brackets."""
    tax_owed = 0.0
    previous_bracket_max = 0.0

    for bracket in sorted(tax_brackets, key=lambda b: b.upper_bound):
        if taxable_income <= previous_bracket_max:
            break
        income_in_this_bracket = min(taxable_income, bracket.upper_bound) - previous_bracket_max
        tax_owed += income_in_this_bracket * bracket.rate
        previous_bracket_max = bracket.upper_bound

    return tax_owed


class TaxEngine:
    """Computes take-home pay from a fixed set of tax rules."""

    def __init__(self, rules: TaxRules):
        self.rules = rules

    def federal_tax(self, taxable_income: float) -> float:
        return calculate_federal_income_tax(taxable_income, self.rules.federal_brackets)

    def take_home(self, gross_salary: float, state_code: Optional[str]) -> TaxBreakdown:
        """Full take-home breakdown for an annual gross salary.

        A non-positive or non-finite gross yields an all-zero breakdown.
        take_home is derived from the rounded total so take_home + total_tax == gross.
        """
        gross_salary = clamp_salary(gross_salary)
        if gross_salary <= 0:
            return TaxBreakdown()

        taxable_income = max(0, gross_salary - self.rules.standard_deduction)
        federal = self.federal_tax(taxable_income)
        state = taxable_income * self.rules.state_rate(state_code)
        payroll = gross_salary * self.rules.fica_rate
        total = federal + state + payroll
        total_tax = round_to_dollar(total)

        return TaxBreakdown(
            gross=gross_salary,
            taxable_income=taxable_income,
            federal_tax=round_to_dollar(federal),
            state_tax=round_to_dollar(state),
            payroll_tax=round_to_dollar(payroll),
            total_tax=total_tax,
            take_home=gross_salary - total_tax,
            effective_rate=round(total / gross_salary * 100, 1),
        )
