"""Pydantic schemas for tax rules validation.

These schemas validate the reference_data/tax_rules/*.yaml files and provide
typed access to the standard deduction, brackets and flat rates.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, description="Upper bound (None for the top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def upper_bound(self) -> float:
        return float("inf") if self.up_to is None else self.up_to


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    standard_deduction: float = Field(..., ge=0)
    fica_rate: float = Field(..., ge=0, le=1, description="Payroll (SS + Medicare) rate on gross")
    federal_brackets: list[TaxBracket]
    state_rates: Dict[str, float] = Field(default_factory=dict)

    @field_validator("federal_brackets")
    @classmethod
    def check_brackets(cls, brackets: list[TaxBracket]) -> list[TaxBracket]:
        if not brackets:
            raise ValueError("at least one federal bracket is required")
        bounds = [b.upper_bound for b in brackets]
        if any(a >= b for a, b in zip(bounds, bounds[1:])):
            raise ValueError("federal bracket bounds must be strictly increasing")
        if bounds[-1] != float("inf"):
            raise ValueError("last federal bracket must be unbounded")
        return brackets

    @field_validator("state_rates")
    @classmethod
    def check_state_rates(cls, rates: Dict[str, float]) -> Dict[str, float]:
        for state, rate in rates.items():
            if not 0 <= rate <= 1:
                raise ValueError(f"state rate for {state} must be in [0, 1], got {rate}")
        return rates

    def state_rate(self, state_code: Optional[str]) -> float:
        """Flat state rate, 0 for unknown or no-tax states."""
        if not state_code:
            return 0.0
        return self.state_rates.get(state_code.upper(), 0.0)
