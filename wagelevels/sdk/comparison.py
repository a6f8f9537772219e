"""Salary gap, cost-of-living and take-home comparisons.

salary_gaps() uses all four wage levels (0-4), unlike the 0-3 scheme of the
level classifier, since a full wage table entry includes level 4.
"""

import math
from typing import Optional

from .cost_of_living import CostOfLivingIndex
from .money import clamp_salary, round_to_dollar
from .schemas import (
    ColAdjustment,
    ComparisonResult,
    LocationBreakdown,
    SalaryGaps,
    WageThresholds,
)
from .taxes import TaxEngine


def salary_gaps(current_salary: float, thresholds: WageThresholds) -> SalaryGaps:
    """Dollars needed to reach each wage level, and the level already reached.

    Levels are compared against the unrounded salary; a gap of any fraction
    of a dollar is reported as a whole dollar.
    """
    salary = clamp_salary(current_salary)
    values = thresholds.as_list()

    current_level = 0
    for index, threshold in enumerate(values, start=1):
        if salary >= threshold:
            current_level = index

    return SalaryGaps(
        salary=int(salary),
        gaps=[max(0, math.ceil(threshold - salary)) for threshold in values],
        current_level=current_level,
        thresholds=thresholds,
    )


def adjust_for_col(
    salary: float,
    from_area: Optional[str],
    to_area: Optional[str],
    index: CostOfLivingIndex,
) -> ColAdjustment:
    """Salary needed in to_area for the same standing as salary in from_area."""
    salary = clamp_salary(salary)
    from_col = index.get(from_area)
    to_col = index.get(to_area)

    return ColAdjustment(
        original=salary,
        adjusted=round_to_dollar(salary * (to_col / from_col)),
        from_col=from_col,
        to_col=to_col,
        percent_change=round((to_col - from_col) / from_col * 100, 1),
    )


class ComparisonEngine:
    """Compares take-home pay between locations in cost-of-living terms."""

    def __init__(self, tax_engine: TaxEngine, col_index: CostOfLivingIndex):
        self.tax_engine = tax_engine
        self.col_index = col_index

    def _purchasing_power(self, salary: float, area_code: Optional[str], state_code: Optional[str]):
        breakdown = self.tax_engine.take_home(salary, state_code)
        col = self.col_index.get(area_code)
        power = breakdown.take_home / col * 100
        located = LocationBreakdown(
            **breakdown.model_dump(),
            area_code=area_code,
            state_code=state_code,
            col_index=col,
            purchasing_power=round_to_dollar(power),
        )
        return located, power

    def compare_take_home(
        self,
        salary: float,
        area1: Optional[str],
        state1: Optional[str],
        area2: Optional[str],
        state2: Optional[str],
    ) -> ComparisonResult:
        """Compare purchasing power of the same salary in two locations.

        difference is location2 minus location1, so swapping the locations
        negates it. percent_difference is relative to location1.
        """
        location1, power1 = self._purchasing_power(salary, area1, state1)
        location2, power2 = self._purchasing_power(salary, area2, state2)

        delta = power2 - power1
        percent = round(delta / power1 * 100, 1) if power1 > 0 else 0.0

        return ComparisonResult(
            location1=location1,
            location2=location2,
            difference=round_to_dollar(delta),
            percent_difference=percent,
        )
