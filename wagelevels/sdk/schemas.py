"""Pydantic schemas for wage-levels data.

All schemas use extra='forbid' to reject unknown fields. Records built by the
data pipeline are frozen so nothing mutates them after construction.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Catalog and wage table records
# =============================================================================


class OccupationRecord(BaseModel):
    """An occupation from the catalog (SOC code + title)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(..., min_length=1, description="SOC code, e.g. '15-1252'")
    title: str = Field(..., min_length=1, description="Occupation title")


class WageThresholds(BaseModel):
    """Annual prevailing wage thresholds for the four wage levels.

    All four values are required together and must be non-decreasing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    level1: int = Field(..., ge=0)
    level2: int = Field(..., ge=0)
    level3: int = Field(..., ge=0)
    level4: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_ordering(self) -> "WageThresholds":
        values = self.as_list()
        if any(a > b for a, b in zip(values, values[1:])):
            raise ValueError(f"wage thresholds must be non-decreasing: {values}")
        return self

    @classmethod
    def from_list(cls, values: List[int]) -> "WageThresholds":
        if len(values) != 4:
            raise ValueError(f"expected 4 wage thresholds, got {len(values)}")
        return cls(level1=values[0], level2=values[1], level3=values[2], level4=values[3])

    def as_list(self) -> List[int]:
        return [self.level1, self.level2, self.level3, self.level4]

    @property
    def classification_thresholds(self) -> tuple:
        """Levels 1-3, the thresholds used for 0-3 classification."""
        return (self.level1, self.level2, self.level3)


class PipelineStats(BaseModel):
    """Counters reported by a data pipeline run."""

    model_config = ConfigDict(extra="forbid")

    occupation_rows: int = 0
    occupations_loaded: int = 0
    wage_rows: int = 0
    wage_entries: int = 0
    areas: int = 0
    malformed_rows: int = 0
    catalog_size: int = 0


# =============================================================================
# Classification
# =============================================================================


class ClassificationResult(BaseModel):
    """Wage level for a salary at a location, with the thresholds used."""

    model_config = ConfigDict(extra="forbid")

    salary: int = Field(..., ge=0)
    level: int = Field(..., ge=0, le=3)
    label: str
    thresholds: List[int] = Field(..., min_length=3, max_length=3)
    level4: Optional[int] = Field(
        None, description="Level 4 threshold, only when a wage table entry was used"
    )
    source: Literal["wage_table", "regional_model"]
    state_code: Optional[str] = None
    area_code: Optional[str] = None


# =============================================================================
# Taxes and comparisons
# =============================================================================


class TaxBreakdown(BaseModel):
    """Take-home pay breakdown for a gross annual salary."""

    model_config = ConfigDict(extra="forbid")

    gross: float = 0
    taxable_income: float = 0
    federal_tax: int = 0
    state_tax: int = 0
    payroll_tax: int = 0
    total_tax: int = 0
    take_home: float = 0
    effective_rate: float = Field(0.0, description="Total tax as a percent of gross")


class LocationBreakdown(TaxBreakdown):
    """Take-home breakdown at a location, normalized by cost of living."""

    area_code: Optional[str] = None
    state_code: Optional[str] = None
    col_index: float = 100.0
    purchasing_power: int = 0


class ComparisonResult(BaseModel):
    """Purchasing power comparison between two locations."""

    model_config = ConfigDict(extra="forbid")

    location1: LocationBreakdown
    location2: LocationBreakdown
    difference: int = Field(..., description="Purchasing power of location2 minus location1")
    percent_difference: float


class SalaryGaps(BaseModel):
    """Distance from a salary to each of the four wage level thresholds."""

    model_config = ConfigDict(extra="forbid")

    salary: int
    gaps: List[int] = Field(..., min_length=4, max_length=4)
    current_level: int = Field(..., ge=0, le=4)
    thresholds: WageThresholds


class ColAdjustment(BaseModel):
    """A salary translated between two cost-of-living areas."""

    model_config = ConfigDict(extra="forbid")

    original: float
    adjusted: int
    from_col: float
    to_col: float
    percent_change: float
