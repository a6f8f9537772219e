"""Wage level classification.

A salary is classified against three thresholds into level 0-3: the highest
level whose threshold the salary meets or exceeds, 0 when below level 1.
Thresholds come from the wage table when it has an entry for the location's
area and occupation, otherwise from the regional model.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .money import clamp_salary
from .reference import ReferenceData
from .regional import RegionalModel
from .schemas import ClassificationResult, WageThresholds
from .wage_table import WageTable

LEVEL_LABELS = ["Below Level 1", "Level 1", "Level 2", "Level 3"]

ThresholdsLike = Union[WageThresholds, Sequence[int]]


def _level_thresholds(thresholds: ThresholdsLike) -> Tuple[int, int, int]:
    if isinstance(thresholds, WageThresholds):
        return thresholds.classification_thresholds
    values = tuple(thresholds)
    if len(values) < 3:
        raise ValueError(f"expected at least 3 thresholds, got {len(values)}")
    return values[:3]


def classify(salary: float, thresholds: ThresholdsLike) -> int:
    """Wage level 0-3 for a salary. Negative and non-finite salaries count as 0."""
    salary = clamp_salary(salary)
    level = 0
    for index, threshold in enumerate(_level_thresholds(thresholds), start=1):
        if salary >= threshold:
            level = index
    return level


@dataclass(frozen=True)
class Location:
    """Geography for a lookup.

    state_code and area_code are separate code spaces: the state drives the
    regional model and taxes, the area drives wage table and COL lookups.
    sub_area_id is a county FIPS code; its first two digits resolve the state
    when state_code is not given.
    """

    state_code: Optional[str] = None
    sub_area_id: Optional[str] = None
    area_code: Optional[str] = None


@dataclass(frozen=True)
class ResolvedThresholds:
    """Thresholds chosen for a location, with where they came from."""

    thresholds: Tuple[int, int, int]
    source: str
    state_code: Optional[str] = None
    area_code: Optional[str] = None
    level4: Optional[int] = None


class LevelClassifier:
    """Classifies salaries at locations using the wage table or regional model."""

    def __init__(self, wage_table: WageTable, regional_model: RegionalModel, reference: ReferenceData):
        self.wage_table = wage_table
        self.regional_model = regional_model
        self.reference = reference

    def thresholds_for(self, location: Location, occupation_code: Optional[str] = None) -> ResolvedThresholds:
        """Thresholds used to classify a salary at this location."""
        state_code = self.reference.resolve_state(location.state_code, location.sub_area_id)

        entry = self.wage_table.get(location.area_code, occupation_code)
        if entry is not None:
            return ResolvedThresholds(
                thresholds=entry.classification_thresholds,
                source="wage_table",
                state_code=state_code,
                area_code=location.area_code,
                level4=entry.level4,
            )

        return ResolvedThresholds(
            thresholds=self.regional_model.thresholds(state_code, location.sub_area_id),
            source="regional_model",
            state_code=state_code,
            area_code=location.area_code,
        )

    def classify_location(
        self,
        salary: float,
        location: Location,
        occupation_code: Optional[str] = None,
    ) -> ClassificationResult:
        resolved = self.thresholds_for(location, occupation_code)
        salary = clamp_salary(salary)
        level = classify(salary, resolved.thresholds)
        return ClassificationResult(
            salary=int(salary),
            level=level,
            label=LEVEL_LABELS[level],
            thresholds=list(resolved.thresholds),
            level4=resolved.level4,
            source=resolved.source,
            state_code=resolved.state_code,
            area_code=resolved.area_code,
        )
