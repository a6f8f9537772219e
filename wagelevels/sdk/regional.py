"""Synthetic regional wage thresholds.

Used when the wage table has no entry for a location. Thresholds come from a
base schedule scaled by a per-state cost multiplier and a bounded per-sub-area
(county) variation:

    county_multiplier = 1 + (variation - 0.5) * 2 * spread     # spread 0.10 -> +/-10%
    threshold         = round(base * state_multiplier * county_multiplier)

Each sub-area's variation is drawn once, uniformly in [0, 1), and remembered
for the life of the model so repeated lookups never jitter.
"""

import random
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .money import round_to_dollar
from .reference import ReferenceData

NEUTRAL_VARIATION = 0.5
DEFAULT_MULTIPLIER = 1.0


class RegionalModel:
    """Threshold generator keyed by state code and sub-area id."""

    def __init__(
        self,
        base_thresholds: Tuple[int, int, int],
        regional_multipliers: Optional[Mapping[str, float]] = None,
        sub_area_spread: float = 0.10,
        rng: Optional[random.Random] = None,
        variations: Optional[Mapping[str, float]] = None,
    ):
        self.base_thresholds = tuple(base_thresholds)
        self.regional_multipliers = MappingProxyType(dict(regional_multipliers or {}))
        self.sub_area_spread = sub_area_spread
        self._rng = rng or random.Random()
        self._variations: Dict[str, float] = {}
        self._lock = threading.Lock()
        for sub_area_id, value in (variations or {}).items():
            if not 0 <= value < 1:
                raise ValueError(f"variation for {sub_area_id} must be in [0, 1), got {value}")
            self._variations[str(sub_area_id)] = value

    @classmethod
    def from_reference(cls, reference: ReferenceData, rng: Optional[random.Random] = None) -> "RegionalModel":
        regional = reference.regional
        return cls(
            base_thresholds=regional.base_thresholds.as_tuple(),
            regional_multipliers=regional.regional_multipliers,
            sub_area_spread=regional.sub_area_spread,
            rng=rng,
        )

    @property
    def variations(self) -> Mapping[str, float]:
        """Read-only snapshot of the memoized sub-area variations."""
        with self._lock:
            return MappingProxyType(dict(self._variations))

    def state_multiplier(self, state_code: Optional[str]) -> float:
        if not state_code:
            return DEFAULT_MULTIPLIER
        return self.regional_multipliers.get(state_code.upper(), DEFAULT_MULTIPLIER)

    def variation(self, sub_area_id: Optional[str]) -> float:
        """Variation for a sub-area, drawn and stored on first access.

        A missing sub-area id uses the neutral value without caching anything.
        """
        if sub_area_id is None or sub_area_id == "":
            return NEUTRAL_VARIATION
        key = str(sub_area_id)
        with self._lock:
            value = self._variations.get(key)
            if value is None:
                value = self._rng.random()
                self._variations[key] = value
            return value

    def adjusted_multiplier(self, state_code: Optional[str], sub_area_id: Optional[str]) -> float:
        county_multiplier = 1 + (self.variation(sub_area_id) - 0.5) * 2 * self.sub_area_spread
        return self.state_multiplier(state_code) * county_multiplier

    def thresholds(self, state_code: Optional[str], sub_area_id: Optional[str] = None) -> Tuple[int, int, int]:
        """Levels 1-3 for a state and sub-area."""
        multiplier = self.adjusted_multiplier(state_code, sub_area_id)
        return tuple(round_to_dollar(base * multiplier) for base in self.base_thresholds)
