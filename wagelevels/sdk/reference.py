"""Bundled reference tables: states, FIPS codes and the regional threshold model.

The tables ship as YAML under reference_data/ and are loaded once per process.
Engines receive the loaded ReferenceData explicitly rather than reading it
from module globals.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


def _get_reference_dir() -> Path:
    """Get the reference_data directory path."""
    return Path(__file__).parent.parent / "reference_data"


class State(BaseModel):
    """A US state (or DC)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(..., min_length=2, max_length=2)
    name: str
    fips: str = Field(..., pattern=r"^\d{2}$")


class BaseThresholds(BaseModel):
    """Synthetic levels 1-3 (the regional model has no level 4)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    level1: int = Field(..., ge=0)
    level2: int = Field(..., ge=0)
    level3: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_ordering(self) -> "BaseThresholds":
        if not self.level1 <= self.level2 <= self.level3:
            raise ValueError("base thresholds must be non-decreasing")
        return self

    def as_tuple(self) -> tuple:
        return (self.level1, self.level2, self.level3)


class RegionalConfig(BaseModel):
    """Parameters of the synthetic regional model."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_thresholds: BaseThresholds
    regional_multipliers: Dict[str, float] = Field(default_factory=dict)
    sub_area_spread: float = Field(0.10, ge=0, lt=1)


class ReferenceData(BaseModel):
    """All bundled lookup tables."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    states: List[State]
    regional: RegionalConfig

    @property
    def fips_to_state(self) -> Dict[str, str]:
        return {s.fips: s.code for s in self.states}

    def state_name(self, state_code: Optional[str]) -> Optional[str]:
        for s in self.states:
            if s.code == state_code:
                return s.name
        return None

    def state_for_fips(self, fips: Optional[str]) -> Optional[str]:
        """State code for a state or county FIPS code (first two digits)."""
        if not fips:
            return None
        return self.fips_to_state.get(str(fips).strip()[:2])

    def resolve_state(self, state_code: Optional[str] = None, sub_area_id: Optional[str] = None) -> Optional[str]:
        """Resolve a state code from an explicit code or a county FIPS sub-area id."""
        if state_code:
            return state_code.strip().upper()
        return self.state_for_fips(sub_area_id)


def _load_yaml(name: str) -> dict:
    config_file = _get_reference_dir() / name
    if not config_file.exists():
        raise FileNotFoundError(f"Reference data file not found: {config_file}")
    with open(config_file, "r") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    """Load and validate the bundled reference tables (cached)."""
    return ReferenceData(
        states=_load_yaml("states.yaml")["states"],
        regional=_load_yaml("regional.yaml"),
    )
