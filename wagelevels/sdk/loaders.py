"""Build runtime engines from the configured data directory and bundled tables."""

import random
from typing import List, Optional

from .config import get_col_index_path, get_occupations_path, get_setting, get_wages_path
from .comparison import ComparisonEngine
from .cost_of_living import CostOfLivingIndex, load_col_index
from .levels import LevelClassifier
from .reference import load_reference_data
from .regional import RegionalModel
from .schemas import OccupationRecord
from .taxes import TaxEngine, load_tax_rules
from .wage_table import WageTable, load_catalog


def load_wage_table() -> WageTable:
    return WageTable.load(get_wages_path())


def load_occupations() -> List[OccupationRecord]:
    return load_catalog(get_occupations_path())


def load_configured_col_index() -> CostOfLivingIndex:
    return load_col_index(get_col_index_path())


def build_level_classifier(
    wage_table: Optional[WageTable] = None,
    rng: Optional[random.Random] = None,
) -> LevelClassifier:
    """LevelClassifier over the generated wage table and bundled regional model."""
    reference = load_reference_data()
    if wage_table is None:
        wage_table = load_wage_table()
    return LevelClassifier(wage_table, RegionalModel.from_reference(reference, rng=rng), reference)


def build_tax_engine(year: Optional[str] = None) -> TaxEngine:
    """TaxEngine for a year (default: settings "tax_year", else latest bundled)."""
    return TaxEngine(load_tax_rules(year or get_setting("tax_year")))


def build_comparison_engine(
    year: Optional[str] = None,
    col_index: Optional[CostOfLivingIndex] = None,
) -> ComparisonEngine:
    if col_index is None:
        col_index = load_configured_col_index()
    return ComparisonEngine(build_tax_engine(year), col_index)
