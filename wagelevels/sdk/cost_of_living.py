"""Cost-of-living index by area code (100 = national average)."""

import json
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

NATIONAL_AVERAGE = 100.0


class CostOfLivingIndex:
    """Read-only area -> COL index lookup. Unknown areas get the national average."""

    def __init__(self, indices: Optional[Mapping[str, float]] = None):
        clean = {}
        for area, value in (indices or {}).items():
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.debug(f"COL index for {area} is not a number: {value!r}")
                continue
            if math.isfinite(value) and value > 0:
                clean[str(area)] = value
        self._indices = MappingProxyType(clean)

    def get(self, area_code: Optional[str]) -> float:
        if not area_code:
            return NATIONAL_AVERAGE
        return self._indices.get(str(area_code), NATIONAL_AVERAGE)

    def __contains__(self, area_code: str) -> bool:
        return area_code in self._indices

    def __len__(self) -> int:
        return len(self._indices)


def load_col_index(path: Path) -> CostOfLivingIndex:
    """Load a COL index file.

    Accepts {"area": {"colIndex": 112.5, ...}} or {"area": 112.5}. A missing
    or unreadable file is logged and yields an empty index.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Cost of living data not found: {path} (using national average)")
        return CostOfLivingIndex()
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load cost of living data from {path}: {e}")
        return CostOfLivingIndex()

    if not isinstance(data, dict):
        logger.error(f"Cost of living data in {path} is not an object")
        return CostOfLivingIndex()

    indices = {}
    for area, entry in data.items():
        indices[area] = entry.get("colIndex") if isinstance(entry, dict) else entry

    index = CostOfLivingIndex(indices)
    logger.debug(f"Cost of living data loaded: {len(index)} areas")
    return index
