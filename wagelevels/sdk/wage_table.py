"""Wage table and occupation catalog artifacts.

The wage table maps (area code, SOC code) to four annual wage thresholds.
It is built once by the data pipeline and is read-only afterwards. On disk it
is compact JSON shaped as area -> SOC code -> [w1, w2, w3, w4]; the catalog is
an indented JSON array of {code, title} objects.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .schemas import OccupationRecord, WageThresholds

logger = logging.getLogger(__name__)


class WageTable:
    """Immutable (area, occupation) -> WageThresholds index."""

    def __init__(self, entries: Optional[Mapping[Tuple[str, str], WageThresholds]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def get(self, area_code: Optional[str], occupation_code: Optional[str]) -> Optional[WageThresholds]:
        """Thresholds for an area/occupation pair, or None when the table has no entry."""
        if not area_code or not occupation_code:
            return None
        return self._entries.get((str(area_code), str(occupation_code)))

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries)

    def areas(self) -> List[str]:
        return sorted({area for area, _ in self._entries})

    def occupation_codes(self) -> List[str]:
        return sorted({code for _, code in self._entries})

    def to_dict(self) -> Dict[str, Dict[str, List[int]]]:
        """Nested area -> code -> [w1..w4] mapping, in insertion order."""
        nested: Dict[str, Dict[str, List[int]]] = {}
        for (area, code), thresholds in self._entries.items():
            nested.setdefault(area, {})[code] = thresholds.as_list()
        return nested

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, List[int]]]) -> "WageTable":
        entries = {}
        for area, occupations in data.items():
            for code, values in occupations.items():
                entries[(area, code)] = WageThresholds.from_list(values)
        return cls(entries)

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False))
        return path

    @classmethod
    def load(cls, path: Path) -> "WageTable":
        """Load a wage table written by save().

        A missing file yields an empty table so lookups fall back to the
        regional model.
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"Wage table not found: {path} (using regional model only)")
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


def save_catalog(catalog: List[OccupationRecord], path: Path) -> Path:
    """Write the occupation catalog as an indented JSON array."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps([r.model_dump() for r in catalog], indent=2, ensure_ascii=False))
    return path


def load_catalog(path: Path) -> List[OccupationRecord]:
    """Load the occupation catalog; missing file yields an empty list."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Occupation catalog not found: {path}")
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [OccupationRecord.model_validate(item) for item in json.load(f)]
