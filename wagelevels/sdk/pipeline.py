"""Offline data preparation for the wage table and occupation catalog.

Reads two CSV sources:

    Occupation source: "soccode","Title","Description"
    Wage source:       "Area","SocCode","GeoLvl","Level1","Level2","Level3","Level4",...

Wage figures in the wage source are hourly. They are annualized at 2080 hours
(40 hours x 52 weeks) and rounded to whole dollars. The catalog keeps only
occupations that received at least one wage entry, sorted by SOC code.

Failure modes:
    - An input that cannot be opened or read raises SourceReadError.
    - A row that does not parse is logged and skipped (MalformedRowError is
      raised internally per row and never escapes run()).
"""

import csv
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from pydantic import ValidationError

from .money import round_to_dollar
from .schemas import OccupationRecord, PipelineStats, WageThresholds
from .wage_table import WageTable, save_catalog
from .config import OCCUPATIONS_FILENAME, WAGES_FILENAME

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

ANNUAL_WORK_HOURS = 2080
WAGE_COLUMNS = 7
PROGRESS_INTERVAL = 50000

SourcePath = Union[str, Path]


class SourceReadError(Exception):
    """Raised when a pipeline input cannot be opened or read."""

    def __init__(self, source: SourcePath, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Cannot read {self.source}: {reason}")


class MalformedRowError(ValueError):
    """Raised for a single source row that does not parse."""

    def __init__(self, source: str, line_number: int, message: str):
        self.source = source
        self.line_number = line_number
        super().__init__(f"{source}:{line_number}: {message}")


@dataclass
class PipelineResult:
    """Output of a pipeline run."""

    catalog: List[OccupationRecord]
    table: WageTable
    stats: PipelineStats = field(default_factory=PipelineStats)


def hourly_to_annual(hourly: float) -> int:
    """Annualize an hourly wage: round(hourly x 2080)."""
    return round_to_dollar(hourly * ANNUAL_WORK_HOURS)


def _iter_rows(source: SourcePath, delimiter: str, stats: PipelineStats) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line_number, fields) for every row after the header.

    Rows the csv module itself rejects are logged and skipped. The first row
    read is the header even when it is one of those.
    """
    name = Path(source).name
    try:
        f = open(source, "r", newline="", encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise SourceReadError(source, e.strerror or str(e)) from e

    with f:
        reader = csv.reader(f, delimiter=delimiter)
        header_skipped = False
        while True:
            try:
                fields = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                header_skipped = True
                stats.malformed_rows += 1
                logger.warning(str(MalformedRowError(name, reader.line_num, str(e))))
                continue
            except OSError as e:
                raise SourceReadError(source, e.strerror or str(e)) from e

            if not header_skipped:
                header_skipped = True
                continue
            yield reader.line_num, fields


def _parse_occupation_row(name: str, line_number: int, fields: List[str]) -> Tuple[str, str]:
    if len(fields) < 2:
        raise MalformedRowError(name, line_number, f"expected at least 2 columns, got {len(fields)}")
    return fields[0].strip(), fields[1].strip()


def _parse_hourly(name: str, line_number: int, value: str) -> float:
    try:
        hourly = float(value.strip())
    except ValueError:
        raise MalformedRowError(name, line_number, f"wage {value!r} is not a number")
    if not math.isfinite(hourly) or hourly < 0:
        raise MalformedRowError(name, line_number, f"wage {value!r} is not a finite non-negative number")
    return hourly


def _parse_wage_row(name: str, line_number: int, fields: List[str]) -> Tuple[str, str, WageThresholds]:
    if len(fields) < WAGE_COLUMNS:
        raise MalformedRowError(
            name, line_number, f"expected at least {WAGE_COLUMNS} columns, got {len(fields)}"
        )
    area = fields[0].strip()
    soc_code = fields[1].strip()
    if not area or not soc_code:
        raise MalformedRowError(name, line_number, "missing area or occupation code")

    annual = [hourly_to_annual(_parse_hourly(name, line_number, v)) for v in fields[3:7]]
    try:
        thresholds = WageThresholds.from_list(annual)
    except ValidationError as e:
        raise MalformedRowError(name, line_number, f"invalid wage levels {annual}: {e.errors()[0]['msg']}")
    return area, soc_code, thresholds


def read_occupations(
    source: SourcePath,
    delimiter: str = ",",
    stats: PipelineStats = None,
) -> Dict[str, str]:
    """Read the occupation source into a code -> title mapping (last write wins)."""
    stats = stats if stats is not None else PipelineStats()
    name = Path(source).name
    occupations: Dict[str, str] = {}

    logger.info(f"Reading occupations from {source}")
    for line_number, fields in _iter_rows(source, delimiter, stats):
        stats.occupation_rows += 1
        try:
            code, title = _parse_occupation_row(name, line_number, fields)
        except MalformedRowError as e:
            stats.malformed_rows += 1
            logger.warning(str(e))
            continue
        if not code or not title:
            logger.debug(f"{name}:{line_number}: empty code or title, skipped")
            continue
        occupations[code] = title

    stats.occupations_loaded = len(occupations)
    logger.info(f"Loaded {len(occupations)} occupations")
    return occupations


def read_wages(
    source: SourcePath,
    delimiter: str = ",",
    stats: PipelineStats = None,
) -> WageTable:
    """Read the wage source into a WageTable of annualized thresholds."""
    stats = stats if stats is not None else PipelineStats()
    name = Path(source).name
    entries: Dict[Tuple[str, str], WageThresholds] = {}

    logger.info(f"Reading wage data from {source}")
    for line_number, fields in _iter_rows(source, delimiter, stats):
        stats.wage_rows += 1
        if stats.wage_rows % PROGRESS_INTERVAL == 0:
            logger.debug(f"Processed {stats.wage_rows} wage rows...")
        try:
            area, soc_code, thresholds = _parse_wage_row(name, line_number, fields)
        except MalformedRowError as e:
            stats.malformed_rows += 1
            logger.warning(str(e))
            continue
        entries[(area, soc_code)] = thresholds

    table = WageTable(entries)
    stats.wage_entries = len(table)
    stats.areas = len(table.areas())
    logger.info(f"Loaded {len(table)} wage entries across {stats.areas} areas")
    return table


def build_catalog(occupations: Dict[str, str], table: WageTable) -> List[OccupationRecord]:
    """Occupations that have wage data, sorted by SOC code."""
    with_wages = set(table.occupation_codes())
    return [
        OccupationRecord(code=code, title=title)
        for code, title in sorted(occupations.items())
        if code in with_wages
    ]


def run(occupation_source: SourcePath, wage_source: SourcePath, delimiter: str = ",") -> PipelineResult:
    """Build the occupation catalog and wage table from the two CSV sources.

    Both sources are checked before any parsing starts so a missing wage
    file fails fast.

    Raises:
        SourceReadError: If either source cannot be opened or read
    """
    for source in (occupation_source, wage_source):
        if not Path(source).is_file():
            raise SourceReadError(source, "file not found")

    stats = PipelineStats()
    occupations = read_occupations(occupation_source, delimiter, stats)
    table = read_wages(wage_source, delimiter, stats)
    catalog = build_catalog(occupations, table)
    stats.catalog_size = len(catalog)

    if stats.malformed_rows:
        logger.warning(f"Skipped {stats.malformed_rows} malformed row(s)")
    logger.info(f"Total occupations with wages: {len(catalog)}")
    return PipelineResult(catalog=catalog, table=table, stats=stats)


def write_artifacts(result: PipelineResult, out_dir: SourcePath) -> Tuple[Path, Path]:
    """Write occupations.json and wages.json into out_dir.

    Returns:
        Tuple of (catalog_path, wages_path)
    """
    out_dir = Path(out_dir)
    catalog_path = save_catalog(result.catalog, out_dir / OCCUPATIONS_FILENAME)
    wages_path = result.table.save(out_dir / WAGES_FILENAME)
    logger.info(f"Wrote {catalog_path} and {wages_path}")
    return catalog_path, wages_path
