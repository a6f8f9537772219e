"""Tests for the offline data pipeline.

Builds small occupation and wage CSVs in tmp_path and checks the catalog,
the annualized wage table and the row-level error handling.
"""

import csv
import json
import pytest
from pathlib import Path

from wagelevels.sdk.pipeline import (
    MalformedRowError,
    SourceReadError,
    hourly_to_annual,
    read_occupations,
    read_wages,
    run,
    write_artifacts,
)
from wagelevels.sdk.schemas import PipelineStats, WageThresholds


OCCUPATIONS_CSV = """\
"soccode","Title","Description"
"11-1021","General and Operations Managers","Plan, direct, or coordinate operations"
"15-1252","Software Developers","Research, design, and develop software"
"15-2051","Data Scientists, All Fields","Develop and implement methods"
"99-9999","Occupation Without Wages","Not in the wage file"
"""

WAGES_CSV = """\
"Area","SocCode","GeoLvl","Level1","Level2","Level3","Level4","Average","Label"
"10180","11-1021",1,"19.91","33.72","47.52","61.33","40.62","Abilene, TX"
"10180","15-2051",1,"n/a","50.00","60.00","70.00","55.00","Abilene, TX"
"10180","15-1252",1,"40.00","50.00","60.00","70.00","55.00","Abilene, TX"
"41940","15-1252",1,"60.10","75.00","90.00","105.00","82.00","San Jose, CA"
"""


def write_csv(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


@pytest.fixture
def sources(tmp_path):
    """Occupation and wage sources with one malformed wage row."""
    return {
        "occupations": write_csv(tmp_path / "oes_soc_occs.csv", OCCUPATIONS_CSV),
        "wages": write_csv(tmp_path / "ALC_Export.csv", WAGES_CSV),
    }


class TestHourlyToAnnual:
    """Tests for hourly wage annualization."""

    def test_rounds_to_nearest_dollar(self):
        """19.91/hr x 2080 = 41412.8 -> 41413."""
        assert hourly_to_annual(19.91) == 41413

    def test_whole_hours(self):
        assert hourly_to_annual(50) == 104000

    def test_zero(self):
        assert hourly_to_annual(0) == 0


class TestReadOccupations:
    """Tests for the occupation source reader."""

    def test_quoted_fields_keep_delimiter(self, sources):
        """A comma inside a quoted title is part of the title."""
        occupations = read_occupations(sources["occupations"])
        assert occupations["15-2051"] == "Data Scientists, All Fields"

    def test_skips_header(self, sources):
        occupations = read_occupations(sources["occupations"])
        assert "soccode" not in occupations
        assert len(occupations) == 4

    def test_last_write_wins_on_duplicate_code(self, tmp_path):
        path = write_csv(tmp_path / "occs.csv", (
            "code,title\n"
            "15-1252,Old Title\n"
            "15-1252,New Title\n"
        ))
        assert read_occupations(path) == {"15-1252": "New Title"}

    def test_trims_and_discards_empty(self, tmp_path):
        """Whitespace is trimmed; rows with empty code or title are dropped."""
        path = write_csv(tmp_path / "occs.csv", (
            "code,title\n"
            "  15-1252 ,  Software Developers  \n"
            ",Missing Code\n"
            "15-9999,   \n"
        ))
        assert read_occupations(path) == {"15-1252": "Software Developers"}

    def test_single_column_row_is_malformed(self, tmp_path):
        path = write_csv(tmp_path / "occs.csv", (
            "code,title\n"
            "15-1252\n"
            "15-2051,Data Scientists\n"
        ))
        stats = PipelineStats()
        occupations = read_occupations(path, stats=stats)

        assert occupations == {"15-2051": "Data Scientists"}
        assert stats.malformed_rows == 1


class TestReadWages:
    """Tests for the wage source reader."""

    def test_annualizes_all_four_levels(self, sources):
        table = read_wages(sources["wages"])
        assert table.get("10180", "11-1021") == WageThresholds.from_list([41413, 70138, 98842, 127566])

    def test_non_numeric_wage_skips_only_that_row(self, sources):
        """Rows before and after a malformed row are still processed."""
        stats = PipelineStats()
        table = read_wages(sources["wages"], stats=stats)

        assert table.get("10180", "15-2051") is None
        assert table.get("10180", "11-1021") is not None
        assert table.get("10180", "15-1252") is not None
        assert table.get("41940", "15-1252") is not None
        assert stats.malformed_rows == 1
        assert stats.wage_rows == 4
        assert stats.wage_entries == 3
        assert stats.areas == 2

    def test_malformed_row_is_logged(self, sources, caplog):
        read_wages(sources["wages"])
        assert any(r.levelname == "WARNING" and "'n/a'" in r.message for r in caplog.records)

    def test_rejected_header_does_not_drop_first_data_row(self, tmp_path):
        oversized = "x" * (csv.field_size_limit() + 1)
        path = write_csv(tmp_path / "wages.csv", (
            f"Area,{oversized},GeoLvl,Level1,Level2,Level3,Level4\n"
            "10180,11-1021,1,19.91,33.72,47.52,61.33\n"
            "41940,15-1252,1,60.10,75.00,90.00,105.00\n"
        ))
        stats = PipelineStats()
        table = read_wages(path, stats=stats)

        assert table.get("10180", "11-1021") is not None
        assert table.get("41940", "15-1252") is not None
        assert stats.malformed_rows == 1

    def test_short_row_is_malformed(self, tmp_path):
        path = write_csv(tmp_path / "wages.csv", (
            "Area,SocCode,GeoLvl,L1,L2,L3,L4\n"
            "10180,15-1252,1,40.00,50.00\n"
        ))
        stats = PipelineStats()
        table = read_wages(path, stats=stats)

        assert len(table) == 0
        assert stats.malformed_rows == 1

    def test_decreasing_levels_are_malformed(self, tmp_path):
        """Wage levels must be non-decreasing."""
        path = write_csv(tmp_path / "wages.csv", (
            "Area,SocCode,GeoLvl,L1,L2,L3,L4\n"
            "10180,15-1252,1,50.00,40.00,60.00,70.00\n"
        ))
        assert len(read_wages(path)) == 0

    def test_infinite_and_negative_wages_are_malformed(self, tmp_path):
        path = write_csv(tmp_path / "wages.csv", (
            "Area,SocCode,GeoLvl,L1,L2,L3,L4\n"
            "10180,15-1252,1,inf,50.00,60.00,70.00\n"
            "10180,15-2051,1,-1.00,50.00,60.00,70.00\n"
            "10180,11-1021,1,19.91,33.72,47.52,61.33\n"
        ))
        stats = PipelineStats()
        table = read_wages(path, stats=stats)

        assert list(table) == [("10180", "11-1021")]
        assert stats.malformed_rows == 2

    def test_last_write_wins_on_duplicate_pair(self, tmp_path):
        path = write_csv(tmp_path / "wages.csv", (
            "Area,SocCode,GeoLvl,L1,L2,L3,L4\n"
            "10180,15-1252,1,40.00,50.00,60.00,70.00\n"
            "10180,15-1252,1,41.00,51.00,61.00,71.00\n"
        ))
        table = read_wages(path)
        assert table.get("10180", "15-1252").level1 == 85280

    def test_custom_delimiter(self, tmp_path):
        path = write_csv(tmp_path / "wages.tsv", (
            "Area\tSocCode\tGeoLvl\tL1\tL2\tL3\tL4\n"
            "10180\t15-1252\t1\t40.00\t50.00\t60.00\t70.00\n"
        ))
        table = read_wages(path, delimiter="\t")
        assert table.get("10180", "15-1252").level4 == 145600


class TestRun:
    """Tests for the full pipeline run."""

    def test_catalog_only_includes_occupations_with_wages(self, sources):
        result = run(sources["occupations"], sources["wages"])
        codes = [o.code for o in result.catalog]

        assert codes == ["11-1021", "15-1252"]
        assert "99-9999" not in codes
        assert "15-2051" not in codes

    def test_occupation_in_both_sources_appears_once(self, sources):
        """15-1252 has wages in two areas but one catalog entry."""
        result = run(sources["occupations"], sources["wages"])
        assert [o.code for o in result.catalog].count("15-1252") == 1

    def test_catalog_sorted_by_code(self, tmp_path):
        occs = write_csv(tmp_path / "occs.csv", (
            "code,title\n"
            "15-1252,Software Developers\n"
            "11-1021,General and Operations Managers\n"
            "13-2011,Accountants and Auditors\n"
        ))
        wages = write_csv(tmp_path / "wages.csv", (
            "Area,SocCode,GeoLvl,L1,L2,L3,L4\n"
            "10180,15-1252,1,40,50,60,70\n"
            "10180,13-2011,1,30,40,50,60\n"
            "10180,11-1021,1,20,30,40,50\n"
        ))
        result = run(occs, wages)
        assert [o.code for o in result.catalog] == ["11-1021", "13-2011", "15-1252"]

    def test_stats(self, sources):
        stats = run(sources["occupations"], sources["wages"]).stats
        assert stats.occupations_loaded == 4
        assert stats.catalog_size == 2
        assert stats.malformed_rows == 1

    def test_missing_occupation_source(self, sources, tmp_path):
        with pytest.raises(SourceReadError) as exc:
            run(tmp_path / "missing.csv", sources["wages"])
        assert "missing.csv" in str(exc.value)

    def test_missing_wage_source(self, sources, tmp_path):
        with pytest.raises(SourceReadError):
            run(sources["occupations"], tmp_path / "missing.csv")

    def test_directory_is_not_a_source(self, sources, tmp_path):
        with pytest.raises(SourceReadError):
            run(sources["occupations"], tmp_path)


class TestWriteArtifacts:
    """Tests for catalog and wage table output files."""

    def test_writes_expected_shapes(self, sources, tmp_path):
        result = run(sources["occupations"], sources["wages"])
        catalog_path, wages_path = write_artifacts(result, tmp_path / "out")

        catalog = json.loads(catalog_path.read_text())
        assert catalog == [
            {"code": "11-1021", "title": "General and Operations Managers"},
            {"code": "15-1252", "title": "Software Developers"},
        ]

        wages = json.loads(wages_path.read_text())
        assert wages == {
            "10180": {
                "11-1021": [41413, 70138, 98842, 127566],
                "15-1252": [83200, 104000, 124800, 145600],
            },
            "41940": {
                "15-1252": [125008, 156000, 187200, 218400],
            },
        }

    def test_wages_json_is_compact(self, sources, tmp_path):
        result = run(sources["occupations"], sources["wages"])
        _, wages_path = write_artifacts(result, tmp_path)
        assert " " not in wages_path.read_text()

    def test_rerun_is_byte_identical(self, sources, tmp_path):
        first = write_artifacts(run(sources["occupations"], sources["wages"]), tmp_path / "a")
        second = write_artifacts(run(sources["occupations"], sources["wages"]), tmp_path / "b")

        for path_a, path_b in zip(first, second):
            assert path_a.read_bytes() == path_b.read_bytes()


class TestMalformedRowError:

    def test_message_includes_location(self):
        error = MalformedRowError("wages.csv", 12, "bad wage")
        assert str(error) == "wages.csv:12: bad wage"
        assert error.line_number == 12
