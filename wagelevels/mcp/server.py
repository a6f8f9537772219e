"""Wage Levels MCP Server - FastMCP implementation for wage level tools."""

import logging
from functools import lru_cache
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from wagelevels.sdk import (
    LevelClassifier,
    Location,
    build_comparison_engine,
    build_level_classifier,
    build_tax_engine,
    load_occupations,
    load_wage_table,
    parse_salary,
    salary_gaps as sdk_salary_gaps,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("wage-levels")


@lru_cache(maxsize=1)
def _classifier() -> LevelClassifier:
    """One classifier per server so sub-area variations stay stable across calls."""
    return build_level_classifier()


def _invalid_salary(salary: str) -> dict[str, Any]:
    return {"error": f"Invalid salary: {salary!r}"}


# --- Tools ---

@mcp.tool()
async def wage_level(
    salary: str = Field(description="Annual salary, e.g. '108000' or '$108,000'"),
    state: str | None = Field(default=None, description="State code, e.g. 'CA'"),
    county: str | None = Field(default=None, description="County FIPS code, e.g. '06085'"),
    area: str | None = Field(default=None, description="Wage survey area code"),
    occupation: str | None = Field(default=None, description="SOC occupation code, e.g. '15-1252'"),
) -> dict[str, Any]:
    """Classify a salary into prevailing wage level 0-3 at a location, with the thresholds used."""
    amount = parse_salary(salary)
    if amount is None:
        return _invalid_salary(salary)
    try:
        result = _classifier().classify_location(
            amount, Location(state_code=state, sub_area_id=county, area_code=area), occupation
        )
        return result.model_dump()
    except Exception as e:
        logger.error(f"Error classifying salary: {e}")
        return {"error": str(e)}


@mcp.tool()
async def take_home(
    salary: str = Field(description="Annual gross salary"),
    state: str = Field(description="State code, e.g. 'TX'"),
    year: str | None = Field(default=None, description="Tax rules year (default latest)"),
) -> dict[str, Any]:
    """Compute federal, state and payroll tax and take-home pay for a salary in a state."""
    amount = parse_salary(salary)
    if amount is None:
        return _invalid_salary(salary)
    try:
        return build_tax_engine(year).take_home(amount, state.upper()).model_dump()
    except Exception as e:
        logger.error(f"Error computing take-home: {e}")
        return {"error": str(e)}


@mcp.tool()
async def compare_take_home(
    salary: str = Field(description="Annual gross salary"),
    area1: str = Field(description="Area code of the first location (cost-of-living lookup)"),
    state1: str = Field(description="State code of the first location"),
    area2: str = Field(description="Area code of the second location"),
    state2: str = Field(description="State code of the second location"),
) -> dict[str, Any]:
    """Compare take-home pay and cost-of-living purchasing power between two locations."""
    amount = parse_salary(salary)
    if amount is None:
        return _invalid_salary(salary)
    try:
        engine = build_comparison_engine()
        return engine.compare_take_home(amount, area1, state1.upper(), area2, state2.upper()).model_dump()
    except Exception as e:
        logger.error(f"Error comparing locations: {e}")
        return {"error": str(e)}


@mcp.tool()
async def salary_gaps(
    salary: str = Field(description="Current annual salary"),
    area: str = Field(description="Wage survey area code"),
    occupation: str = Field(description="SOC occupation code"),
) -> dict[str, Any]:
    """Show the raise needed to reach each of the four wage levels for an occupation in an area."""
    amount = parse_salary(salary)
    if amount is None:
        return _invalid_salary(salary)
    thresholds = load_wage_table().get(area, occupation)
    if thresholds is None:
        return {"error": f"No wage data for occupation {occupation} in area {area}"}
    return sdk_salary_gaps(amount, thresholds).model_dump()


@mcp.tool()
async def list_occupations(
    search: str | None = Field(default=None, description="Case-insensitive filter on code or title"),
    limit: int = Field(default=50, description="Maximum number of occupations to return"),
) -> dict[str, Any]:
    """List occupations that have prevailing wage data."""
    catalog = load_occupations()
    if search:
        needle = search.lower()
        catalog = [o for o in catalog if needle in o.code.lower() or needle in o.title.lower()]
    return {
        "occupations": [o.model_dump() for o in catalog[:limit]],
        "count": min(len(catalog), limit),
        "total_available": len(catalog),
    }


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
