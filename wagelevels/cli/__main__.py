"""Wage Levels CLI - Command-line interface for wage level and take-home estimates."""

import json
import random

import click
from rich.console import Console

from wagelevels import __version__
from wagelevels.sdk import (
    Location,
    SourceReadError,
    adjust_for_col,
    build_comparison_engine,
    build_level_classifier,
    build_tax_engine,
    get_data_path,
    load_occupations,
    load_reference_data,
    load_wage_table,
    parse_salary,
    run_pipeline,
    salary_gaps,
    write_artifacts,
)
from wagelevels.sdk.loaders import load_configured_col_index

from .renderers.result_renderer import (
    render_breakdown,
    render_classification,
    render_col_adjustment,
    render_comparison,
    render_gaps,
)
from .settings_commands import settings as settings_group


def _salary_callback(ctx, param, value):
    """Sanitize SALARY text ("$108,000") into whole dollars."""
    salary = parse_salary(value)
    if salary is None:
        raise click.BadParameter(f"'{value}' is not a salary amount")
    return salary


def _echo_json(model) -> None:
    click.echo(json.dumps(model.model_dump(), indent=2))


@click.group()
@click.version_option(version=__version__, prog_name="wage-levels")
def cli():
    """Wage Levels - prevailing wage level and take-home pay tools.

    Generate the wage table from OFLC CSV exports, then classify salaries,
    compute take-home pay and compare locations.

    Configuration is loaded from (in order):

    \b
    1. WAGE_LEVELS_CONFIG_PATH environment variable
    2. ~/.config/wage-levels/settings.json (XDG default)

    Run 'wage-levels settings show' to see effective paths.
    """
    pass


cli.add_command(settings_group)


@cli.command("generate-data")
@click.argument("occupation_csv", type=click.Path(dir_okay=False))
@click.argument("wage_csv", type=click.Path(dir_okay=False))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False),
              help="Directory for occupations.json and wages.json (default: data dir)")
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter")
def generate_data(occupation_csv, wage_csv, output_dir, delimiter):
    """Build the occupation catalog and wage table from CSV sources.

    OCCUPATION_CSV is the SOC occupation list (code, title, ...).
    WAGE_CSV is the wage export (area, SOC code, geo level, hourly
    level 1-4 wages, ...). Malformed rows are logged and skipped.

    \b
    Examples:
      wage-levels generate-data oes_soc_occs.csv ALC_Export.csv
      wage-levels generate-data occs.csv wages.csv -o ./data
    """
    try:
        result = run_pipeline(occupation_csv, wage_csv, delimiter=delimiter)
    except SourceReadError as e:
        raise click.ClickException(str(e))

    out_dir = output_dir or get_data_path()
    catalog_path, wages_path = write_artifacts(result, out_dir)

    stats = result.stats
    click.echo(f"Occupations with wages: {stats.catalog_size}")
    click.echo(f"Wage entries: {stats.wage_entries} across {stats.areas} areas")
    if stats.malformed_rows:
        click.echo(click.style(f"Skipped {stats.malformed_rows} malformed row(s)", fg="yellow"))
    click.echo(f"Wrote {catalog_path}")
    click.echo(f"Wrote {wages_path}")


@cli.command("occupations")
@click.option("--search", "-s", help="Case-insensitive filter on code or title")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def occupations(search, output_json):
    """List occupations that have wage data."""
    catalog = load_occupations()
    if search:
        needle = search.lower()
        catalog = [o for o in catalog if needle in o.code.lower() or needle in o.title.lower()]

    if output_json:
        click.echo(json.dumps([o.model_dump() for o in catalog], indent=2))
        return

    if not catalog:
        click.echo("No occupations found. Run 'wage-levels generate-data' first.")
        return
    for occupation in catalog:
        click.echo(f"{occupation.code}  {occupation.title}")


@cli.command("level")
@click.argument("salary", callback=_salary_callback)
@click.option("--state", help="State code, e.g. CA")
@click.option("--county", help="County FIPS code, e.g. 06085")
@click.option("--area", help="Wage survey area code")
@click.option("--occupation", help="SOC occupation code, e.g. 15-1252")
@click.option("--seed", type=int, help="Seed for county variation, for repeatable thresholds")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def level(salary, state, county, area, occupation, seed, output_json):
    """Show the wage level for SALARY at a location.

    Uses the wage table when it has an entry for --area and --occupation,
    otherwise the regional model for the state (from --state or the
    county FIPS prefix).

    A county's variation within its state is drawn at random once per
    run, so county thresholds differ between runs unless --seed is given.

    \b
    Examples:
      wage-levels level 108000 --state TX
      wage-levels level '$145,000' --county 06085
      wage-levels level 120000 --area 41940 --occupation 15-1252
    """
    if not (state or county or area):
        raise click.UsageError("Give at least one of --state, --county or --area")

    rng = random.Random(seed) if seed is not None else None
    classifier = build_level_classifier(rng=rng)
    result = classifier.classify_location(
        salary,
        Location(state_code=state, sub_area_id=county, area_code=area),
        occupation,
    )

    if output_json:
        _echo_json(result)
        return
    render_classification(Console(), result, load_reference_data().state_name(result.state_code))


@cli.command("take-home")
@click.argument("salary", callback=_salary_callback)
@click.argument("state")
@click.option("--year", help="Tax rules year (default: settings tax_year or latest)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def take_home(salary, state, year, output_json):
    """Show take-home pay for SALARY in STATE."""
    try:
        engine = build_tax_engine(year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    state = state.upper()
    breakdown = engine.take_home(salary, state)
    if output_json:
        _echo_json(breakdown)
        return
    render_breakdown(Console(), breakdown, state)


@cli.command("compare")
@click.argument("salary", callback=_salary_callback)
@click.argument("area1")
@click.argument("state1")
@click.argument("area2")
@click.argument("state2")
@click.option("--year", help="Tax rules year (default: settings tax_year or latest)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def compare(salary, area1, state1, area2, state2, year, output_json):
    """Compare purchasing power of SALARY between two locations.

    Each location is an area code (for the cost-of-living index) and a
    state code (for state tax).

    \b
    Examples:
      wage-levels compare 150000 41860 CA 19100 TX
    """
    try:
        engine = build_comparison_engine(year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    result = engine.compare_take_home(salary, area1, state1.upper(), area2, state2.upper())
    if output_json:
        _echo_json(result)
        return
    render_comparison(Console(), result)


@cli.command("gaps")
@click.argument("salary", callback=_salary_callback)
@click.argument("area")
@click.argument("occupation")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def gaps(salary, area, occupation, output_json):
    """Show how far SALARY is from each of the four wage levels.

    Requires a wage table entry for AREA and OCCUPATION.
    """
    thresholds = load_wage_table().get(area, occupation)
    if thresholds is None:
        raise click.ClickException(
            f"No wage data for occupation {occupation} in area {area}. "
            f"Run 'wage-levels generate-data' or check the codes."
        )

    result = salary_gaps(salary, thresholds)
    if output_json:
        _echo_json(result)
        return
    render_gaps(Console(), result)


@cli.command("col-adjust")
@click.argument("salary", callback=_salary_callback)
@click.argument("from_area")
@click.argument("to_area")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def col_adjust(salary, from_area, to_area, output_json):
    """Translate SALARY from FROM_AREA to TO_AREA by cost of living."""
    adjustment = adjust_for_col(salary, from_area, to_area, load_configured_col_index())
    if output_json:
        _echo_json(adjustment)
        return
    render_col_adjustment(Console(), adjustment, from_area, to_area)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
