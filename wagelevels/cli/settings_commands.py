"""Settings CLI commands for Wage Levels.

Manages settings.json - data directory, tax year, cost-of-living file.
"""

import click
from pathlib import Path

from wagelevels.sdk import (
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_settings_path,
    get_data_path,
    get_col_index_path,
)
from wagelevels.sdk.taxes import get_available_years


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - data_dir: directory for generated occupations.json / wages.json
    - tax_year: tax rules year for take-home calculations
    - col_index: path to the cost-of-living index JSON
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  data_dir: {get_data_path()}")
    click.echo(f"  col_index: {get_col_index_path()}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom data_dir, revert to default")
def settings_data_dir(path, clear):
    """Set or clear the custom data directory.

    PATH is where generate-data writes occupations.json and wages.json.

    Examples:
        wage-levels settings data-dir ~/wage-levels/data
        wage-levels settings data-dir --clear
    """
    if clear:
        current = load_settings()
        if "data_dir" in current:
            del current["data_dir"]
            save_settings(current)
            click.echo("Cleared data_dir setting.")
            click.echo(f"Data directory is now: {get_data_path()} (default)")
        else:
            click.echo("data_dir was not set.")
        return

    if not path:
        current_data_dir = get_setting("data_dir")
        if current_data_dir:
            click.echo(f"Current data_dir: {current_data_dir}")
        else:
            click.echo(f"No custom data_dir set. Using default: {get_data_path()}")
        return

    data_path = Path(path).expanduser().resolve()

    if data_path.exists():
        if not data_path.is_dir():
            raise click.ClickException(f"Path exists but is not a directory: {data_path}")
    else:
        try:
            data_path.mkdir(parents=True, exist_ok=True)
            click.echo(f"Created directory: {data_path}")
        except OSError as e:
            raise click.ClickException(f"Cannot create directory: {data_path}\n{e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("tax-year")
@click.argument("year", required=False)
def settings_tax_year(year):
    """Show or set the tax rules year."""
    available = get_available_years()

    if not year:
        current = get_setting("tax_year")
        latest = available[0] if available else None
        click.echo(f"tax_year: {current or f'{latest} (latest)'}")
        click.echo(f"Available: {', '.join(str(y) for y in available)}")
        return

    if not year.isdigit() or len(year) != 4:
        raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.")
    if not any(y <= int(year) for y in available):
        raise click.ClickException(f"No tax rules at or before {year}. Available: {available}")

    set_setting("tax_year", year)
    click.echo(f"Set tax_year: {year}")


@settings.command("col-index")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
def settings_col_index(path):
    """Show or set the cost-of-living index file."""
    if not path:
        click.echo(f"col_index: {get_col_index_path()}")
        return

    col_path = Path(path).expanduser().resolve()
    if not col_path.exists():
        click.echo(click.style(f"Warning: {col_path} does not exist yet", fg="yellow"))
    set_setting("col_index", str(col_path))
    click.echo(f"Set col_index: {col_path}")
