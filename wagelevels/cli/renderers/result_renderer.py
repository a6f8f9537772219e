"""Rich renderers for classification, take-home and comparison results.

Transforms SDK result models into formatted Rich tables.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from wagelevels.sdk.money import format_salary
from wagelevels.sdk.schemas import (
    ClassificationResult,
    ColAdjustment,
    ComparisonResult,
    SalaryGaps,
    TaxBreakdown,
)

LEVEL_STYLES = ["dim", "blue", "yellow", "red"]


def _signed(amount: float) -> str:
    text = format_salary(abs(amount))
    return f"+{text}" if amount > 0 else (f"-{text}" if amount < 0 else text)


def render_classification(console: Console, result: ClassificationResult, state_name: str = None) -> None:
    """Render a wage level with the thresholds that produced it."""
    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("Level")
    table.add_column("Threshold", justify="right")
    table.add_column("Met", justify="center")

    thresholds = list(result.thresholds)
    if result.level4 is not None:
        thresholds.append(result.level4)
    for index, threshold in enumerate(thresholds, start=1):
        met = "✓" if result.salary >= threshold else ""
        table.add_row(f"Level {index}", format_salary(threshold), met)

    where = state_name or result.state_code or "Unknown"
    if result.area_code:
        where = f"{where} (area {result.area_code})"
    style = LEVEL_STYLES[result.level]
    title = f"{format_salary(result.salary)} in {where}: [{style}]{result.label}[/{style}]"

    console.print(Panel(table, title=title, subtitle=f"source: {result.source}", border_style="dim"))


def _breakdown_rows(breakdown: TaxBreakdown) -> list:
    return [
        ("Gross", breakdown.gross),
        ("Taxable income", breakdown.taxable_income),
        ("Federal tax", breakdown.federal_tax),
        ("State tax", breakdown.state_tax),
        ("Payroll tax (FICA)", breakdown.payroll_tax),
        ("Total tax", breakdown.total_tax),
        ("Take-home", breakdown.take_home),
    ]


def render_breakdown(console: Console, breakdown: TaxBreakdown, state_code: str = None) -> None:
    """Render a take-home breakdown."""
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("item", style="cyan")
    table.add_column("amount", justify="right")

    for label, amount in _breakdown_rows(breakdown):
        style = "bold green" if label == "Take-home" else None
        table.add_row(label, format_salary(amount), style=style)
    table.add_row("Effective rate", f"{breakdown.effective_rate:.1f}%")

    title = f"Take-home pay ({state_code})" if state_code else "Take-home pay"
    console.print(Panel(table, title=title, border_style="dim"))


def render_comparison(console: Console, result: ComparisonResult) -> None:
    """Render two locations side by side with the purchasing power difference."""
    loc1, loc2 = result.location1, result.location2

    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("", style="cyan")
    table.add_column(f"{loc1.area_code or '-'} / {loc1.state_code or '-'}", justify="right")
    table.add_column(f"{loc2.area_code or '-'} / {loc2.state_code or '-'}", justify="right")

    for (label, amount1), (_, amount2) in zip(_breakdown_rows(loc1), _breakdown_rows(loc2)):
        table.add_row(label, format_salary(amount1), format_salary(amount2))
    table.add_row("Effective rate", f"{loc1.effective_rate:.1f}%", f"{loc2.effective_rate:.1f}%")
    table.add_row("COL index", f"{loc1.col_index:.1f}", f"{loc2.col_index:.1f}")
    table.add_row(
        "Purchasing power",
        format_salary(loc1.purchasing_power),
        format_salary(loc2.purchasing_power),
        style="bold",
    )
    console.print(table)

    style = "green" if result.difference > 0 else ("red" if result.difference < 0 else "dim")
    console.print(
        f"Difference: [{style}]{_signed(result.difference)} ({result.percent_difference:+.1f}%)[/{style}]"
    )


def render_gaps(console: Console, gaps: SalaryGaps) -> None:
    """Render the gap to each of the four wage levels."""
    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("Level")
    table.add_column("Threshold", justify="right")
    table.add_column("Gap", justify="right")

    for index, (threshold, gap) in enumerate(zip(gaps.thresholds.as_list(), gaps.gaps), start=1):
        gap_text = "[green]✓ reached[/green]" if gap == 0 else format_salary(gap)
        table.add_row(f"Level {index}", format_salary(threshold), gap_text)

    level_text = f"Level {gaps.current_level}" if gaps.current_level else "Below Level 1"
    console.print(Panel(table, title=f"{format_salary(gaps.salary)}: {level_text}", border_style="dim"))


def render_col_adjustment(console: Console, adjustment: ColAdjustment, from_area: str, to_area: str) -> None:
    console.print(
        f"{format_salary(adjustment.original)} in {from_area} (COL {adjustment.from_col:.1f}) "
        f"≈ [bold]{format_salary(adjustment.adjusted)}[/bold] in {to_area} (COL {adjustment.to_col:.1f}), "
        f"{adjustment.percent_change:+.1f}%"
    )
