"""Tax rules CLI commands for nl-payroll.

Lists and shows the year-scoped tax parameters used by 'calc'.
"""

import json

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich import box

from nlpayroll.sdk import (
    SettingsError,
    TaxRulesNotFoundError,
    format_euro,
    get_tax_rules_dirs,
    list_tax_years,
    load_tax_parameters,
)
from nlpayroll.sdk.taxes import find_tax_rules_file


@click.group()
def rules():
    """Inspect tax rules (tax-rules/YYYY.yaml).

    User rules in the config directory override the bundled rules.
    """
    pass


@rules.command("list")
def rules_list():
    """List the years that have tax rules, and where they come from."""
    try:
        years = list_tax_years()
        search_dirs = get_tax_rules_dirs()
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo("Tax rules directories (in lookup order):")
    for rules_dir in search_dirs:
        click.echo(f"  {rules_dir}{'' if rules_dir.is_dir() else ' (missing)'}")
    click.echo()

    if not years:
        click.echo("No tax rules found.")
        return

    for year in years:
        click.echo(f"  {year}: {find_tax_rules_file(year)}")


@rules.command("show")
@click.argument("year", type=int)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def rules_show(year: int, output_format: str):
    """Show the validated tax parameters for YEAR."""
    try:
        params = load_tax_parameters(year)
    except (TaxRulesNotFoundError, SettingsError, ValidationError, ValueError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(params.model_dump(mode="json"), indent=2))
        return

    table = Table(title=f"Tax Parameters {year}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=24)
    table.add_column("Rate", justify="right")
    table.add_column("Max Base / Month", justify="right")

    for label, prefix in (("AOW", "aow"), ("Wlz", "wlz"), ("WW", "ww"), ("WIA", "wia")):
        table.add_row(
            label,
            f"{getattr(params, f'{prefix}_rate')}%",
            format_euro(getattr(params, f"{prefix}_max_base")),
        )
    table.add_row("", "", "")
    for label, prefix in (("AOW", "aow"), ("Wlz", "wlz"), ("WW", "ww"), ("WIA", "wia"), ("Zvw", "zvw")):
        table.add_row(f"Employer {label}", f"{getattr(params, f'employer_{prefix}_rate')}%", "")
    table.add_row("AWF (low / high)", f"{params.awf_rate_low}% / {params.awf_rate_high}%", "")
    table.add_row("AOF (low / high)", f"{params.aof_rate_low}% / {params.aof_rate_high}%", "")
    table.add_row("State pension age", str(params.state_pension_age), "")
    table.add_row("", "", "")
    table.add_row("Income tax bracket 1", f"{params.income_tax_rate_1}%",
                  f"{format_euro(params.income_tax_bracket_1_max)} / year")
    table.add_row("Income tax bracket 2", f"{params.income_tax_rate_2}%", "")
    table.add_row("Reduced table credit", "", f"{format_euro(params.reduced_table_credit)} / year")
    table.add_row("Holiday allowance", f"{params.holiday_allowance_rate}%", "")
    table.add_row("Minimum wage", "", format_euro(params.minimum_wage))
    for age, pct in params.youth_minimum_wage_rates.items():
        table.add_row(f"  Youth minimum, age {age}", f"{pct}%", format_euro(params.minimum_wage_for_age(age)))

    console = Console()
    console.print(table)
    if params.public_holidays:
        holidays = ", ".join(d.isoformat() for d in params.public_holidays)
        console.print(f"[dim]Public holidays: {holidays}[/dim]")
