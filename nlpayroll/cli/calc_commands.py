"""Calc CLI command for nl-payroll.

Runs the payroll engine for one employee and one pay period.
"""

import json
import re
from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console

from nlpayroll.sdk import (
    InvalidInputError,
    InvalidPeriodError,
    PayPeriod,
    SettingsError,
    TaxRulesNotFoundError,
    calculate,
    get_default_prorata_method,
    load_tax_parameters,
)
from .renderers.breakdown_renderer import render_breakdown


PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def _parse_month(value: str) -> PayPeriod:
    """Parse YYYY-MM into a calendar-month PayPeriod."""
    match = PERIOD_PATTERN.match(value)
    if not match:
        raise click.BadParameter(f"Invalid period '{value}'. Use YYYY-MM.", param_hint="--period")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise click.BadParameter(f"Invalid month in '{value}'.", param_hint="--period")
    return PayPeriod.for_month(year, month)


def _to_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _resolve_period(period: Optional[str], period_start: Optional[datetime], period_end: Optional[datetime]) -> dict:
    if period and (period_start or period_end):
        raise click.UsageError("Use either --period or --period-start/--period-end, not both.")
    if period:
        pay_period = _parse_month(period)
        return {"start": pay_period.start, "end": pay_period.end}
    if not (period_start and period_end):
        raise click.UsageError("A pay period is required: --period YYYY-MM or --period-start and --period-end.")
    return {"start": _to_date(period_start), "end": _to_date(period_end)}


@click.command("calc")
@click.option("--salary", required=True, help="Monthly salary, or hourly rate with --basis hourly")
@click.option("--basis", type=click.Choice(["monthly", "hourly"]), default="monthly",
              help="Pay basis (default: monthly)")
@click.option("--table", "tax_table", default="standard",
              help="Payroll tax table: standard/wit or reduced/groen (default: standard)")
@click.option("--hours", help="Hours worked in the period (hourly pay only)")
@click.option("--overtime-hours", help="Overtime hours in the period (hourly pay only)")
@click.option("--overtime-rate", default="1.5", help="Overtime multiplier (default: 1.5)")
@click.option("--contract-hours", default="40", help="Contractual hours per week (default: 40)")
@click.option("--date-of-birth", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Employee date of birth (youth minimum wage, AOW pension age)")
@click.option("--premium-class", type=click.Choice(["low", "high"]), default="low",
              help="Employer AWF/AOF premium class (default: low)")
@click.option("--period", help="Calendar month, YYYY-MM")
@click.option("--period-start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First day of a custom period")
@click.option("--period-end", type=click.DateTime(formats=["%Y-%m-%d"]), help="Last day of a custom period")
@click.option("--contract-start", required=True, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="First day of employment")
@click.option("--contract-end", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Last day of employment (omit if open-ended)")
@click.option("--method", type=click.Choice(["calendar", "working"]),
              help="Pro-rata day count (default: 'prorata_method' setting, else calendar)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def calc(
    salary: str,
    basis: str,
    tax_table: str,
    hours: Optional[str],
    overtime_hours: Optional[str],
    overtime_rate: str,
    contract_hours: str,
    date_of_birth: Optional[datetime],
    premium_class: str,
    period: Optional[str],
    period_start: Optional[datetime],
    period_end: Optional[datetime],
    contract_start: datetime,
    contract_end: Optional[datetime],
    method: Optional[str],
    output_format: str,
):
    """Calculate gross-to-net pay for one pay period.

    Net pay is net of social security contributions only. Income tax is
    shown as an estimate and is not deducted. Employer premiums are shown
    as cost information.

    \b
    Examples:
      nl-payroll calc --salary 3500 --period 2025-08 --contract-start 2025-08-11
      nl-payroll calc --salary 20 --basis hourly --hours 160 --overtime-hours 10 \\
          --period 2025-03 --contract-start 2024-01-01
      nl-payroll calc --salary 3500 --table groen --period 2025-08 \\
          --contract-start 2025-01-01 --format json
    """
    pay_period = _resolve_period(period, period_start, period_end)

    compensation = {
        "salary": salary,
        "pay_basis": basis,
        "tax_table": tax_table,
        "overtime_rate": overtime_rate,
        "contract_hours_per_week": contract_hours,
        "premium_class": premium_class,
    }
    if date_of_birth is not None:
        compensation["date_of_birth"] = _to_date(date_of_birth)
    if hours is not None:
        compensation["hours_worked"] = hours
    if overtime_hours is not None:
        compensation["overtime_hours"] = overtime_hours

    employment = {"start": _to_date(contract_start), "end": _to_date(contract_end)}

    try:
        prorata_method = method or get_default_prorata_method()
        tax_parameters = load_tax_parameters(pay_period["start"].year)
        breakdown = calculate(compensation, pay_period, employment, tax_parameters, method=prorata_method)
    except (InvalidInputError, InvalidPeriodError, TaxRulesNotFoundError, SettingsError, ValueError) as e:
        raise click.ClickException(str(e))

    data = breakdown.model_dump(mode="json")

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
        return

    render_breakdown(Console(), data)
