"""Advisory compliance checks on a calculated breakdown.

Findings are data, never exceptions: a below-minimum salary still produces
a usable breakdown, with a warning the caller can surface.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from .money import format_euro, round_cents
from .schemas import (
    FULL_TIME_HOURS_PER_WEEK,
    CompensationFact,
    Finding,
    PayrollBreakdown,
    ProratedCompensation,
)
from .taxes.schemas import STATUTORY_HOLIDAY_ALLOWANCE_RATE, TaxParameters

MONTHS_PER_YEAR = Decimal(12)
WEEKS_PER_YEAR = Decimal(52)


def hourly_minimum_wage(tax_parameters: TaxParameters, monthly: Optional[Decimal] = None) -> Decimal:
    """Hourly equivalent of a monthly full-time minimum wage (adult by default)."""
    if monthly is None:
        monthly = tax_parameters.minimum_wage
    return monthly * MONTHS_PER_YEAR / (FULL_TIME_HOURS_PER_WEEK * WEEKS_PER_YEAR)


def _check_minimum_wage(fact: CompensationFact, tax_parameters: TaxParameters, on: date) -> List[Finding]:
    age = fact.age_on(on)
    monthly_minimum = tax_parameters.minimum_wage_for_age(age)
    if monthly_minimum is None:
        # Below the youngest youth age no minimum wage applies
        return []
    label = "minimum wage"
    if monthly_minimum != tax_parameters.minimum_wage:
        label = f"youth minimum wage (age {age})"

    if fact.is_hourly:
        minimum = hourly_minimum_wage(tax_parameters, monthly_minimum)
        if fact.salary < minimum:
            return [Finding(
                code="below_minimum_wage",
                message=(
                    f"Hourly rate {format_euro(fact.salary)} is below the {label} of "
                    f"{format_euro(minimum)}/hour"
                ),
            )]
        return []

    # Compare the full-time equivalent of the contractual salary, so a
    # pro-rated or part-time month is not flagged for working fewer days.
    full_time_salary = fact.salary * FULL_TIME_HOURS_PER_WEEK / fact.contract_hours_per_week
    if full_time_salary < monthly_minimum:
        shortfall = round_cents(monthly_minimum - full_time_salary)
        return [Finding(
            code="below_minimum_wage",
            message=(
                f"Full-time equivalent salary {format_euro(full_time_salary)} is "
                f"{format_euro(shortfall)} below the monthly {label} of "
                f"{format_euro(monthly_minimum)}"
            ),
        )]
    return []


def _check_holiday_allowance_rate(tax_parameters: TaxParameters) -> List[Finding]:
    rate = tax_parameters.holiday_allowance_rate
    if rate < STATUTORY_HOLIDAY_ALLOWANCE_RATE:
        return [Finding(
            code="holiday_allowance_below_statutory",
            message=(
                f"Holiday allowance rate {rate}% is below the statutory minimum of "
                f"{STATUTORY_HOLIDAY_ALLOWANCE_RATE}%"
            ),
        )]
    return []


def _check_proration(breakdown: PayrollBreakdown) -> List[Finding]:
    proration = breakdown.proration
    if not proration.is_prorated:
        return []
    if proration.working_days == 0:
        message = "Not employed during this period; no salary is due"
    else:
        message = (
            f"Salary pro-rated for {proration.working_days} of {proration.total_days} "
            f"{proration.method.value} days ({format_euro(proration.adjustment)} less than full salary)"
        )
    return [Finding(code="prorated_period", message=message, severity="info")]


def check(
    breakdown: PayrollBreakdown,
    compensation: Union[CompensationFact, ProratedCompensation],
    tax_parameters: TaxParameters,
) -> List[Finding]:
    """Return advisory findings for a breakdown. Never modifies it.

    Checks:
    - Salary against the minimum wage (hourly rate for hourly pay,
      full-time equivalent monthly salary otherwise), scaled to the youth
      rate for the employee's age at the end of the period
    - Holiday allowance rate against the statutory 8.33%
    - Whether the period was pro-rated (info)
    """
    fact = compensation.compensation if isinstance(compensation, ProratedCompensation) else compensation

    findings: List[Finding] = []
    findings.extend(_check_minimum_wage(fact, tax_parameters, breakdown.period_end))
    findings.extend(_check_holiday_allowance_rate(tax_parameters))
    findings.extend(_check_proration(breakdown))
    return findings
