"""Payroll engine: one employee, one period, gross to net.

Pipeline:
1. Validate inputs (InvalidInputError, before any computation)
2. Pro-rate when employment does not cover the whole period
3. Gross pay (regular, overtime, holiday allowance)
4. Social-security contributions on gross pay (no AOW from pension age)
5. Employer premiums on gross pay, reported alongside but never deducted
6. Assemble the breakdown, net = gross - employee contributions
7. Attach advisory compliance findings

Every step is a pure function of its inputs. Inputs may be model instances
or plain mappings as read from contract records.

Usage:
    from nlpayroll.sdk import calculate, load_tax_parameters, PayPeriod

    breakdown = calculate(
        {"salary": "3500", "pay_basis": "monthly", "tax_table": "wit"},
        PayPeriod.for_month(2025, 8),
        {"start": "2025-08-11"},
        load_tax_parameters(2025),
    )
    breakdown.regular_pay  # Decimal('2370.97')
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from . import compliance
from .gross import compute_gross
from .prorata import count_days, prorate
from .schemas import (
    CompensationFact,
    EmploymentInterval,
    InvalidInputError,
    PayPeriod,
    PayrollBreakdown,
    ProRataMethod,
    ProratedCompensation,
    ProrationSummary,
    parse_model,
    validate_compensation,
    validate_employment,
    validate_period,
)
from .taxes.contributions import compute_contributions, compute_employer_contributions
from .taxes.income_tax import estimate_income_tax
from .taxes.schemas import TaxParameters

logger = logging.getLogger(__name__)

ModelOrMapping = Union[Any, Mapping[str, Any]]


def _validate_inputs(
    compensation: ModelOrMapping,
    period: ModelOrMapping,
    employment: Optional[ModelOrMapping],
    tax_parameters: TaxParameters,
    method: Union[ProRataMethod, str],
) -> Tuple[CompensationFact, PayPeriod, EmploymentInterval, ProRataMethod]:
    """Parse and validate all inputs, collecting every problem before raising."""
    fact = parse_model(CompensationFact, compensation)
    pay_period = parse_model(PayPeriod, period)
    interval = parse_model(EmploymentInterval, employment if employment is not None else {})

    errors: List[str] = []
    errors.extend(validate_compensation(fact))
    errors.extend(validate_period(pay_period))
    errors.extend(validate_employment(interval))
    if fact.date_of_birth is not None and fact.date_of_birth > pay_period.end:
        errors.append(f"date_of_birth {fact.date_of_birth} is after the pay period end {pay_period.end}")

    if not isinstance(tax_parameters, TaxParameters):
        errors.append(f"tax_parameters must be TaxParameters, got {type(tax_parameters).__name__}")
    elif tax_parameters.tax_year != pay_period.start.year:
        errors.append(
            f"tax parameters for {tax_parameters.tax_year} cannot be used for a "
            f"{pay_period.start.year} pay period"
        )

    try:
        prorata_method = ProRataMethod(method)
    except ValueError:
        errors.append(f"unknown pro-rata method '{method}' (expected calendar or working)")
        prorata_method = ProRataMethod.CALENDAR

    if errors:
        raise InvalidInputError(errors)
    return fact, pay_period, interval, prorata_method


def _unchanged(
    fact: CompensationFact,
    period: PayPeriod,
    method: ProRataMethod,
    tax_parameters: TaxParameters,
) -> ProratedCompensation:
    days = count_days(method, period.start, period.end, tax_parameters.public_holidays)
    if days == 0:
        # No working days in the period at all
        method = ProRataMethod.CALENDAR
        days = period.days
    return ProratedCompensation(
        compensation=fact,
        salary=fact.salary,
        full_salary=fact.salary,
        is_prorated=False,
        method=method,
        working_days=days,
        total_days=days,
        factor=1,
        details="Employed for the full period - no pro-rata adjustment",
    )


def calculate(
    compensation: ModelOrMapping,
    period: ModelOrMapping,
    employment: Optional[ModelOrMapping],
    tax_parameters: TaxParameters,
    method: Union[ProRataMethod, str] = ProRataMethod.CALENDAR,
) -> PayrollBreakdown:
    """Calculate the gross-to-net breakdown for one employee and one period.

    Args:
        compensation: CompensationFact or mapping of its fields
        period: PayPeriod or mapping with start/end
        employment: EmploymentInterval or mapping with start/end (None = no dates)
        tax_parameters: TaxParameters for the period's calendar year
        method: Pro-rata day count, "calendar" (default) or "working"

    Returns:
        Immutable PayrollBreakdown

    Raises:
        InvalidInputError: Malformed or out-of-domain input
        InvalidPeriodError: Partial period whose overlap cannot be resolved
    """
    fact, pay_period, interval, prorata_method = _validate_inputs(
        compensation, period, employment, tax_parameters, method
    )

    if interval.covers(pay_period):
        effective = _unchanged(fact, pay_period, prorata_method, tax_parameters)
    else:
        effective = prorate(
            fact,
            interval.start,
            interval.end,
            pay_period.start,
            pay_period.end,
            method=prorata_method,
            holidays=tax_parameters.public_holidays,
        )

    gross = compute_gross(effective, tax_parameters)
    gross_pay = gross.total
    age = fact.age_on(pay_period.end)
    aow_exempt = tax_parameters.is_pension_age(age)
    if aow_exempt:
        logger.debug(f"age {age} at {pay_period.end}: AOW exempt")
    contributions = compute_contributions(gross_pay, tax_parameters, aow_exempt=aow_exempt)
    employer = compute_employer_contributions(
        gross_pay, tax_parameters, fact.premium_class, aow_exempt=aow_exempt
    )

    breakdown = PayrollBreakdown(
        tax_year=tax_parameters.tax_year,
        period_start=pay_period.start,
        period_end=pay_period.end,
        regular_pay=gross.regular_pay,
        overtime_pay=gross.overtime_pay,
        holiday_allowance=gross.holiday_allowance,
        gross_pay=gross_pay,
        aow_contribution=contributions.aow,
        wlz_contribution=contributions.wlz,
        ww_contribution=contributions.ww,
        wia_contribution=contributions.wia,
        total_contributions=contributions.total,
        net_pay=gross_pay - contributions.total,
        income_tax_estimate=estimate_income_tax(gross_pay, tax_parameters, fact.tax_table),
        proration=ProrationSummary(
            is_prorated=effective.is_prorated,
            method=effective.method,
            working_days=effective.working_days,
            total_days=effective.total_days,
            factor=effective.factor,
            full_salary=effective.full_salary,
            adjustment=effective.adjustment,
        ),
        employer_contributions=employer,
        employer_cost=gross_pay + employer.total,
    )

    findings = compliance.check(breakdown, effective, tax_parameters)
    logger.debug(
        f"calculate {pay_period.start}..{pay_period.end}: gross {gross_pay}, "
        f"contributions {contributions.total}, net {breakdown.net_pay}, {len(findings)} finding(s)"
    )
    if not findings:
        return breakdown
    return breakdown.model_copy(update={"compliance_findings": tuple(findings)})


def calculate_many(
    items: Iterable[Tuple[ModelOrMapping, ModelOrMapping, Optional[ModelOrMapping]]],
    tax_parameters: TaxParameters,
    method: Union[ProRataMethod, str] = ProRataMethod.CALENDAR,
) -> List[PayrollBreakdown]:
    """Calculate a batch of (compensation, period, employment) items in order.

    Items are independent; the first failing item raises and no partial
    result list is returned.
    """
    return [
        calculate(compensation, period, employment, tax_parameters, method=method)
        for compensation, period, employment in items
    ]


__all__ = ["calculate", "calculate_many"]
