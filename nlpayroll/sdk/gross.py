"""Gross pay: regular pay, overtime pay and holiday allowance accrual."""

import logging
from decimal import Decimal
from typing import Union

from .money import ZERO, percent_of, round_cents
from .schemas import CompensationFact, GrossPay, ProratedCompensation
from .taxes.schemas import TaxParameters

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal(12)
WEEKS_PER_YEAR = Decimal(52)


def annualized_salary(compensation: Union[CompensationFact, ProratedCompensation]) -> Decimal:
    """Yearly salary: monthly x 12, or hourly rate x contract hours x 52."""
    if compensation.is_hourly:
        return compensation.salary * compensation.contract_hours_per_week * WEEKS_PER_YEAR
    return compensation.salary * MONTHS_PER_YEAR


def compute_holiday_allowance(
    compensation: Union[CompensationFact, ProratedCompensation],
    tax_parameters: TaxParameters,
) -> Decimal:
    """Monthly accrual of the yearly holiday allowance (vakantiegeld) reserve.

    This is one twelfth of the annual entitlement, not the May lump sum.
    Callers needing the annual payout multiply by 12.
    """
    accrual_factor = getattr(compensation, "holiday_accrual_factor", Decimal(1))
    annual = percent_of(annualized_salary(compensation), tax_parameters.holiday_allowance_rate)
    return round_cents(annual / MONTHS_PER_YEAR * accrual_factor)


def compute_gross(
    compensation: Union[CompensationFact, ProratedCompensation],
    tax_parameters: TaxParameters,
) -> GrossPay:
    """Compute gross pay components for one period.

    Monthly pay: regular pay is the (already pro-rated) salary, no overtime.
    Hourly pay: regular = hours x rate, overtime = overtime hours x rate x
    overtime multiplier. Each figure is rounded to cents where computed.
    A period outside the employment interval pays nothing, whatever hours
    were reported.

    Args:
        compensation: CompensationFact, or ProratedCompensation for partial periods
        tax_parameters: Tax year parameters (holiday allowance rate)

    Returns:
        GrossPay with regular_pay, overtime_pay and holiday_allowance
    """
    if not getattr(compensation, "is_employed", True):
        regular_pay = ZERO
        overtime_pay = ZERO
    elif compensation.is_hourly:
        hours = compensation.hours_worked or ZERO
        overtime_hours = compensation.overtime_hours or ZERO
        regular_pay = round_cents(hours * compensation.salary)
        overtime_pay = round_cents(overtime_hours * compensation.salary * compensation.overtime_rate)
    else:
        regular_pay = round_cents(compensation.salary)
        overtime_pay = ZERO

    holiday_allowance = compute_holiday_allowance(compensation, tax_parameters)
    logger.debug(
        f"gross: regular {regular_pay}, overtime {overtime_pay}, holiday allowance {holiday_allowance}"
    )

    return GrossPay(
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        holiday_allowance=holiday_allowance,
    )
