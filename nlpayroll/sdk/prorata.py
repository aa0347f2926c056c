"""Pro-rata salary for partial-period employment.

Employees who start or leave mid-period are paid for the days they were
employed only. Salary is scaled by overlap_days / days_in_period and rounded
to cents. Two day counts are supported:

- calendar: every day counts (default)
- working: Monday-Friday, minus public holidays

Usage:
    from nlpayroll.sdk.prorata import prorate

    result = prorate(fact, date(2025, 8, 11), None, date(2025, 8, 1), date(2025, 8, 31))
    result.salary  # Decimal('2370.97')
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from .money import ZERO, round_cents
from .schemas import (
    CompensationFact,
    InvalidPeriodError,
    ProRataMethod,
    ProratedCompensation,
)

logger = logging.getLogger(__name__)


def count_calendar_days(start: date, end: date) -> int:
    """Days between two dates, inclusive. 0 if end is before start."""
    return max(0, (end - start).days + 1)


def count_working_days(start: date, end: date, holidays: Iterable[date] = ()) -> int:
    """Monday-Friday days between two dates (inclusive), excluding holidays."""
    if end < start:
        return 0
    holiday_set = set(holidays)
    count = 0
    current = start
    while current <= end:
        if current.weekday() < 5 and current not in holiday_set:
            count += 1
        current += timedelta(days=1)
    return count


def overlap(
    contract_start: date,
    contract_end: Optional[date],
    period_start: date,
    period_end: date,
) -> Optional[tuple]:
    """Effective (start, end) of employment within the period, or None."""
    effective_start = max(contract_start, period_start)
    effective_end = period_end if contract_end is None else min(contract_end, period_end)
    if effective_start > effective_end:
        return None
    return effective_start, effective_end


def count_days(method: ProRataMethod, start: date, end: date, holidays: Iterable[date] = ()) -> int:
    """Days in [start, end] under the given pro-rata method."""
    if method == ProRataMethod.WORKING:
        return count_working_days(start, end, holidays)
    return count_calendar_days(start, end)


def prorate(
    compensation: CompensationFact,
    contract_start: Optional[date],
    contract_end: Optional[date],
    period_start: date,
    period_end: date,
    method: Union[ProRataMethod, str] = ProRataMethod.CALENDAR,
    holidays: Iterable[date] = (),
) -> ProratedCompensation:
    """Adjust a full-period compensation fact to the days actually employed.

    Monthly salary is scaled by working_days / total_days. Hourly rates are
    never scaled (hours worked already reflect attendance); for hourly pay
    the factor only limits the holiday allowance accrual.

    With the working-day method, a period or overlap that holds no working
    days (a start on the last Saturday of the month, say) is counted in
    calendar days so the employee is not paid zero for days employed.

    Args:
        compensation: Full-period compensation
        contract_start: First day of employment (required)
        contract_end: Last day of employment, None if open-ended
        period_start: First day of the pay period
        period_end: Last day of the pay period (inclusive)
        method: "calendar" or "working" day count
        holidays: Dates excluded by the working-day method

    Returns:
        ProratedCompensation with the effective salary and day counts

    Raises:
        InvalidPeriodError: Period end before start, missing contract start,
            or contract ending before it starts
    """
    method = ProRataMethod(method)
    holidays = tuple(holidays)

    if period_start > period_end:
        raise InvalidPeriodError(f"Pay period start {period_start} is after end {period_end}")
    if contract_start is None:
        raise InvalidPeriodError(
            f"Employment start date is missing; cannot determine days employed in "
            f"{period_start}..{period_end}"
        )
    if contract_end is not None and contract_end < contract_start:
        raise InvalidPeriodError(f"Employment ends ({contract_end}) before it starts ({contract_start})")

    full_salary = compensation.salary
    total_days = count_days(method, period_start, period_end, holidays)
    if total_days == 0:
        logger.debug(f"prorate: no {method.value} days in {period_start}..{period_end}, using calendar days")
        method = ProRataMethod.CALENDAR
        total_days = count_calendar_days(period_start, period_end)

    fully_covered = contract_start <= period_start and (contract_end is None or contract_end >= period_end)
    if fully_covered:
        return ProratedCompensation(
            compensation=compensation,
            salary=full_salary,
            full_salary=full_salary,
            is_prorated=False,
            method=method,
            working_days=total_days,
            total_days=total_days,
            factor=Decimal(1),
            details="Employed for the full period - no pro-rata adjustment",
        )

    effective = overlap(contract_start, contract_end, period_start, period_end)
    working_days = 0 if effective is None else count_days(method, effective[0], effective[1], holidays)
    if effective is not None and working_days == 0 and method == ProRataMethod.WORKING:
        # Employed only over a weekend or holiday: count calendar days instead
        logger.debug(
            f"prorate: no {method.value} days in {effective[0]}..{effective[1]}, "
            f"falling back to calendar days"
        )
        method = ProRataMethod.CALENDAR
        total_days = count_calendar_days(period_start, period_end)
        working_days = count_calendar_days(effective[0], effective[1])
    factor = Decimal(working_days) / Decimal(total_days)

    if compensation.is_hourly:
        salary = full_salary
        holiday_accrual_factor = factor
    else:
        salary = round_cents(full_salary * Decimal(working_days) / Decimal(total_days))
        holiday_accrual_factor = Decimal(1)

    if effective is None:
        details = f"Not employed during {period_start}..{period_end} - no pay for this period"
    else:
        details = (
            f"Pro-rata: {working_days} of {total_days} {method.value} days "
            f"({effective[0]} to {effective[1]}), factor {factor:.6f}"
        )
    logger.debug(f"prorate: {details}; salary {full_salary} -> {salary}")

    return ProratedCompensation(
        compensation=compensation,
        salary=salary,
        full_salary=full_salary,
        is_prorated=True,
        method=method,
        working_days=working_days,
        total_days=total_days,
        factor=factor,
        adjustment=full_salary - salary if not compensation.is_hourly else ZERO,
        holiday_accrual_factor=holiday_accrual_factor,
        details=details,
    )
