"""Unit tests for pro-rata salary calculation.

Tests:
1. Identity: employment covering the whole period leaves salary unchanged
2. Mid-month start (the August 2025 case): 21 of 31 days -> 2370.97
3. Boundaries: start on last day = 1 day, leap February, single-day period
4. No overlap: salary 0, no error
5. Working-day method with public holidays, calendar fallback without working days
6. InvalidPeriodError for unresolvable overlaps
"""

from datetime import date
from decimal import Decimal

import pytest

from nlpayroll.sdk.prorata import (
    count_calendar_days,
    count_working_days,
    overlap,
    prorate,
)
from nlpayroll.sdk.schemas import (
    CompensationFact,
    InvalidPeriodError,
    PayPeriod,
    ProRataMethod,
)


AUG_START = date(2025, 8, 1)
AUG_END = date(2025, 8, 31)


@pytest.fixture
def monthly():
    return CompensationFact(salary=Decimal("3500.00"), pay_basis="monthly")


@pytest.fixture
def hourly():
    return CompensationFact(salary=Decimal("20.00"), pay_basis="hourly", hours_worked=Decimal(80))


class TestDayCounts:
    """Tests for count_calendar_days(), count_working_days() and overlap()."""

    def test_calendar_days_inclusive(self):
        assert count_calendar_days(AUG_START, AUG_END) == 31
        assert count_calendar_days(AUG_END, AUG_END) == 1
        assert count_calendar_days(AUG_END, AUG_START) == 0

    def test_working_days_august_2025(self):
        """August 2025 starts on a Friday: 21 weekdays, no public holidays."""
        assert count_working_days(AUG_START, AUG_END) == 21
        assert count_working_days(date(2025, 8, 11), AUG_END) == 15

    def test_working_days_skip_holidays(self):
        """Christmas 2025 falls on Thursday and Friday."""
        holidays = [date(2025, 12, 25), date(2025, 12, 26)]
        assert count_working_days(date(2025, 12, 22), date(2025, 12, 28)) == 5
        assert count_working_days(date(2025, 12, 22), date(2025, 12, 28), holidays) == 3

    def test_overlap(self):
        assert overlap(date(2025, 8, 11), None, AUG_START, AUG_END) == (date(2025, 8, 11), AUG_END)
        assert overlap(date(2024, 1, 1), date(2025, 8, 15), AUG_START, AUG_END) == (AUG_START, date(2025, 8, 15))
        assert overlap(date(2025, 9, 1), None, AUG_START, AUG_END) is None


class TestProrateIdentity:
    """Full coverage returns the compensation unchanged."""

    def test_full_period_unchanged(self, monthly):
        result = prorate(monthly, date(2024, 1, 1), None, AUG_START, AUG_END)

        assert result.is_prorated is False
        assert result.salary == Decimal("3500.00")
        assert result.factor == Decimal(1)
        assert result.adjustment == Decimal("0")
        assert result.compensation == monthly

    def test_start_on_first_day_unchanged(self, monthly):
        result = prorate(monthly, AUG_START, AUG_END, AUG_START, AUG_END)
        assert result.is_prorated is False
        assert result.salary == monthly.salary


class TestProratePartial:
    """Partial periods scale monthly salary by employed days."""

    def test_august_2025_mid_month_start(self, monthly):
        """Start 2025-08-11: 21 of 31 days, 1129.03 less than a full month."""
        result = prorate(monthly, date(2025, 8, 11), None, AUG_START, AUG_END)

        assert result.is_prorated is True
        assert result.working_days == 21
        assert result.total_days == 31
        assert result.salary == Decimal("2370.97")
        assert result.adjustment == Decimal("1129.03")
        assert result.full_salary == Decimal("3500.00")

    def test_start_on_last_day_pays_one_day(self, monthly):
        result = prorate(monthly, AUG_END, None, AUG_START, AUG_END)

        assert result.working_days == 1
        assert result.salary == Decimal("112.90")

    def test_leap_february_last_day(self, monthly):
        period = PayPeriod.for_month(2024, 2)
        result = prorate(monthly, date(2024, 2, 29), None, period.start, period.end)

        assert result.total_days == 29
        assert result.working_days == 1
        assert result.salary == Decimal("120.69")

    def test_contract_ends_mid_month(self, monthly):
        result = prorate(monthly, date(2024, 1, 1), date(2025, 8, 15), AUG_START, AUG_END)

        assert result.working_days == 15
        assert result.salary == Decimal("1693.55")

    def test_single_day_period(self, monthly):
        day = date(2025, 8, 15)
        result = prorate(monthly, day, day, day, day)

        assert result.is_prorated is False
        assert result.total_days == 1
        assert result.salary == monthly.salary

    def test_no_overlap_pays_nothing(self, monthly):
        result = prorate(monthly, date(2025, 9, 1), None, AUG_START, AUG_END)

        assert result.is_prorated is True
        assert result.working_days == 0
        assert result.salary == Decimal("0.00")
        assert result.factor == Decimal(0)
        assert result.is_employed is False

    def test_hourly_rate_not_scaled(self, hourly):
        """Hourly rate is kept; only holiday accrual follows the factor."""
        result = prorate(hourly, date(2025, 8, 11), None, AUG_START, AUG_END)

        assert result.salary == Decimal("20.00")
        assert result.adjustment == Decimal("0")
        assert result.holiday_accrual_factor == Decimal(21) / Decimal(31)
        assert result.hours_worked == Decimal(80)


class TestProrateWorkingDays:
    """Working-day method counts Monday-Friday minus public holidays."""

    def test_august_2025_working_days(self, monthly):
        result = prorate(
            monthly, date(2025, 8, 11), None, AUG_START, AUG_END,
            method=ProRataMethod.WORKING,
        )

        assert result.method == ProRataMethod.WORKING
        assert result.working_days == 15
        assert result.total_days == 21
        assert result.salary == Decimal("2500.00")

    def test_method_accepts_string(self, monthly):
        result = prorate(monthly, date(2025, 8, 11), None, AUG_START, AUG_END, method="working")
        assert result.method == ProRataMethod.WORKING

    def test_holidays_reduce_both_counts(self, monthly):
        """December 2025: 23 weekdays, 21 after Christmas; 6 of them from the 22nd."""
        holidays = [date(2025, 12, 25), date(2025, 12, 26)]
        result = prorate(
            monthly, date(2025, 12, 22), None, date(2025, 12, 1), date(2025, 12, 31),
            method="working", holidays=holidays,
        )

        assert result.total_days == 21
        assert result.working_days == 6
        assert result.salary == Decimal("1000.00")

    def test_weekend_start_falls_back_to_calendar_days(self, monthly):
        """Starting on Saturday 2025-05-31 still pays the one day employed."""
        result = prorate(monthly, date(2025, 5, 31), None, date(2025, 5, 1), date(2025, 5, 31), method="working")

        assert result.method == ProRataMethod.CALENDAR
        assert result.working_days == 1
        assert result.total_days == 31
        assert result.salary == Decimal("112.90")
        assert result.is_employed is True

    def test_weekend_only_period_uses_calendar_days(self, monthly):
        result = prorate(monthly, date(2025, 1, 1), None, date(2025, 8, 2), date(2025, 8, 3), method="working")

        assert result.method == ProRataMethod.CALENDAR
        assert result.total_days == 2
        assert result.salary == monthly.salary


class TestProrateErrors:
    """Unresolvable overlaps raise InvalidPeriodError."""

    def test_missing_contract_start(self, monthly):
        with pytest.raises(InvalidPeriodError, match="start date is missing"):
            prorate(monthly, None, None, AUG_START, AUG_END)

    def test_period_end_before_start(self, monthly):
        with pytest.raises(InvalidPeriodError):
            prorate(monthly, date(2025, 1, 1), None, AUG_END, AUG_START)

    def test_contract_end_before_start(self, monthly):
        with pytest.raises(InvalidPeriodError, match="before it starts"):
            prorate(monthly, date(2025, 8, 20), date(2025, 8, 10), AUG_START, AUG_END)
