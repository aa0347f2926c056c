"""Unit tests for employee contributions and employer premiums.

Tests:
1. Each contribution is capped at its own per-period base
2. Total is the sum of the individually rounded contributions
3. Zero or negative gross yields zero contributions, no error
4. Contributions rise with gross until their base is reached
5. Employer premiums: capped and uncapped bases, premium class, AOW exemption
"""

from decimal import Decimal

import pytest

from nlpayroll.sdk.schemas import PremiumClass
from nlpayroll.sdk.taxes.contributions import (
    compute_contribution,
    compute_contributions,
    compute_employer_contributions,
)
from nlpayroll.sdk.taxes.schemas import TaxParameters


@pytest.fixture
def params():
    return TaxParameters(
        tax_year=2025,
        income_tax_rate_1=Decimal("35.82"),
        income_tax_rate_2=Decimal("49.50"),
        income_tax_bracket_1_max=Decimal("76817"),
        aow_rate=Decimal("17.90"),
        wlz_rate=Decimal("9.65"),
        ww_rate=Decimal("0.27"),
        wia_rate=Decimal("0.60"),
        aow_max_base=Decimal("3203.42"),
        wlz_max_base=Decimal("3203.42"),
        ww_max_base=Decimal("5783.17"),
        wia_max_base=Decimal("5783.17"),
        minimum_wage=Decimal("2223.20"),
        employer_aow_rate=Decimal("17.90"),
        employer_wlz_rate=Decimal("9.65"),
        employer_ww_rate=Decimal("2.70"),
        employer_wia_rate=Decimal("0.60"),
        awf_rate_low=Decimal("2.74"),
        awf_rate_high=Decimal("7.74"),
        aof_rate_low=Decimal("6.28"),
        aof_rate_high=Decimal("7.64"),
        employer_zvw_rate=Decimal("6.95"),
    )


class TestComputeContribution:
    """Tests for compute_contribution()."""

    def test_below_cap(self):
        assert compute_contribution(Decimal("2000.00"), Decimal("17.90"), Decimal("3203.42")) == Decimal("358.00")

    def test_capped_at_base(self):
        assert compute_contribution(Decimal("9000.00"), Decimal("17.90"), Decimal("3203.42")) == Decimal("573.41")

    @pytest.mark.parametrize("gross", [Decimal("0"), Decimal("-10.00")])
    def test_no_contribution_without_pay(self, gross):
        assert compute_contribution(gross, Decimal("17.90"), Decimal("3203.42")) == Decimal("0")


class TestComputeContributions:
    """Tests for compute_contributions()."""

    def test_prorated_august_gross(self, params):
        """2568.47 is below every cap."""
        result = compute_contributions(Decimal("2568.47"), params)

        assert result.aow == Decimal("459.76")
        assert result.wlz == Decimal("247.86")
        assert result.ww == Decimal("6.93")
        assert result.wia == Decimal("15.41")
        assert result.total == Decimal("729.96")

    def test_aow_and_wlz_capped(self, params):
        result = compute_contributions(Decimal("3788.77"), params)

        assert result.aow == Decimal("573.41")
        assert result.wlz == Decimal("309.13")
        assert result.ww == Decimal("10.23")
        assert result.wia == Decimal("22.73")
        assert result.total == Decimal("915.50")

    def test_total_is_sum_of_rounded(self, params):
        """Rounding each line first can differ from rounding the unrounded sum."""
        for gross in ("0.01", "1.00", "1234.56", "2568.47", "3203.42", "3203.43", "5783.17", "10000.00"):
            result = compute_contributions(Decimal(gross), params)
            assert result.total == result.aow + result.wlz + result.ww + result.wia

    def test_zero_gross(self, params):
        result = compute_contributions(Decimal("0.00"), params)

        assert result.total == Decimal("0")
        assert [result.aow, result.wlz, result.ww, result.wia] == [Decimal("0")] * 4

    def test_monotonic_until_capped(self, params):
        low = compute_contributions(Decimal("2000.00"), params)
        high = compute_contributions(Decimal("3000.00"), params)
        assert high.aow > low.aow
        assert high.wlz > low.wlz
        assert high.ww > low.ww
        assert high.wia > low.wia

        above = compute_contributions(Decimal("4000.00"), params)
        further = compute_contributions(Decimal("5000.00"), params)
        assert further.aow == above.aow
        assert further.wlz == above.wlz
        assert further.ww > above.ww

    def test_aow_exempt(self, params):
        result = compute_contributions(Decimal("3791.55"), params, aow_exempt=True)

        assert result.aow == Decimal("0")
        assert result.total == Decimal("342.12")


class TestComputeEmployerContributions:
    """Tests for compute_employer_contributions()."""

    def test_below_every_cap(self, params):
        result = compute_employer_contributions(Decimal("2000.00"), params)

        assert result.aow == Decimal("358.00")
        assert result.wlz == Decimal("193.00")
        assert result.ww == Decimal("54.00")
        assert result.wia == Decimal("12.00")
        assert result.awf == Decimal("54.80")
        assert result.aof == Decimal("125.60")
        assert result.zvw == Decimal("139.00")
        assert result.total == Decimal("936.40")

    def test_awf_aof_zvw_uncapped(self, params):
        """Above the WW/WIA cap only AWF, AOF and Zvw keep growing."""
        above = compute_employer_contributions(Decimal("6000.00"), params)
        further = compute_employer_contributions(Decimal("7000.00"), params)

        assert further.aow == above.aow
        assert further.ww == above.ww
        assert further.wia == above.wia
        assert further.awf > above.awf
        assert further.aof > above.aof
        assert further.zvw > above.zvw

    def test_high_premium_class(self, params):
        result = compute_employer_contributions(Decimal("2000.00"), params, PremiumClass.HIGH)

        assert result.awf == Decimal("154.80")
        assert result.aof == Decimal("152.80")

    def test_premium_class_accepts_string(self, params):
        assert compute_employer_contributions(Decimal("2000.00"), params, "high").awf == Decimal("154.80")

    def test_aow_exempt(self, params):
        result = compute_employer_contributions(Decimal("2000.00"), params, aow_exempt=True)

        assert result.aow == Decimal("0")
        assert result.total == Decimal("578.40")

    def test_total_is_sum_of_rounded(self, params):
        for gross in ("0.01", "1234.56", "3791.55", "10000.00"):
            r = compute_employer_contributions(Decimal(gross), params, PremiumClass.HIGH)
            assert r.total == r.aow + r.wlz + r.ww + r.wia + r.awf + r.aof + r.zvw

    def test_zero_gross(self, params):
        assert compute_employer_contributions(Decimal("0.00"), params).total == Decimal("0")

    def test_zero_rates_cost_nothing(self, params):
        bare = params.model_copy(update={
            "employer_aow_rate": Decimal(0), "employer_wlz_rate": Decimal(0),
            "employer_ww_rate": Decimal(0), "employer_wia_rate": Decimal(0),
            "awf_rate_low": Decimal(0), "aof_rate_low": Decimal(0), "employer_zvw_rate": Decimal(0),
        })
        assert compute_employer_contributions(Decimal("3000.00"), bare).total == Decimal("0")
