"""Pydantic schemas for tax rules validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to the year-scoped parameters: contribution rates and caps, income tax
brackets, employer premiums, holiday allowance rate and the (youth)
minimum wage.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

STATUTORY_HOLIDAY_ALLOWANCE_RATE = Decimal("8.33")


class TaxParameters(BaseModel):
    """Complete tax parameters for one tax year.

    Rates are percentages (17.90 means 17.90%). Contribution bases are per
    pay period (monthly), the same unit as the gross pay they cap.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int = Field(..., ge=2000, le=2100, description="Calendar year these parameters apply to")

    # Income tax estimate (reported separately, never deducted)
    income_tax_rate_1: Decimal = Field(..., ge=0, description="Bracket 1 income tax rate (%)")
    income_tax_rate_2: Decimal = Field(..., ge=0, description="Bracket 2 income tax rate (%)")
    income_tax_bracket_1_max: Decimal = Field(..., gt=0, description="Annual upper bound of bracket 1")
    reduced_table_credit: Decimal = Field(
        default=Decimal("3070"), ge=0,
        description="Annual flat tax-credit offset applied under the reduced ('groen') table",
    )

    # Employee social-security contributions
    aow_rate: Decimal = Field(..., ge=0, description="AOW (old age pension) rate (%)")
    wlz_rate: Decimal = Field(..., ge=0, description="Wlz (long-term care) rate (%)")
    ww_rate: Decimal = Field(..., ge=0, description="WW (unemployment) rate (%)")
    wia_rate: Decimal = Field(..., ge=0, description="WIA (disability) rate (%)")
    aow_max_base: Decimal = Field(..., gt=0, description="Per-period pay cap for AOW")
    wlz_max_base: Decimal = Field(..., gt=0, description="Per-period pay cap for Wlz")
    ww_max_base: Decimal = Field(..., gt=0, description="Per-period pay cap for WW")
    wia_max_base: Decimal = Field(..., gt=0, description="Per-period pay cap for WIA")

    # Employer premiums, paid on top of gross. AOW/Wlz/WW/WIA share the
    # employee caps above; AWF, AOF and Zvw are charged on full gross.
    employer_aow_rate: Decimal = Field(default=Decimal(0), ge=0, description="Employer AOW rate (%)")
    employer_wlz_rate: Decimal = Field(default=Decimal(0), ge=0, description="Employer Wlz rate (%)")
    employer_ww_rate: Decimal = Field(default=Decimal(0), ge=0, description="Employer WW rate (%)")
    employer_wia_rate: Decimal = Field(default=Decimal(0), ge=0, description="Employer WIA rate (%)")
    awf_rate_low: Decimal = Field(default=Decimal(0), ge=0, description="AWF rate, low premium class (%)")
    awf_rate_high: Decimal = Field(default=Decimal(0), ge=0, description="AWF rate, high premium class (%)")
    aof_rate_low: Decimal = Field(default=Decimal(0), ge=0, description="AOF rate, low premium class (%)")
    aof_rate_high: Decimal = Field(default=Decimal(0), ge=0, description="AOF rate, high premium class (%)")
    employer_zvw_rate: Decimal = Field(default=Decimal(0), ge=0, description="Employer Zvw levy (%)")
    state_pension_age: int = Field(
        default=67, ge=0, description="From this age neither employee nor employer pays AOW"
    )

    holiday_allowance_rate: Decimal = Field(
        default=STATUTORY_HOLIDAY_ALLOWANCE_RATE, ge=0,
        description="Holiday allowance (vakantiegeld) rate (%)",
    )
    minimum_wage: Decimal = Field(..., gt=0, description="Monthly full-time (40h) minimum wage")
    youth_minimum_wage_rates: Dict[int, Decimal] = Field(
        default_factory=dict,
        description="Age -> percentage of minimum_wage. Ages below the lowest key have no minimum",
    )

    public_holidays: List[date] = Field(
        default_factory=list,
        description="Public holidays excluded by the working-day pro-rata method",
    )

    @field_validator("public_holidays")
    @classmethod
    def holidays_in_tax_year(cls, v: List[date], info) -> List[date]:
        """Keep holidays sorted and inside the tax year."""
        year = info.data.get("tax_year")
        if year is not None:
            outside = [d.isoformat() for d in v if d.year != year]
            if outside:
                raise ValueError(f"public_holidays outside tax year {year}: {', '.join(outside)}")
        return sorted(set(v))

    @field_validator("youth_minimum_wage_rates")
    @classmethod
    def youth_rates_are_percentages(cls, v: Dict[int, Decimal]) -> Dict[int, Decimal]:
        bad = [f"{age}: {pct}" for age, pct in v.items() if age < 0 or not 0 < pct <= 100]
        if bad:
            raise ValueError(f"youth_minimum_wage_rates must map ages to 0-100%: {', '.join(bad)}")
        return dict(sorted(v.items()))

    def minimum_wage_for_age(self, age: Optional[int]) -> Optional[Decimal]:
        """Monthly full-time minimum wage at a given age.

        Unknown age (None) and ages above the youth table get the adult
        minimum. Ages below the youngest youth rate have no minimum (None).
        """
        if age is None or not self.youth_minimum_wage_rates:
            return self.minimum_wage
        if age < min(self.youth_minimum_wage_rates):
            return None
        if age in self.youth_minimum_wage_rates:
            return self.minimum_wage * self.youth_minimum_wage_rates[age] / Decimal(100)
        return self.minimum_wage

    def is_pension_age(self, age: Optional[int]) -> bool:
        return age is not None and age >= self.state_pension_age
