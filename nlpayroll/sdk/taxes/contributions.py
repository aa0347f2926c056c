"""Social-security contributions: employee deductions and employer premiums.

Each contribution is computed on gross pay capped at its own base and
rounded to cents on its own. The total is the sum of the rounded figures,
so the payslip lines always add up to the total line.

Employer premiums are reported for cost insight only. They are paid on top
of gross pay and never reduce net pay.
"""

from decimal import Decimal
from typing import Dict, Optional, Tuple, Union

from ..money import ZERO, percent_of, round_cents
from ..schemas import Contributions, EmployerContributions, PremiumClass
from .schemas import TaxParameters

# contribution -> (rate field, max base field)
CONTRIBUTION_FIELDS: Dict[str, Tuple[str, str]] = {
    "aow": ("aow_rate", "aow_max_base"),
    "wlz": ("wlz_rate", "wlz_max_base"),
    "ww": ("ww_rate", "ww_max_base"),
    "wia": ("wia_rate", "wia_max_base"),
}

# employer premium -> (rate field, max base field or None for uncapped)
EMPLOYER_CONTRIBUTION_FIELDS: Dict[str, Tuple[str, Optional[str]]] = {
    "aow": ("employer_aow_rate", "aow_max_base"),
    "wlz": ("employer_wlz_rate", "wlz_max_base"),
    "ww": ("employer_ww_rate", "ww_max_base"),
    "wia": ("employer_wia_rate", "wia_max_base"),
    "zvw": ("employer_zvw_rate", None),
}


def compute_contribution(
    gross_pay: Decimal, rate_pct: Decimal, max_base: Optional[Decimal] = None
) -> Decimal:
    """min(gross, max_base) x rate / 100, rounded to cents. Never negative."""
    if gross_pay <= 0:
        return ZERO
    base = gross_pay if max_base is None else min(gross_pay, max_base)
    return round_cents(percent_of(base, rate_pct))


def compute_contributions(
    gross_pay: Decimal,
    tax_parameters: TaxParameters,
    aow_exempt: bool = False,
) -> Contributions:
    """Compute all four employee contributions for a period's gross pay.

    A gross pay of zero or less (e.g. a period before the employee started)
    yields zero contributions rather than an error. aow_exempt zeroes AOW
    for employees at or past the state pension age.
    """
    amounts = {
        name: compute_contribution(
            gross_pay,
            getattr(tax_parameters, rate_field),
            getattr(tax_parameters, base_field),
        )
        for name, (rate_field, base_field) in CONTRIBUTION_FIELDS.items()
    }
    if aow_exempt:
        amounts["aow"] = ZERO
    return Contributions(total=sum(amounts.values(), ZERO), **amounts)


def compute_employer_contributions(
    gross_pay: Decimal,
    tax_parameters: TaxParameters,
    premium_class: Union[PremiumClass, str] = PremiumClass.LOW,
    aow_exempt: bool = False,
) -> EmployerContributions:
    """Compute the employer premiums owed on top of a period's gross pay.

    Args:
        gross_pay: Period gross pay
        tax_parameters: Tax year parameters (employer rates and caps)
        premium_class: Sector class selecting the low or high AWF/AOF rate
        aow_exempt: True when the employee is at or past state pension age

    Returns:
        EmployerContributions, total being the sum of the rounded premiums
    """
    premium_class = PremiumClass(premium_class)
    amounts = {
        name: compute_contribution(
            gross_pay,
            getattr(tax_parameters, rate_field),
            None if base_field is None else getattr(tax_parameters, base_field),
        )
        for name, (rate_field, base_field) in EMPLOYER_CONTRIBUTION_FIELDS.items()
    }
    suffix = premium_class.value
    amounts["awf"] = compute_contribution(gross_pay, getattr(tax_parameters, f"awf_rate_{suffix}"))
    amounts["aof"] = compute_contribution(gross_pay, getattr(tax_parameters, f"aof_rate_{suffix}"))
    if aow_exempt:
        amounts["aow"] = ZERO
    return EmployerContributions(total=sum(amounts.values(), ZERO), **amounts)
