"""Income tax estimate.

Informational only. Income tax is settled at year end by bookkeeping, so
this figure is shown beside the breakdown and never deducted from net pay.
"""

from decimal import Decimal

from ..money import ZERO, percent_of, round_cents
from ..schemas import TaxTable
from .schemas import TaxParameters

MONTHS_PER_YEAR = Decimal(12)


def estimate_income_tax(gross_pay: Decimal, tax_parameters: TaxParameters, tax_table: TaxTable) -> Decimal:
    """Estimate one month's share of annual income tax on a monthly gross.

    The monthly gross is annualised (x12) and taxed in two brackets. The
    reduced ('groen') table subtracts the flat annual tax credit, floored at 0.
    """
    if gross_pay <= 0:
        return ZERO

    annual = gross_pay * MONTHS_PER_YEAR
    bracket_max = tax_parameters.income_tax_bracket_1_max
    if annual <= bracket_max:
        tax = percent_of(annual, tax_parameters.income_tax_rate_1)
    else:
        tax = (
            percent_of(bracket_max, tax_parameters.income_tax_rate_1)
            + percent_of(annual - bracket_max, tax_parameters.income_tax_rate_2)
        )

    if TaxTable(tax_table) == TaxTable.REDUCED:
        tax = max(ZERO, tax - tax_parameters.reduced_table_credit)

    return round_cents(tax / MONTHS_PER_YEAR)
