"""taxes - Year-scoped tax parameters and statutory deductions.

Scope:
- Tax parameter schema and YAML loading (tax-rules/{year}.yaml)
- Employee social-security contributions (AOW, Wlz, WW, WIA)
- Employer premiums (AOW, Wlz, WW, WIA, AWF, AOF, Zvw), reported only
- Advisory income tax estimate (never deducted)

Constraints:
- Pure calculation - receives data, returns results
- Year-specific rules loaded from tax-rules/{year}.yaml, user dir first

Usage:
    from nlpayroll.sdk.taxes import compute_contributions, load_tax_parameters

    params = load_tax_parameters(2025)
    contributions = compute_contributions(Decimal("3500.00"), params)
"""

from .schemas import TaxParameters, STATUTORY_HOLIDAY_ALLOWANCE_RATE

from .rules import (
    TaxRulesNotFoundError,
    find_tax_rules_file,
    list_tax_years,
    load_tax_rules,
    load_tax_parameters,
)

from .contributions import (
    compute_contribution,
    compute_contributions,
    compute_employer_contributions,
)

from .income_tax import estimate_income_tax

__all__ = [
    # Schemas
    "TaxParameters",
    "STATUTORY_HOLIDAY_ALLOWANCE_RATE",
    # Rules
    "TaxRulesNotFoundError",
    "find_tax_rules_file",
    "list_tax_years",
    "load_tax_rules",
    "load_tax_parameters",
    # Contributions
    "compute_contribution",
    "compute_contributions",
    "compute_employer_contributions",
    # Income tax
    "estimate_income_tax",
]
