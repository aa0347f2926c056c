"""nl-payroll SDK - Core functionality for Dutch gross-to-net payroll."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    SettingsError,
    # Tax rules locations
    get_bundled_tax_rules_dir,
    get_user_tax_rules_dir,
    get_tax_rules_dirs,
    get_default_prorata_method,
)

from .money import (
    to_money,
    round_cents,
    percent_of,
    format_euro,
)

from .schemas import (
    NET_PAY_BASIS,
    # Errors
    PayrollError,
    InvalidInputError,
    InvalidPeriodError,
    # Enums
    PayBasis,
    TaxTable,
    ProRataMethod,
    PremiumClass,
    # Inputs
    CompensationFact,
    PayPeriod,
    EmploymentInterval,
    # Results
    ProratedCompensation,
    GrossPay,
    Contributions,
    EmployerContributions,
    Finding,
    ProrationSummary,
    PayrollBreakdown,
    parse_model,
)

from .taxes import (
    TaxParameters,
    TaxRulesNotFoundError,
    list_tax_years,
    load_tax_rules,
    load_tax_parameters,
    compute_contribution,
    compute_contributions,
    compute_employer_contributions,
    estimate_income_tax,
)

from .prorata import (
    prorate,
    count_calendar_days,
    count_working_days,
)

from .gross import (
    annualized_salary,
    compute_holiday_allowance,
    compute_gross,
)

from .compliance import check as check_compliance

from .engine import calculate, calculate_many

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "SettingsError",
    "get_bundled_tax_rules_dir",
    "get_user_tax_rules_dir",
    "get_tax_rules_dirs",
    "get_default_prorata_method",
    # Money
    "to_money",
    "round_cents",
    "percent_of",
    "format_euro",
    # Schemas
    "NET_PAY_BASIS",
    "PayrollError",
    "InvalidInputError",
    "InvalidPeriodError",
    "PayBasis",
    "TaxTable",
    "ProRataMethod",
    "PremiumClass",
    "CompensationFact",
    "PayPeriod",
    "EmploymentInterval",
    "ProratedCompensation",
    "GrossPay",
    "Contributions",
    "EmployerContributions",
    "Finding",
    "ProrationSummary",
    "PayrollBreakdown",
    "parse_model",
    # Taxes
    "TaxParameters",
    "TaxRulesNotFoundError",
    "list_tax_years",
    "load_tax_rules",
    "load_tax_parameters",
    "compute_contribution",
    "compute_contributions",
    "compute_employer_contributions",
    "estimate_income_tax",
    # Calculators
    "prorate",
    "count_calendar_days",
    "count_working_days",
    "annualized_salary",
    "compute_holiday_allowance",
    "compute_gross",
    "check_compliance",
    # Engine
    "calculate",
    "calculate_many",
]
