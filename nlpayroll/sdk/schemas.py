"""Pydantic schemas for the payroll engine inputs and outputs.

All schemas use extra='forbid' to reject unknown fields and frozen=True so
a produced breakdown cannot be altered after the fact. Money is Decimal
throughout.

Schemas enforce shape (types, closed enums, dates). Domain rules that the
engine reports as InvalidInputError (positive salary, ordered period, ...)
live in the validate_* functions at the bottom of this module.
"""

from calendar import monthrange
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .money import ZERO, to_money


NET_PAY_BASIS = "net of social security, pre-annual-tax-settlement"
FULL_TIME_HOURS_PER_WEEK = Decimal(40)


# =============================================================================
# Errors
# =============================================================================


class PayrollError(Exception):
    """Base class for payroll calculation errors."""
    pass


class InvalidInputError(PayrollError):
    """Raised when compensation, period or employment input is malformed.

    Always raised before any computation takes place.
    """
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Invalid payroll input: {'; '.join(errors)}")


class InvalidPeriodError(PayrollError):
    """Raised when pro-ration cannot resolve the employment/period overlap."""
    pass


# =============================================================================
# Closed variants
# =============================================================================


class PayBasis(str, Enum):
    """How the salary figure is expressed."""

    MONTHLY = "monthly"
    HOURLY = "hourly"


class TaxTable(str, Enum):
    """Payroll tax table. 'wit' is the standard table, 'groen' the reduced one."""

    STANDARD = "standard"
    REDUCED = "reduced"

    @classmethod
    def _missing_(cls, value):
        aliases = {"wit": cls.STANDARD, "groen": cls.REDUCED}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class ProRataMethod(str, Enum):
    """Day count used for pro-ration."""

    CALENDAR = "calendar"
    WORKING = "working"


class PremiumClass(str, Enum):
    """Employer AWF/AOF premium class ('laag' or 'hoog' sector rate)."""

    LOW = "low"
    HIGH = "high"


# =============================================================================
# Inputs
# =============================================================================


class CompensationFact(BaseModel):
    """What an employee is owed for one period, before pro-ration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    salary: Decimal = Field(..., description="Monthly salary, or hourly rate for hourly pay")
    pay_basis: PayBasis = Field(..., description="monthly or hourly")
    tax_table: TaxTable = Field(default=TaxTable.STANDARD, description="standard (wit) or reduced (groen)")
    hours_worked: Optional[Decimal] = Field(default=None, description="Regular hours (hourly only)")
    overtime_hours: Optional[Decimal] = Field(default=None, description="Overtime hours (hourly only)")
    overtime_rate: Decimal = Field(default=Decimal("1.5"), description="Overtime multiplier")
    contract_hours_per_week: Decimal = Field(
        default=FULL_TIME_HOURS_PER_WEEK, description="Contract hours, 40 for full time"
    )
    date_of_birth: Optional[date] = Field(
        default=None, description="Drives youth minimum wage and the AOW pension-age exemption"
    )
    premium_class: PremiumClass = Field(
        default=PremiumClass.LOW, description="Employer AWF/AOF sector premium class"
    )

    @field_validator(
        "salary", "hours_worked", "overtime_hours", "overtime_rate", "contract_hours_per_week",
        mode="before",
    )
    @classmethod
    def as_decimal(cls, v: Any) -> Any:
        """Route numbers through to_money so floats keep their written value."""
        if v is None or isinstance(v, Decimal):
            return v
        return to_money(v)

    @field_validator("tax_table", mode="before")
    @classmethod
    def dutch_table_names(cls, v: Any) -> Any:
        """Accept the Dutch names 'wit' and 'groen' used in contract records."""
        if isinstance(v, str) and not isinstance(v, TaxTable):
            return TaxTable(v.lower())
        return v

    @property
    def is_hourly(self) -> bool:
        return self.pay_basis == PayBasis.HOURLY

    def age_on(self, day: date) -> Optional[int]:
        """Age in whole years on a given day, None if date_of_birth is unknown."""
        if self.date_of_birth is None:
            return None
        born = self.date_of_birth
        return day.year - born.year - ((day.month, day.day) < (born.month, born.day))


class PayPeriod(BaseModel):
    """Inclusive pay period, normally one calendar month."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: date
    end: date

    @classmethod
    def for_month(cls, year: int, month: int) -> "PayPeriod":
        """Calendar month period using the real month length (29 Feb included)."""
        last_day = monthrange(year, month)[1]
        return cls(start=date(year, month, 1), end=date(year, month, last_day))

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    @property
    def tax_year(self) -> int:
        return self.start.year


class EmploymentInterval(BaseModel):
    """Contractual employment dates, inclusive. end=None means open-ended."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: Optional[date] = None
    end: Optional[date] = None

    def covers(self, period: PayPeriod) -> bool:
        """True if employed for every day of the period."""
        if self.start is None:
            return False
        return self.start <= period.start and (self.end is None or self.end >= period.end)


# =============================================================================
# Intermediate results
# =============================================================================


class ProratedCompensation(BaseModel):
    """A compensation fact adjusted to the portion of the period worked.

    Exposes the same pay attributes as CompensationFact so it can be handed
    straight to the gross pay calculator.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    compensation: CompensationFact
    salary: Decimal = Field(..., ge=0, description="Effective salary after pro-ration")
    full_salary: Decimal
    is_prorated: bool
    method: ProRataMethod = ProRataMethod.CALENDAR
    working_days: int = Field(..., ge=0)
    total_days: int = Field(..., gt=0)
    factor: Decimal = Field(..., ge=0, le=1)
    adjustment: Decimal = Field(default=ZERO, description="full_salary - salary")
    holiday_accrual_factor: Decimal = Field(default=Decimal(1), ge=0, le=1)
    details: str = ""

    @property
    def pay_basis(self) -> PayBasis:
        return self.compensation.pay_basis

    @property
    def tax_table(self) -> TaxTable:
        return self.compensation.tax_table

    @property
    def hours_worked(self) -> Optional[Decimal]:
        return self.compensation.hours_worked

    @property
    def overtime_hours(self) -> Optional[Decimal]:
        return self.compensation.overtime_hours

    @property
    def overtime_rate(self) -> Decimal:
        return self.compensation.overtime_rate

    @property
    def contract_hours_per_week(self) -> Decimal:
        return self.compensation.contract_hours_per_week

    @property
    def is_hourly(self) -> bool:
        return self.compensation.is_hourly

    @property
    def date_of_birth(self) -> Optional[date]:
        return self.compensation.date_of_birth

    @property
    def premium_class(self) -> PremiumClass:
        return self.compensation.premium_class

    @property
    def is_employed(self) -> bool:
        """False when the employment interval misses the period entirely."""
        return self.working_days > 0

    def age_on(self, day: date) -> Optional[int]:
        return self.compensation.age_on(day)


class GrossPay(BaseModel):
    """Gross pay components, each rounded to cents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    regular_pay: Decimal
    overtime_pay: Decimal
    holiday_allowance: Decimal

    @property
    def total(self) -> Decimal:
        return self.regular_pay + self.overtime_pay + self.holiday_allowance


class Contributions(BaseModel):
    """Employee social-security contributions for one period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    aow: Decimal = Field(..., ge=0, description="AOW (Algemene Ouderdomswet)")
    wlz: Decimal = Field(..., ge=0, description="Wlz (Wet langdurige zorg)")
    ww: Decimal = Field(..., ge=0, description="WW (Werkloosheidswet)")
    wia: Decimal = Field(..., ge=0, description="WIA (Wet werk en inkomen naar arbeidsvermogen)")
    total: Decimal = Field(..., ge=0, description="Sum of the four rounded contributions")


class EmployerContributions(BaseModel):
    """Employer-side premiums for one period. Paid on top of gross, never withheld."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    aow: Decimal = Field(..., ge=0)
    wlz: Decimal = Field(..., ge=0)
    ww: Decimal = Field(..., ge=0)
    wia: Decimal = Field(..., ge=0)
    awf: Decimal = Field(..., ge=0, description="Unemployment fund (Algemeen Werkloosheidsfonds)")
    aof: Decimal = Field(..., ge=0, description="Disability fund (Arbeidsongeschiktheidsfonds)")
    zvw: Decimal = Field(..., ge=0, description="Health insurance levy (Zorgverzekeringswet)")
    total: Decimal = Field(..., ge=0)


# =============================================================================
# Output
# =============================================================================


class Finding(BaseModel):
    """Advisory compliance note attached to a breakdown. Never blocks payroll."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    message: str
    severity: Literal["warning", "info"] = "warning"

    def __str__(self) -> str:
        return self.message


class ProrationSummary(BaseModel):
    """How the period's salary was pro-rated."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_prorated: bool
    method: ProRataMethod
    working_days: int
    total_days: int
    factor: Decimal
    full_salary: Decimal
    adjustment: Decimal


class PayrollBreakdown(BaseModel):
    """Gross-to-net result for one employee and one period.

    net_pay is net of social security only. Income tax is settled at year
    end by bookkeeping; income_tax_estimate is informational and is not
    deducted anywhere.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    period_start: date
    period_end: date

    regular_pay: Decimal
    overtime_pay: Decimal
    holiday_allowance: Decimal
    gross_pay: Decimal

    aow_contribution: Decimal
    wlz_contribution: Decimal
    ww_contribution: Decimal
    wia_contribution: Decimal
    total_contributions: Decimal

    net_pay: Decimal
    net_pay_basis: Literal["net of social security, pre-annual-tax-settlement"] = NET_PAY_BASIS

    income_tax_estimate: Decimal = Field(
        default=ZERO, description="Advisory estimate only, not deducted from net_pay"
    )
    proration: ProrationSummary
    compliance_findings: Tuple[Finding, ...] = ()

    employer_contributions: Optional[EmployerContributions] = Field(
        default=None, description="Employer premiums, not deducted from net_pay"
    )
    employer_cost: Optional[Decimal] = Field(
        default=None, description="gross_pay plus employer contributions"
    )


# =============================================================================
# Validation Functions
# =============================================================================


def _schema_errors(e: ValidationError) -> List[str]:
    errors = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "input"
        errors.append(f"{loc}: {err['msg']}")
    return errors


def parse_model(model_cls, data: Union[BaseModel, Mapping[str, Any]]):
    """Return data as a model_cls instance, reporting schema errors as InvalidInputError."""
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError([f"{model_cls.__name__}.{msg}" for msg in _schema_errors(e)]) from e


def validate_compensation(fact: CompensationFact) -> List[str]:
    """Domain rule violations for a compensation fact (empty list if valid)."""
    errors = []
    if fact.salary <= 0:
        errors.append(f"salary must be positive, got {fact.salary}")
    if fact.overtime_rate < 0:
        errors.append(f"overtime_rate must not be negative, got {fact.overtime_rate}")
    if fact.contract_hours_per_week <= 0:
        errors.append(f"contract_hours_per_week must be positive, got {fact.contract_hours_per_week}")

    if fact.is_hourly:
        if fact.hours_worked is None:
            errors.append("hours_worked is required for hourly pay")
        elif fact.hours_worked < 0:
            errors.append(f"hours_worked must not be negative, got {fact.hours_worked}")
        if fact.overtime_hours is not None and fact.overtime_hours < 0:
            errors.append(f"overtime_hours must not be negative, got {fact.overtime_hours}")
    else:
        for name in ("hours_worked", "overtime_hours"):
            if getattr(fact, name) is not None:
                errors.append(f"{name} only applies to hourly pay")
    return errors


def validate_period(period: PayPeriod) -> List[str]:
    """Domain rule violations for a pay period."""
    errors = []
    if period.start > period.end:
        errors.append(f"period start {period.start} is after end {period.end}")
    elif period.start.year != period.end.year:
        errors.append(f"period {period.start}..{period.end} spans more than one tax year")
    return errors


def validate_employment(employment: EmploymentInterval) -> List[str]:
    """Domain rule violations for an employment interval."""
    if employment.start and employment.end and employment.start > employment.end:
        return [f"employment start {employment.start} is after end {employment.end}"]
    return []
