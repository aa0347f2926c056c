"""Money helpers shared by every euro-bearing calculation.

All payslip figures are Decimal and rounded to whole cents with
ROUND_HALF_UP at the point they are computed, so the same inputs produce
the same cents on every platform.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, str, float]


def to_money(value: MoneyLike) -> Decimal:
    """Convert a number to Decimal without going through binary float math.

    Floats are converted via their shortest repr (``str(3500.1)`` ->
    ``"3500.1"``), not their exact binary expansion.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return result


def round_cents(amount: MoneyLike) -> Decimal:
    """Round to 2 decimal places, half-up (payslip rounding).

    Example: 2370.967741... -> 2370.97, 0.005 -> 0.01
    """
    return to_money(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate_pct: Decimal) -> Decimal:
    """Unrounded ``amount * rate_pct / 100``."""
    return amount * rate_pct / Decimal(100)


def format_euro(amount: Decimal) -> str:
    """Format as ``€1,234.56`` (negative amounts as ``-€1,234.56``)."""
    rounded = round_cents(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}€{abs(rounded):,.2f}"
