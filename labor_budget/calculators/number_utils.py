"""Numeric utilities shared by the calculators.

Every ratio in the engine goes through ``safe_divide`` so that a zero divisor
yields zero instead of an exception or an infinite value.
"""

from decimal import Decimal
from typing import Iterable

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning zero when the denominator is zero.

    Example:
        >>> safe_divide(Decimal("25"), Decimal("40"))
        Decimal('0.625')
        >>> safe_divide(Decimal("25"), Decimal("0"))
        Decimal('0')
    """
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimal values, starting from Decimal zero.

    ``sum`` on an empty iterable returns the int ``0``; starting from a
    Decimal keeps the result type stable.
    """
    return sum(values, ZERO)


def percentage_of(value: Decimal, percentage: Decimal) -> Decimal:
    """Apply a 0-100 percentage to a value.

    Example:
        >>> percentage_of(Decimal("80"), Decimal("50"))
        Decimal('40')
    """
    return value * percentage / HUNDRED
