"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Real

from breakeven.backend.config.year_config import TaxBracket


class InvalidInputError(ValueError):
    """Raised when an amount is not a finite, non-negative number."""


def require_non_negative(value: object, field_name: str = "amount") -> float:
    """Return ``value`` as a float or raise :class:`InvalidInputError`."""

    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"Field '{field_name}' must be a number")
    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidInputError(f"Field '{field_name}' must be a finite number")
    if amount < 0:
        raise InvalidInputError(f"Field '{field_name}' cannot be negative")
    return amount


def require_positive(value: object, field_name: str) -> float:
    """Return ``value`` as a float, rejecting zero as well as negatives."""

    amount = require_non_negative(value, field_name)
    if amount == 0:
        raise InvalidInputError(f"Field '{field_name}' must be greater than zero")
    return amount


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = round(value * 100, 4)
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def calculate_progressive_tax(amount: float, brackets: Sequence[TaxBracket]) -> float:
    """Calculate progressive tax for ``amount`` using ``brackets``.

    Every bracket whose upper bound is exceeded is charged in full; the
    remainder is charged at the rate of the bracket it falls into. The open
    final bracket absorbs whatever is left.
    """

    amount = require_non_negative(amount, "taxable_income")
    if amount == 0:
        return 0.0

    total = 0.0
    lower_bound = 0.0

    for bracket in brackets:
        upper = bracket.upper_bound
        if upper is None or amount <= upper:
            total += (amount - lower_bound) * bracket.rate
            break

        total += (upper - lower_bound) * bracket.rate
        lower_bound = upper

    return total


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


def round_rate(value: float) -> float:
    """Round rate values to four decimals."""

    return round(value, 4)
