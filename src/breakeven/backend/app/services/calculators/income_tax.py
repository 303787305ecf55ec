"""Taxable income and income tax owed."""

from __future__ import annotations

from breakeven.backend.config.year_config import YearConfiguration

from .utils import calculate_progressive_tax, require_non_negative


def calculate_taxable_income(income: float, total_deduction: float) -> float:
    """Return gross income less deductions, floored at zero."""

    income = require_non_negative(income, "income")
    taxable = income - total_deduction
    return taxable if taxable > 0 else 0.0


def calculate_federal_tax(taxable_income: float, config: YearConfiguration) -> float:
    return calculate_progressive_tax(taxable_income, config.federal.brackets)


def calculate_provincial_tax(taxable_income: float, config: YearConfiguration) -> float:
    return calculate_progressive_tax(taxable_income, config.provincial.brackets)


def calculate_gross_tax(taxable_income: float, config: YearConfiguration) -> float:
    """Return combined federal and provincial tax before credits."""

    return calculate_federal_tax(taxable_income, config) + calculate_provincial_tax(
        taxable_income, config
    )


def calculate_income_tax(gross_tax: float, total_credits: float) -> float:
    """Return tax owed after credits; credits are not refundable."""

    owed = gross_tax - total_credits
    return owed if owed > 0 else 0.0


__all__ = [
    "calculate_federal_tax",
    "calculate_gross_tax",
    "calculate_income_tax",
    "calculate_provincial_tax",
    "calculate_taxable_income",
]
