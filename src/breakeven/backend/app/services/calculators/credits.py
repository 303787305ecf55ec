"""Non-refundable tax credit helpers.

Each credit is returned as a reduction of tax owed, i.e. the eligible amount
already multiplied by the lowest marginal rate of the relevant bracket table.
Contribution credits use the combined federal and provincial lowest rates.
"""

from __future__ import annotations

from breakeven.backend.app.models import CreditBreakdown
from breakeven.backend.config.year_config import YearConfiguration

from .utils import require_non_negative


def federal_basic_amount(taxable_income: float, config: YearConfiguration) -> float:
    """Return the federal basic personal amount after the high-income phase-down."""

    taxable_income = require_non_negative(taxable_income, "taxable_income")
    amount = config.federal.basic_personal_amount
    minimum = amount.minimum if amount.minimum is not None else amount.maximum

    start = config.phase_out_start
    end = config.phase_out_end
    if taxable_income <= start:
        return amount.maximum
    if taxable_income >= end:
        return minimum

    ratio = (taxable_income - start) / (end - start)
    return amount.maximum - ratio * (amount.maximum - minimum)


def calculate_federal_basic_credit(taxable_income: float, config: YearConfiguration) -> float:
    return federal_basic_amount(taxable_income, config) * config.federal.lowest_rate


def calculate_provincial_basic_credit(config: YearConfiguration) -> float:
    return config.provincial.basic_personal_amount.maximum * config.provincial.lowest_rate


def calculate_employment_credit(
    income: float, self_employed: bool, config: YearConfiguration
) -> float:
    """Return the employment amount credit; unavailable to the self-employed."""

    income = require_non_negative(income, "income")
    if self_employed:
        return 0.0
    return min(config.employment_amount.cap, income) * config.federal.lowest_rate


def _combined_lowest_rate(config: YearConfiguration) -> float:
    return config.federal.lowest_rate + config.provincial.lowest_rate


def calculate_pension_credit(
    total_pension_contribution: float,
    enhanced_deduction: float,
    self_employed: bool,
    config: YearConfiguration,
) -> float:
    """Return the credit on the non-deductible part of the pension contribution."""

    base = total_pension_contribution - enhanced_deduction
    if self_employed:
        # Only the employee-equivalent half is creditable.
        base /= 2
    if base < 0:
        base = 0.0
    return _combined_lowest_rate(config) * base


def calculate_insurance_credit(insurance_premium: float, config: YearConfiguration) -> float:
    return _combined_lowest_rate(config) * insurance_premium


def calculate_credits(
    income: float,
    taxable_income: float,
    self_employed: bool,
    total_pension_contribution: float,
    enhanced_deduction: float,
    insurance_premium: float,
    config: YearConfiguration,
) -> CreditBreakdown:
    """Return every credit for the supplied income and contributions."""

    return CreditBreakdown(
        federal_basic=calculate_federal_basic_credit(taxable_income, config),
        provincial_basic=calculate_provincial_basic_credit(config),
        employment=calculate_employment_credit(income, self_employed, config),
        pension=calculate_pension_credit(
            total_pension_contribution, enhanced_deduction, self_employed, config
        ),
        insurance=calculate_insurance_credit(insurance_premium, config),
    )


__all__ = [
    "calculate_credits",
    "calculate_employment_credit",
    "calculate_federal_basic_credit",
    "calculate_insurance_credit",
    "calculate_pension_credit",
    "calculate_provincial_basic_credit",
    "federal_basic_amount",
]
