"""Compose contributions, deductions, credits and tax into one breakdown."""

from __future__ import annotations

from breakeven.backend.app.models import (
    ContributionBreakdown,
    DeductionBreakdown,
    PayrollBreakdown,
)
from breakeven.backend.config.year_config import YearConfiguration

from .contributions import (
    calculate_insurance_premium,
    calculate_pension_tier1,
    calculate_pension_tier2,
)
from .credits import calculate_credits
from .deductions import calculate_base_deduction, calculate_enhanced_deduction
from .income_tax import (
    calculate_federal_tax,
    calculate_income_tax,
    calculate_provincial_tax,
    calculate_taxable_income,
)
from .utils import require_non_negative


def calculate_payroll(
    income: float, self_employed: bool, config: YearConfiguration
) -> PayrollBreakdown:
    """Run the full deduction pipeline for ``income``."""

    income = require_non_negative(income, "income")

    contributions = ContributionBreakdown(
        pension_tier1=calculate_pension_tier1(income, self_employed, config.pension),
        pension_tier2=calculate_pension_tier2(
            income, self_employed, config.pension, config.pension_tier2
        ),
        insurance_premium=calculate_insurance_premium(
            income, self_employed, config.insurance
        ),
    )

    deductions = DeductionBreakdown(
        base=calculate_base_deduction(
            contributions.pension_tier1, self_employed, config.pension
        ),
        enhanced=calculate_enhanced_deduction(
            contributions.pension_tier1, contributions.pension_tier2, config.pension
        ),
    )

    taxable_income = calculate_taxable_income(income, deductions.total)
    federal_tax = calculate_federal_tax(taxable_income, config)
    provincial_tax = calculate_provincial_tax(taxable_income, config)

    credits = calculate_credits(
        income,
        taxable_income,
        self_employed,
        contributions.pension_total,
        deductions.enhanced,
        contributions.insurance_premium,
        config,
    )

    return PayrollBreakdown(
        income=income,
        self_employed=self_employed,
        contributions=contributions,
        deductions=deductions,
        taxable_income=taxable_income,
        federal_tax=federal_tax,
        provincial_tax=provincial_tax,
        credits=credits,
        income_tax=calculate_income_tax(federal_tax + provincial_tax, credits.total),
    )


def calculate_total_payroll_deduction(
    income: float, self_employed: bool, config: YearConfiguration
) -> float:
    """Return income tax owed plus pension contributions plus insurance premium."""

    return calculate_payroll(income, self_employed, config).total_payroll_deduction


def calculate_net_income(
    income: float, self_employed: bool, config: YearConfiguration
) -> float:
    return calculate_payroll(income, self_employed, config).net_income


__all__ = [
    "calculate_net_income",
    "calculate_payroll",
    "calculate_total_payroll_deduction",
]
