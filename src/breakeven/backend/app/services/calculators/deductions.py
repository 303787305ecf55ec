"""Tax-deductible share of pension contributions."""

from __future__ import annotations

from breakeven.backend.config.year_config import PensionConfig


def calculate_base_deduction(
    tier1_contribution: float, self_employed: bool, pension: PensionConfig
) -> float:
    """Return the employer-equivalent base portion deductible by the self-employed.

    Employees receive nothing here: the base portion of their own
    contribution is credited, not deducted.
    """

    if not self_employed:
        return 0.0

    share = (pension.base_rate - pension.added_rate) / (2 * pension.base_rate)
    return share * tier1_contribution


def calculate_enhanced_deduction(
    tier1_contribution: float, tier2_contribution: float, pension: PensionConfig
) -> float:
    """Return the enhanced pension layer, deductible for every contributor."""

    return (pension.added_rate / pension.base_rate) * tier1_contribution + tier2_contribution


def calculate_total_deduction(
    tier1_contribution: float,
    tier2_contribution: float,
    self_employed: bool,
    pension: PensionConfig,
) -> float:
    """Return the amount subtracted from gross income to reach taxable income."""

    return calculate_base_deduction(
        tier1_contribution, self_employed, pension
    ) + calculate_enhanced_deduction(tier1_contribution, tier2_contribution, pension)


__all__ = [
    "calculate_base_deduction",
    "calculate_enhanced_deduction",
    "calculate_total_deduction",
]
