"""Pension plan and employment insurance contribution helpers."""

from __future__ import annotations

from breakeven.backend.config.year_config import (
    InsuranceConfig,
    PensionConfig,
    SecondTierPensionConfig,
)

from .utils import require_non_negative


def _self_employed_factor(self_employed: bool) -> float:
    # Self-employed individuals pay both the employee and employer halves.
    return 2.0 if self_employed else 1.0


def calculate_pension_tier1(
    income: float, self_employed: bool, pension: PensionConfig
) -> float:
    """Return the first-tier pension contribution on ``income``."""

    income = require_non_negative(income, "income")
    if income <= pension.exemption:
        return 0.0

    pensionable = min(income - pension.exemption, pension.ceiling - pension.exemption)
    return pensionable * pension.base_rate * _self_employed_factor(self_employed)


def calculate_pension_tier2(
    income: float,
    self_employed: bool,
    pension: PensionConfig,
    tier2: SecondTierPensionConfig,
) -> float:
    """Return the second-tier contribution on earnings above the first ceiling."""

    income = require_non_negative(income, "income")
    if income <= pension.ceiling:
        return 0.0

    pensionable = min(income - pension.ceiling, tier2.ceiling - pension.ceiling)
    return pensionable * tier2.rate * _self_employed_factor(self_employed)


def calculate_total_pension_contribution(
    income: float,
    self_employed: bool,
    pension: PensionConfig,
    tier2: SecondTierPensionConfig,
) -> float:
    """Return the combined first- and second-tier pension contribution."""

    return calculate_pension_tier1(income, self_employed, pension) + calculate_pension_tier2(
        income, self_employed, pension, tier2
    )


def calculate_insurance_premium(
    income: float, self_employed: bool, insurance: InsuranceConfig
) -> float:
    """Return the employment insurance premium; self-employed persons are exempt."""

    income = require_non_negative(income, "income")
    if self_employed:
        return 0.0

    return min(income, insurance.ceiling) * insurance.rate


__all__ = [
    "calculate_insurance_premium",
    "calculate_pension_tier1",
    "calculate_pension_tier2",
    "calculate_total_pension_contribution",
]
