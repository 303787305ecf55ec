"""Unit coverage for pension and insurance contributions."""

from __future__ import annotations

import pytest

from breakeven.backend.app.services.calculators import (
    InvalidInputError,
    calculate_insurance_premium,
    calculate_pension_tier1,
    calculate_pension_tier2,
    calculate_total_pension_contribution,
)
from breakeven.backend.config.year_config import YearConfiguration

INCOMES = [0.0, 3_500.0, 10_000.0, 45_000.0, 68_500.0, 70_000.0, 73_200.0, 150_000.0]


def test_tier1_is_zero_up_to_exemption(config: YearConfiguration) -> None:
    assert calculate_pension_tier1(0.0, False, config.pension) == 0.0
    assert calculate_pension_tier1(3_500.0, False, config.pension) == 0.0


def test_tier1_applies_base_rate_above_exemption(config: YearConfiguration) -> None:
    contribution = calculate_pension_tier1(60_000.0, False, config.pension)

    assert contribution == pytest.approx((60_000 - 3_500) * 0.0595)


def test_tier1_plateaus_at_ceiling(config: YearConfiguration) -> None:
    plateau = (68_500 - 3_500) * 0.0595

    assert calculate_pension_tier1(68_500.0, False, config.pension) == pytest.approx(plateau)
    assert calculate_pension_tier1(500_000.0, False, config.pension) == pytest.approx(plateau)


def test_tier2_starts_above_first_ceiling(config: YearConfiguration) -> None:
    assert calculate_pension_tier2(68_500.0, False, config.pension, config.pension_tier2) == 0.0

    contribution = calculate_pension_tier2(
        70_000.0, False, config.pension, config.pension_tier2
    )
    assert contribution == pytest.approx(1_500 * 0.04)


def test_tier2_plateaus_at_second_ceiling(config: YearConfiguration) -> None:
    contribution = calculate_pension_tier2(
        250_000.0, False, config.pension, config.pension_tier2
    )

    assert contribution == pytest.approx((73_200 - 68_500) * 0.04)


@pytest.mark.parametrize("income", INCOMES)
def test_self_employed_pension_is_double(config: YearConfiguration, income: float) -> None:
    employee = calculate_total_pension_contribution(
        income, False, config.pension, config.pension_tier2
    )
    self_employed = calculate_total_pension_contribution(
        income, True, config.pension, config.pension_tier2
    )

    assert self_employed == pytest.approx(2 * employee)


def test_insurance_premium_for_employee(config: YearConfiguration) -> None:
    assert calculate_insurance_premium(60_000.0, False, config.insurance) == pytest.approx(996.0)


def test_insurance_premium_plateaus_at_ceiling(config: YearConfiguration) -> None:
    premium = calculate_insurance_premium(90_000.0, False, config.insurance)

    assert premium == pytest.approx(63_200 * 0.0166)


@pytest.mark.parametrize("income", INCOMES)
def test_self_employed_pay_no_insurance(config: YearConfiguration, income: float) -> None:
    assert calculate_insurance_premium(income, True, config.insurance) == 0.0


@pytest.mark.parametrize("self_employed", [False, True])
def test_negative_income_is_rejected(config: YearConfiguration, self_employed: bool) -> None:
    with pytest.raises(InvalidInputError):
        calculate_pension_tier1(-1.0, self_employed, config.pension)
    with pytest.raises(InvalidInputError):
        calculate_pension_tier2(-1.0, self_employed, config.pension, config.pension_tier2)
    with pytest.raises(InvalidInputError):
        calculate_insurance_premium(-1.0, self_employed, config.insurance)
