"""Unit coverage for the break-even bisection solver."""

from __future__ import annotations

import logging

import pytest

from breakeven.backend.app.services import engine as engine_module
from breakeven.backend.app.services.calculators import (
    InvalidInputError,
    SearchInterval,
    bisect,
    calculate_break_even,
    calculate_total_payroll_deduction,
)
from breakeven.backend.app.services.calculators.break_even import search_interval
from breakeven.backend.config.year_config import SolverConfig, YearConfiguration


@pytest.mark.parametrize("self_employed", [False, True])
def test_round_trip_recovers_base_expense(
    config: YearConfiguration, self_employed: bool
) -> None:
    result = calculate_break_even(40_000.0, 40.0, self_employed, config)

    gross = result.hourly_wage * 52 * 40
    net = gross - calculate_total_payroll_deduction(gross, self_employed, config)

    assert net == pytest.approx(40_000.0, abs=0.01)
    assert result.converged
    assert result.iterations <= config.solver.max_iterations


def test_result_reports_weekly_wage_and_net_income(config: YearConfiguration) -> None:
    result = calculate_break_even(40_000.0, 37.5, False, config)

    assert result.weekly_wage == pytest.approx(result.gross_income / 52)
    assert result.hourly_wage == pytest.approx(result.gross_income / (52 * 37.5))
    assert result.net_income == pytest.approx(40_000.0, abs=0.01)
    assert result.gross_income > 40_000.0


def test_zero_expense_needs_zero_wage(config: YearConfiguration) -> None:
    result = calculate_break_even(0.0, 40.0, False, config)

    assert result.gross_income == 0.0
    assert result.hourly_wage == 0.0
    assert result.iterations == 0
    assert result.converged


def test_initial_interval_uses_deduction_cap(config: YearConfiguration) -> None:
    interval = search_interval(40_000.0, config.solver)

    assert interval.lower == 40_000.0
    assert interval.upper == pytest.approx(80_000.0)
    assert interval.iterations == 0


def test_interval_narrows_towards_target() -> None:
    interval = SearchInterval(0.0, 100.0)

    assert interval.narrow(True) == SearchInterval(0.0, 50.0, 1)
    assert interval.narrow(False) == SearchInterval(50.0, 100.0, 1)


def test_exact_match_returns_immediately() -> None:
    result = bisect(50.0, lambda value: value, SearchInterval(0.0, 100.0), SolverConfig())

    assert result == SearchInterval(50.0, 50.0, 1)


def test_iteration_cap_stops_search() -> None:
    solver = SolverConfig(max_iterations=3)

    result = bisect(10.0, lambda value: value, SearchInterval(0.0, 1_000.0), solver)

    assert result.iterations == 3
    assert result.width == pytest.approx(125.0)


def test_capped_search_is_reported_as_unconverged(
    config: YearConfiguration, caplog: pytest.LogCaptureFixture
) -> None:
    capped = config.model_copy(
        update={"solver": config.solver.model_copy(update={"max_iterations": 5})}
    )

    with caplog.at_level(logging.WARNING):
        result = calculate_break_even(40_000.0, 40.0, False, capped)

    assert not result.converged
    assert result.iterations == 5
    assert "stopped after 5 iterations" in caplog.text


def test_low_deduction_cap_is_logged(
    config: YearConfiguration, caplog: pytest.LogCaptureFixture
) -> None:
    tight = config.model_copy(
        update={
            "solver": config.solver.model_copy(update={"max_payroll_deduction_rate": 0.1})
        }
    )

    with caplog.at_level(logging.WARNING):
        calculate_break_even(40_000.0, 40.0, False, tight)

    assert "does not reach net income" in caplog.text


@pytest.mark.parametrize("base_expense", [-0.01, -40_000.0, float("nan")])
def test_invalid_base_expense_is_rejected(config: YearConfiguration, base_expense: float) -> None:
    with pytest.raises(InvalidInputError):
        calculate_break_even(base_expense, 40.0, False, config)


@pytest.mark.parametrize("weekly_hours", [0.0, -40.0, float("inf")])
def test_invalid_weekly_hours_are_rejected(config: YearConfiguration, weekly_hours: float) -> None:
    with pytest.raises(InvalidInputError):
        calculate_break_even(40_000.0, weekly_hours, False, config)


def test_module_level_break_even_wage() -> None:
    engine_module.get_engine.cache_clear()

    wage = engine_module.break_even_wage(40_000.0, 40.0)

    gross = wage * 52 * 40
    assert gross - engine_module.total_payroll_deduction(gross) == pytest.approx(
        40_000.0, abs=0.01
    )
