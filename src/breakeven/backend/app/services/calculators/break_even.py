"""Break-even wage solver.

Net income is monotonic in gross income, so the gross income that nets a
target amount is found by bisection. The search interval starts at the
target itself (deductions are never negative) and at the target grossed up
by the configured maximum payroll deduction rate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from breakeven.backend.app.models import BreakEvenResult
from breakeven.backend.config.year_config import SolverConfig, YearConfiguration

from .payroll import calculate_net_income
from .utils import require_non_negative, require_positive

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchInterval:
    """Bisection state: the bracketing interval and the iterations spent."""

    lower: float
    upper: float
    iterations: int = 0

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2

    @property
    def width(self) -> float:
        return abs(self.upper - self.lower)

    def narrow(self, overshoot: bool) -> SearchInterval:
        """Keep the half that still brackets the target."""

        midpoint = self.midpoint
        if overshoot:
            return SearchInterval(self.lower, midpoint, self.iterations + 1)
        return SearchInterval(midpoint, self.upper, self.iterations + 1)

    def collapse(self) -> SearchInterval:
        midpoint = self.midpoint
        return SearchInterval(midpoint, midpoint, self.iterations + 1)


def search_interval(base_expense: float, solver: SolverConfig) -> SearchInterval:
    """Return the initial interval bracketing the break-even gross income."""

    base_expense = require_non_negative(base_expense, "base_expense")
    upper = base_expense / (1 - solver.max_payroll_deduction_rate)
    return SearchInterval(base_expense, upper)


def bisect(
    target: float,
    evaluate: Callable[[float], float],
    interval: SearchInterval,
    solver: SolverConfig,
) -> SearchInterval:
    """Narrow ``interval`` until ``evaluate`` meets ``target`` within precision.

    Stops once the interval is no wider than ``solver.precision`` or after
    ``solver.max_iterations`` evaluations, whichever comes first.
    """

    while interval.width > solver.precision and interval.iterations < solver.max_iterations:
        value = evaluate(interval.midpoint)
        if value == target:
            return interval.collapse()
        interval = interval.narrow(value > target)

    return interval


def solve_gross_income(
    base_expense: float, self_employed: bool, config: YearConfiguration
) -> SearchInterval:
    """Return the final bisection interval for the gross income netting ``base_expense``."""

    solver = config.solver
    initial = search_interval(base_expense, solver)

    def evaluate(income: float) -> float:
        return calculate_net_income(income, self_employed, config)

    if initial.width > 0 and evaluate(initial.upper) < base_expense:
        _LOGGER.warning(
            "Upper bound %.2f does not reach net income %.2f; "
            "max_payroll_deduction_rate=%s is too low for year %s",
            initial.upper,
            base_expense,
            solver.max_payroll_deduction_rate,
            config.year,
        )

    result = bisect(base_expense, evaluate, initial, solver)

    if result.width > solver.precision:
        _LOGGER.warning(
            "Break-even search stopped after %d iterations with interval width %.6f",
            result.iterations,
            result.width,
        )
    else:
        _LOGGER.debug(
            "Break-even search converged after %d iterations on [%.4f, %.4f]",
            result.iterations,
            result.lower,
            result.upper,
        )

    return result


def calculate_break_even(
    base_expense: float,
    weekly_hours: float,
    self_employed: bool,
    config: YearConfiguration,
) -> BreakEvenResult:
    """Return the gross income and wage required to net ``base_expense``."""

    base_expense = require_non_negative(base_expense, "base_expense")
    weekly_hours = require_positive(weekly_hours, "weekly_hours")

    interval = solve_gross_income(base_expense, self_employed, config)
    gross_income = interval.midpoint
    weeks = config.solver.weeks_per_year

    return BreakEvenResult(
        base_expense=base_expense,
        weekly_hours=weekly_hours,
        gross_income=gross_income,
        net_income=calculate_net_income(gross_income, self_employed, config),
        hourly_wage=gross_income / (weeks * weekly_hours),
        weekly_wage=gross_income / weeks,
        iterations=interval.iterations,
        converged=interval.width <= config.solver.precision,
    )


__all__ = [
    "SearchInterval",
    "bisect",
    "calculate_break_even",
    "search_interval",
    "solve_gross_income",
]
