"""Payroll engine bound to one immutable year configuration.

``PayrollEngine`` is the public entry point for library callers. It holds a
``YearConfiguration`` and delegates to the calculator functions, so several
engines for different years or jurisdictions can be used side by side. The
module-level functions are shortcuts bound to the default configured year.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from breakeven.backend.app.models import BreakEvenResult, PayrollBreakdown
from breakeven.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import (
    calculate_break_even,
    calculate_insurance_premium,
    calculate_payroll,
    calculate_total_pension_contribution,
)


@dataclass(frozen=True)
class PayrollEngine:
    """Deduction pipeline and break-even solver for a single configuration."""

    config: YearConfiguration

    @classmethod
    def for_year(cls, year: int | None = None) -> PayrollEngine:
        return cls(load_year_configuration(year if year is not None else default_year()))

    @property
    def year(self) -> int:
        return self.config.year

    def breakdown(self, income: float, self_employed: bool = False) -> PayrollBreakdown:
        return calculate_payroll(income, self_employed, self.config)

    def total_payroll_deduction(self, income: float, self_employed: bool = False) -> float:
        return self.breakdown(income, self_employed).total_payroll_deduction

    def income_tax_owed(self, income: float, self_employed: bool = False) -> float:
        return self.breakdown(income, self_employed).income_tax

    def net_income(self, income: float, self_employed: bool = False) -> float:
        return self.breakdown(income, self_employed).net_income

    def total_pension_contribution(self, income: float, self_employed: bool = False) -> float:
        return calculate_total_pension_contribution(
            income, self_employed, self.config.pension, self.config.pension_tier2
        )

    def insurance_premium(self, income: float, self_employed: bool = False) -> float:
        return calculate_insurance_premium(income, self_employed, self.config.insurance)

    def break_even(
        self, base_expense: float, weekly_hours: float, self_employed: bool = False
    ) -> BreakEvenResult:
        return calculate_break_even(base_expense, weekly_hours, self_employed, self.config)

    def break_even_wage(
        self, base_expense: float, weekly_hours: float, self_employed: bool = False
    ) -> float:
        """Return the hourly wage that nets ``base_expense`` over a year."""

        return self.break_even(base_expense, weekly_hours, self_employed).hourly_wage


@lru_cache(maxsize=8)
def get_engine(year: int | None = None) -> PayrollEngine:
    """Return a cached engine for ``year`` (the latest configured year by default)."""

    return PayrollEngine.for_year(year)


def total_payroll_deduction(income: float, self_employed: bool = False) -> float:
    return get_engine().total_payroll_deduction(income, self_employed)


def income_tax_owed(income: float, self_employed: bool = False) -> float:
    return get_engine().income_tax_owed(income, self_employed)


def total_pension_contribution(income: float, self_employed: bool = False) -> float:
    return get_engine().total_pension_contribution(income, self_employed)


def insurance_premium(income: float, self_employed: bool = False) -> float:
    return get_engine().insurance_premium(income, self_employed)


def break_even_wage(
    base_expense: float, weekly_hours: float, self_employed: bool = False
) -> float:
    return get_engine().break_even_wage(base_expense, weekly_hours, self_employed)


__all__ = [
    "PayrollEngine",
    "break_even_wage",
    "get_engine",
    "income_tax_owed",
    "insurance_premium",
    "total_payroll_deduction",
    "total_pension_contribution",
]
