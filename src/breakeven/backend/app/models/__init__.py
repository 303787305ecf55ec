"""Typed request/response models shared across the calculation services.

Requests and responses are Pydantic models so the HTTP layer and the service
layer validate against the same schema. Intermediate results computed by the
calculators are lightweight dataclasses; the service converts them into the
response models at the edge.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .api import (
    BreakEvenRequest,
    BreakEvenResponse,
    BreakEvenSummary,
    ContributionSummary,
    CreditSummary,
    DeductionSummary,
    PayrollRequest,
    PayrollResponse,
    PayrollSummary,
    ResponseMeta,
    format_validation_error,
)

__all__ = [
    "BreakEvenRequest",
    "BreakEvenResponse",
    "BreakEvenResult",
    "BreakEvenSummary",
    "ContributionBreakdown",
    "ContributionSummary",
    "CreditBreakdown",
    "CreditSummary",
    "DeductionBreakdown",
    "DeductionSummary",
    "PayrollBreakdown",
    "PayrollRequest",
    "PayrollResponse",
    "PayrollSummary",
    "ResponseMeta",
    "format_validation_error",
]


@dataclass(frozen=True, slots=True)
class ContributionBreakdown:
    """Pension tiers and insurance premium for one income."""

    pension_tier1: float = 0.0
    pension_tier2: float = 0.0
    insurance_premium: float = 0.0

    @property
    def pension_total(self) -> float:
        return self.pension_tier1 + self.pension_tier2

    @property
    def total(self) -> float:
        return self.pension_total + self.insurance_premium

    def as_dict(self) -> dict[str, float]:
        payload = asdict(self)
        payload["pension_total"] = self.pension_total
        return payload


@dataclass(frozen=True, slots=True)
class DeductionBreakdown:
    """Deductible portions of the pension contribution."""

    base: float = 0.0
    enhanced: float = 0.0

    @property
    def total(self) -> float:
        return self.base + self.enhanced

    def as_dict(self) -> dict[str, float]:
        payload = asdict(self)
        payload["total"] = self.total
        return payload


@dataclass(frozen=True, slots=True)
class CreditBreakdown:
    """The five non-refundable credits, already multiplied by their rates."""

    federal_basic: float = 0.0
    provincial_basic: float = 0.0
    employment: float = 0.0
    pension: float = 0.0
    insurance: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.federal_basic
            + self.provincial_basic
            + self.employment
            + self.pension
            + self.insurance
        )

    def as_dict(self) -> dict[str, float]:
        payload = asdict(self)
        payload["total"] = self.total
        return payload


@dataclass(frozen=True, slots=True)
class PayrollBreakdown:
    """Every intermediate figure of the payroll deduction pipeline."""

    income: float
    self_employed: bool
    contributions: ContributionBreakdown
    deductions: DeductionBreakdown
    taxable_income: float
    federal_tax: float
    provincial_tax: float
    credits: CreditBreakdown
    income_tax: float

    @property
    def gross_tax(self) -> float:
        return self.federal_tax + self.provincial_tax

    @property
    def total_payroll_deduction(self) -> float:
        return self.income_tax + self.contributions.total

    @property
    def net_income(self) -> float:
        return self.income - self.total_payroll_deduction

    @property
    def effective_deduction_rate(self) -> float:
        if self.income <= 0:
            return 0.0
        return self.total_payroll_deduction / self.income


@dataclass(frozen=True, slots=True)
class BreakEvenResult:
    """Outcome of the break-even search."""

    base_expense: float
    weekly_hours: float
    gross_income: float
    net_income: float
    hourly_wage: float
    weekly_wage: float
    iterations: int
    converged: bool
