"""Pydantic models describing the public API surface."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

__all__ = [
    "PayrollRequest",
    "BreakEvenRequest",
    "ContributionSummary",
    "DeductionSummary",
    "CreditSummary",
    "PayrollSummary",
    "BreakEvenSummary",
    "ResponseMeta",
    "PayrollResponse",
    "BreakEvenResponse",
    "format_validation_error",
]


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=0)
    self_employed: bool = False

    @field_validator("self_employed", mode="before")
    @classmethod
    def _coerce_self_employed(cls, value: Any) -> Any:
        if value is None:
            return False
        return value


class PayrollRequest(_RequestModel):
    """Payload accepted by the payroll deduction endpoint."""

    income: float = Field(..., ge=0, allow_inf_nan=False)


class BreakEvenRequest(_RequestModel):
    """Payload accepted by the break-even wage endpoint."""

    base_expense: float = Field(..., ge=0, allow_inf_nan=False)
    weekly_hours: float = Field(..., gt=0, allow_inf_nan=False)


class ContributionSummary(BaseModel):
    """Pension and insurance contributions."""

    model_config = ConfigDict(extra="forbid")

    pension_tier1: float
    pension_tier2: float
    pension_total: float
    insurance_premium: float


class DeductionSummary(BaseModel):
    """Portions of pension contributions deducted from income."""

    model_config = ConfigDict(extra="forbid")

    base: float
    enhanced: float
    total: float


class CreditSummary(BaseModel):
    """Non-refundable credits expressed as tax reductions."""

    model_config = ConfigDict(extra="forbid")

    federal_basic: float
    provincial_basic: float
    employment: float
    pension: float
    insurance: float
    total: float


class PayrollSummary(BaseModel):
    """Full payroll deduction breakdown for one income."""

    model_config = ConfigDict(extra="forbid")

    income: float
    contributions: ContributionSummary
    deductions: DeductionSummary
    taxable_income: float
    federal_tax: float
    provincial_tax: float
    gross_tax: float
    credits: CreditSummary
    income_tax: float
    total_payroll_deduction: float
    net_income: float
    effective_deduction_rate: float


class BreakEvenSummary(BaseModel):
    """Solved gross income and wage for a target net income."""

    model_config = ConfigDict(extra="forbid")

    base_expense: float
    weekly_hours: float
    gross_income: float
    net_income: float
    hourly_wage: float
    weekly_wage: float
    iterations: int
    converged: bool


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    year: int
    self_employed: bool
    federal: str
    provincial: str


class PayrollResponse(BaseModel):
    """Response payload produced for payroll deduction requests."""

    model_config = ConfigDict(extra="forbid")

    summary: PayrollSummary
    meta: ResponseMeta


class BreakEvenResponse(BaseModel):
    """Response payload produced for break-even requests."""

    model_config = ConfigDict(extra="forbid")

    summary: BreakEvenSummary
    payroll: PayrollSummary
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lowered = message.lower()
        if "greater than or equal to 0" in lowered:
            message = "value cannot be negative"
        elif "greater than 0" in lowered:
            message = "value must be greater than zero"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
