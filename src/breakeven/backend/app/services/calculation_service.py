"""Orchestrate request validation, year configuration, and calculations.

The calculation service validates incoming payloads against the shared request
models, resolves the year configuration, runs the payroll engine, and shapes
the rounded response. Profiling hooks live here so the calculators stay pure.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from breakeven.backend.app.models import (
    BreakEvenRequest,
    BreakEvenResponse,
    BreakEvenResult,
    PayrollBreakdown,
    PayrollRequest,
    PayrollResponse,
    format_validation_error,
)
from breakeven.backend.config.year_config import YearConfiguration, default_year

from .calculators import round_currency, round_rate
from .engine import get_engine

_LOGGER = logging.getLogger(__name__)

_RequestT = TypeVar("_RequestT", bound=BaseModel)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("BREAKEVEN_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _log_timings(operation: str, timings: dict[str, float] | None, start: float | None) -> None:
    if timings is None or start is None:
        return
    timings["total"] = perf_counter() - start
    _LOGGER.debug(
        "%s timings (ms): %s",
        operation,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


def _parse_request(
    payload: Mapping[str, Any] | BaseModel, model: type[_RequestT]
) -> _RequestT:
    if isinstance(payload, model):
        source: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        source = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return model.model_validate(source)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _resolve_year(year: int | None) -> int:
    return year if year is not None else default_year()


def _serialise_breakdown(breakdown: PayrollBreakdown) -> dict[str, Any]:
    contributions = {
        key: round_currency(value)
        for key, value in breakdown.contributions.as_dict().items()
    }
    deductions = {
        key: round_currency(value) for key, value in breakdown.deductions.as_dict().items()
    }
    credits = {
        key: round_currency(value) for key, value in breakdown.credits.as_dict().items()
    }
    return {
        "income": round_currency(breakdown.income),
        "contributions": contributions,
        "deductions": deductions,
        "taxable_income": round_currency(breakdown.taxable_income),
        "federal_tax": round_currency(breakdown.federal_tax),
        "provincial_tax": round_currency(breakdown.provincial_tax),
        "gross_tax": round_currency(breakdown.gross_tax),
        "credits": credits,
        "income_tax": round_currency(breakdown.income_tax),
        "total_payroll_deduction": round_currency(breakdown.total_payroll_deduction),
        "net_income": round_currency(breakdown.net_income),
        "effective_deduction_rate": round_rate(breakdown.effective_deduction_rate),
    }


def _serialise_break_even(result: BreakEvenResult) -> dict[str, Any]:
    return {
        "base_expense": round_currency(result.base_expense),
        "weekly_hours": result.weekly_hours,
        "gross_income": round_currency(result.gross_income),
        "net_income": round_currency(result.net_income),
        "hourly_wage": round_currency(result.hourly_wage),
        "weekly_wage": round_currency(result.weekly_wage),
        "iterations": result.iterations,
        "converged": result.converged,
    }


def _build_meta(config: YearConfiguration, self_employed: bool) -> dict[str, Any]:
    return {
        "year": config.year,
        "self_employed": self_employed,
        "federal": config.federal.name,
        "provincial": config.provincial.name,
    }


def calculate_payroll_summary(
    payload: Mapping[str, Any] | PayrollRequest,
) -> dict[str, Any]:
    """Compute the payroll deduction breakdown for the provided payload."""

    request_model = _parse_request(payload, PayrollRequest)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    engine = get_engine(_resolve_year(request_model.year))

    with _profile_section("payroll", timings):
        breakdown = engine.breakdown(request_model.income, request_model.self_employed)

    _log_timings("calculate_payroll_summary", timings, overall_start)

    response_model = PayrollResponse.model_validate(
        {
            "summary": _serialise_breakdown(breakdown),
            "meta": _build_meta(engine.config, request_model.self_employed),
        }
    )
    return response_model.model_dump(mode="json")


def calculate_break_even_summary(
    payload: Mapping[str, Any] | BreakEvenRequest,
) -> dict[str, Any]:
    """Solve the break-even wage for the provided payload."""

    request_model = _parse_request(payload, BreakEvenRequest)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    engine = get_engine(_resolve_year(request_model.year))
    self_employed = request_model.self_employed

    with _profile_section("solve", timings):
        result = engine.break_even(
            request_model.base_expense, request_model.weekly_hours, self_employed
        )

    with _profile_section("payroll", timings):
        breakdown = engine.breakdown(result.gross_income, self_employed)

    _log_timings("calculate_break_even_summary", timings, overall_start)

    response_model = BreakEvenResponse.model_validate(
        {
            "summary": _serialise_break_even(result),
            "payroll": _serialise_breakdown(breakdown),
            "meta": _build_meta(engine.config, self_employed),
        }
    )
    return response_model.model_dump(mode="json")


__all__ = ["calculate_break_even_summary", "calculate_payroll_summary"]
