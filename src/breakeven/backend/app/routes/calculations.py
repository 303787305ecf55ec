"""REST endpoints for payroll and break-even calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from breakeven.backend.services import (
    build_calculation_response,
    calculate_break_even_summary,
    calculate_payroll_summary,
    parse_calculation_payload,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/payroll")
def create_payroll_calculation() -> tuple[Any, int]:
    """Compute payroll deductions for the submitted income."""

    payload = parse_calculation_payload(request)
    result = calculate_payroll_summary(payload)

    return build_calculation_response(result)


@blueprint.post("/break-even")
def create_break_even_calculation() -> tuple[Any, int]:
    """Solve the wage that nets the submitted annual expense."""

    payload = parse_calculation_payload(request)
    result = calculate_break_even_summary(payload)

    return build_calculation_response(result)
