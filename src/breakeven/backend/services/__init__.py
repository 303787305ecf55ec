"""Service-layer helpers for the breakeven backend."""

from breakeven.backend.app.services.calculation_service import (
    calculate_break_even_summary,
    calculate_payroll_summary,
)

from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "build_calculation_response",
    "calculate_break_even_summary",
    "calculate_payroll_summary",
    "parse_calculation_payload",
]
