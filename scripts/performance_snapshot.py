#!/usr/bin/env python3
"""Collect baseline timing for payroll and break-even calculations."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Callable

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from breakeven.backend.app.services.calculation_service import (  # noqa: E402
    calculate_break_even_summary,
    calculate_payroll_summary,
)

PAYROLL_PAYLOAD = {"income": 72_000, "self_employed": False}
BREAK_EVEN_PAYLOAD = {"base_expense": 40_000, "weekly_hours": 40, "self_employed": True}


def measure(operation: Callable[[dict[str, Any]], Any], payload: dict[str, Any], iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated calls of ``operation``."""

    operation(dict(payload))  # Warm configuration cache
    start = perf_counter()
    for _ in range(iterations):
        operation(dict(payload))
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("BREAKEVEN_PROFILE_ITERATIONS", "75"))
    report = {
        "payroll": measure(calculate_payroll_summary, PAYROLL_PAYLOAD, iterations),
        "break_even": measure(calculate_break_even_summary, BREAK_EVEN_PAYLOAD, iterations),
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
