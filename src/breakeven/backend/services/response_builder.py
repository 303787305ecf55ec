"""Render calculation results as Flask JSON responses."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from flask import jsonify


def build_calculation_response(
    payload: Mapping[str, Any], status: HTTPStatus = HTTPStatus.OK
) -> tuple[Any, int]:
    """Return ``(response, status)`` for a payroll or break-even ``payload``."""

    return jsonify(dict(payload)), int(status)
