"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from breakeven.backend.services.request_parser import parse_calculation_payload


def test_parse_payload_uses_query_year(app: Flask) -> None:
    """The ``year`` query parameter fills in a missing body field."""

    with app.test_request_context(
        "/api/v1/payroll?year=2024",
        method="POST",
        json={"income": 50_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload == {"income": 50_000, "year": 2024}


def test_parse_payload_prefers_body_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/payroll?year=2030",
        method="POST",
        json={"year": 2024, "income": 50_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload["year"] == 2024


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/payroll",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/payroll",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_calculation_payload(request)
