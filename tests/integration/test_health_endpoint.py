"""Integration tests for the health endpoint."""

from http import HTTPStatus

from flask.testing import FlaskClient

from breakeven.backend.config import year_config
from breakeven.backend.version import get_project_version


def test_health_reports_version_and_tax_years(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.mimetype == "application/json"
    payload = response.get_json()
    assert payload == {
        "status": "ok",
        "version": get_project_version(),
        "supported_years": list(year_config.available_years()),
        "default_year": year_config.default_year(),
    }
    assert 2024 in payload["supported_years"]


def test_health_default_year_is_served_by_payroll_endpoint(client: FlaskClient) -> None:
    default_year = client.get("/health").get_json()["default_year"]

    response = client.post("/api/v1/payroll", json={"income": 60_000})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["meta"]["year"] == default_year
