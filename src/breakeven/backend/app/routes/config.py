"""Expose configuration metadata for API consumers.

These endpoints publish the YAML-backed year configuration so clients can
show the bracket tables and contribution parameters behind a calculation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from flask import Blueprint, jsonify

from breakeven.backend.app.http import problem_response
from breakeven.backend.app.services.calculators import format_percentage
from breakeven.backend.config.year_config import (
    JurisdictionConfig,
    TaxBracket,
    YearConfiguration,
    load_manifest,
    load_year_configuration,
)
from breakeven.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_brackets(brackets: Sequence[TaxBracket]) -> list[dict[str, Any]]:
    return [
        {
            "upper": bracket.upper_bound,
            "rate": bracket.rate,
            "rate_label": format_percentage(bracket.rate),
        }
        for bracket in brackets
    ]


def _serialise_jurisdiction(jurisdiction: JurisdictionConfig) -> dict[str, Any]:
    return {
        "name": jurisdiction.name,
        "brackets": _serialise_brackets(jurisdiction.brackets),
        "basic_personal_amount": jurisdiction.basic_personal_amount.model_dump(
            mode="json", exclude={"phased"}
        ),
        "lowest_rate": jurisdiction.lowest_rate,
    }


def _serialise_year(config: YearConfiguration) -> dict[str, Any]:
    return {
        "year": config.year,
        "meta": dict(config.meta),
        "federal": _serialise_jurisdiction(config.federal),
        "provincial": _serialise_jurisdiction(config.provincial),
        "basic_amount_phase_out": {
            "start": config.phase_out_start,
            "end": config.phase_out_end,
        },
        "pension": config.pension.model_dump(mode="json"),
        "pension_tier2": config.pension_tier2.model_dump(mode="json"),
        "insurance": config.insurance.model_dump(mode="json"),
        "employment_amount": config.employment_amount.model_dump(mode="json"),
        "solver": config.solver.model_dump(mode="json"),
    }


@blueprint.get("/years")
def list_years():
    """Return the configured tax years and the default selection."""

    manifest = load_manifest()
    years = [
        {
            "year": entry.year,
            "status": entry.status,
            "notes_url": entry.notes_url,
        }
        for entry in sorted(manifest.years, key=lambda entry: entry.year)
    ]
    default_year = years[-1]["year"] if years else None
    return jsonify({"years": years, "default_year": default_year})


@blueprint.get("/<int:year>")
def get_year(year: int):
    """Return the full configuration for ``year``."""

    try:
        configuration = load_year_configuration(year)
    except FileNotFoundError as exc:
        return problem_response("not_found", status=404, message=str(exc)).to_response()

    return jsonify(_serialise_year(configuration))
