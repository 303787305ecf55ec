"""Locate, parse and cache the YAML tax year configuration files.

Every shipped year lives in ``data/<year>.yaml`` and is declared in
``data/manifest.yaml``. Loaded configurations are immutable, so the cached
instances can be shared freely between payroll engines.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .schema import (
    BasicPersonalAmount,
    ConfigurationError,
    EmploymentAmountConfig,
    InsuranceConfig,
    JurisdictionConfig,
    PensionConfig,
    SecondTierPensionConfig,
    SolverConfig,
    TaxBracket,
    TaxYearManifest,
    TaxYearManifestEntry,
    YearConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"{path.name} must contain a mapping at the top level")
    return document


def _validate(model: type[_ModelT], raw: dict[str, Any], context: str) -> _ModelT:
    try:
        return model.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"{context}: {error}") from error


@lru_cache(maxsize=1)
def load_manifest() -> TaxYearManifest:
    """Return the parsed manifest of shipped tax years."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError(f"Configuration manifest missing: {MANIFEST_FILE}")
    return _validate(TaxYearManifest, _read_mapping(MANIFEST_FILE), "Invalid manifest")


def manifest_entries() -> Sequence[TaxYearManifestEntry]:
    return load_manifest().years


def parse_year_configuration(raw_config: dict[str, Any]) -> YearConfiguration:
    """Validate an in-memory mapping into a :class:`YearConfiguration`.

    Useful for building configurations in code (tests, alternative
    jurisdictions) without writing them to the data directory first.
    """

    label = raw_config.get("year", "<unknown>")
    return _validate(YearConfiguration, raw_config, f"Invalid configuration for {label}")


def _config_path(year: int) -> Path:
    try:
        entry = load_manifest().get_entry(year)
    except KeyError as exc:
        raise FileNotFoundError(f"Tax year {year} is not declared in the manifest") from exc

    path = CONFIG_DIRECTORY / entry.resolved_filename
    if not path.exists():
        raise FileNotFoundError(f"Tax year {year} declares a missing file: {path.name}")
    return path


@lru_cache(maxsize=8)
def load_year_configuration(year: int) -> YearConfiguration:
    """Return the immutable configuration for ``year``.

    Raises :class:`FileNotFoundError` for undeclared years and
    :class:`ConfigurationError` when the file fails validation.
    """

    raw_config = _read_mapping(_config_path(year))
    raw_config.setdefault("year", year)
    configuration = parse_year_configuration(raw_config)

    if configuration.year != year:
        raise ConfigurationError(
            f"Configuration year mismatch: {configuration.year} found in the file for {year}"
        )
    return configuration


def available_years() -> Sequence[int]:
    return load_manifest().supported_years


def default_year() -> int:
    """Return the latest declared tax year."""

    years = available_years()
    if not years:
        raise ConfigurationError("The manifest does not declare any tax year")
    return years[-1]


__all__ = [
    "BasicPersonalAmount",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "EmploymentAmountConfig",
    "InsuranceConfig",
    "JurisdictionConfig",
    "MANIFEST_FILE",
    "PensionConfig",
    "SecondTierPensionConfig",
    "SolverConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "YearConfiguration",
    "available_years",
    "default_year",
    "load_manifest",
    "load_year_configuration",
    "manifest_entries",
    "parse_year_configuration",
]
