"""Immutable pydantic models for bracket tables, contribution schemes and solver settings."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)


class ConfigurationError(ValueError):
    """Raised when a tax year configuration is malformed or inconsistent."""


class ImmutableModel(BaseModel):
    """Frozen model rejecting unknown keys, so loaded years are plain values."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """One tier of a bracket table; ``upper_bound`` is ``None`` for the open top tier."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0 or self.rate >= 1:
            raise ConfigurationError("Tax rates must be within [0, 1)")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


def _validate_bracket_sequence(brackets: Sequence[TaxBracket]) -> None:
    if not brackets:
        raise ConfigurationError("At least one tax bracket must be defined")
    last_upper: float | None = None
    for bracket in brackets[:-1]:
        upper = bracket.upper_bound
        if upper is None:
            raise ConfigurationError("Only the final tax bracket may have an open upper bound")
        if last_upper is not None and upper <= last_upper:
            raise ConfigurationError("Tax brackets must be in ascending order")
        last_upper = upper
    if brackets[-1].upper_bound is not None:
        raise ConfigurationError("Final tax bracket must have an open upper bound")


class BasicPersonalAmount(ImmutableModel):
    """Basic personal amount, optionally phased down between two brackets."""

    maximum: float
    minimum: float | None = None

    @model_validator(mode="after")
    def _validate_amounts(self) -> BasicPersonalAmount:
        if self.maximum < 0:
            raise ConfigurationError("Basic personal amount must be non-negative")
        if self.minimum is not None:
            if self.minimum < 0:
                raise ConfigurationError("Basic personal amount minimum must be non-negative")
            if self.minimum > self.maximum:
                raise ConfigurationError(
                    "Basic personal amount minimum cannot exceed the maximum"
                )
        return self

    @computed_field
    @property
    def phased(self) -> bool:
        return self.minimum is not None and self.minimum != self.maximum


class JurisdictionConfig(ImmutableModel):
    """Progressive bracket table and basic amount for one taxing authority."""

    name: str
    brackets: Sequence[TaxBracket] = Field(alias="tax_brackets")
    basic_personal_amount: BasicPersonalAmount

    @field_validator("basic_personal_amount", mode="before")
    @classmethod
    def _coerce_scalar_amount(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return {"maximum": float(value)}
        return value

    @model_validator(mode="after")
    def _validate_brackets(self) -> JurisdictionConfig:
        _validate_bracket_sequence(self.brackets)
        return self

    @computed_field
    @property
    def lowest_rate(self) -> float:
        return self.brackets[0].rate


class PensionConfig(ImmutableModel):
    """First-tier pension plan contribution parameters."""

    exemption: float = 0.0
    ceiling: float
    base_rate: float
    added_rate: float = 0.0

    @model_validator(mode="after")
    def _validate_values(self) -> PensionConfig:
        if self.exemption < 0:
            raise ConfigurationError("Pension exemption must be non-negative")
        if self.ceiling <= self.exemption:
            raise ConfigurationError("Pension ceiling must exceed the exemption")
        if not (0 < self.base_rate < 1):
            raise ConfigurationError("Pension base rate must be within (0, 1)")
        if self.added_rate < 0 or self.added_rate > self.base_rate:
            raise ConfigurationError(
                "Pension added rate must be non-negative and not exceed the base rate"
            )
        return self


class SecondTierPensionConfig(ImmutableModel):
    """Second pension band sitting between the first and second ceilings."""

    ceiling: float
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> SecondTierPensionConfig:
        if self.ceiling <= 0:
            raise ConfigurationError("Second-tier pension ceiling must be positive")
        if self.rate < 0 or self.rate >= 1:
            raise ConfigurationError("Second-tier pension rate must be within [0, 1)")
        return self


class InsuranceConfig(ImmutableModel):
    """Employment insurance premium parameters."""

    ceiling: float
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> InsuranceConfig:
        if self.ceiling <= 0:
            raise ConfigurationError("Insurable ceiling must be positive")
        if self.rate < 0 or self.rate >= 1:
            raise ConfigurationError("Insurance premium rate must be within [0, 1)")
        return self


class EmploymentAmountConfig(ImmutableModel):
    """Cap on the employment amount credited to employees."""

    cap: float

    @model_validator(mode="after")
    def _validate_cap(self) -> EmploymentAmountConfig:
        if self.cap < 0:
            raise ConfigurationError("Employment amount cap must be non-negative")
        return self


class SolverConfig(ImmutableModel):
    """Search constants for the break-even solver."""

    max_payroll_deduction_rate: float = 0.5
    precision: float = 0.01
    max_iterations: int = 200
    weeks_per_year: int = 52

    @model_validator(mode="after")
    def _validate_values(self) -> SolverConfig:
        if not (0 <= self.max_payroll_deduction_rate < 1):
            raise ConfigurationError("Maximum payroll deduction rate must be within [0, 1)")
        if self.precision <= 0:
            raise ConfigurationError("Solver precision must be positive")
        if self.max_iterations < 1:
            raise ConfigurationError("Solver requires at least one iteration")
        if self.weeks_per_year < 1:
            raise ConfigurationError("Weeks per year must be a positive integer")
        return self


class YearConfiguration(ImmutableModel):
    """Every parameter the payroll engine needs for one tax year."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    federal: JurisdictionConfig
    provincial: JurisdictionConfig
    pension: PensionConfig
    pension_tier2: SecondTierPensionConfig
    insurance: InsuranceConfig
    employment_amount: EmploymentAmountConfig
    solver: SolverConfig = Field(default_factory=SolverConfig)

    @model_validator(mode="before")
    @classmethod
    def _flatten_sections(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, dict):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        jurisdictions = prepared.pop("jurisdictions", None)
        if jurisdictions is not None:
            if not isinstance(jurisdictions, dict):
                raise ConfigurationError("'jurisdictions' section must be a mapping")
            for section in ("federal", "provincial"):
                payload = jurisdictions.get(section)
                if not isinstance(payload, dict):
                    raise ConfigurationError(
                        f"Jurisdiction configuration requires a '{section}' section"
                    )
                prepared[section] = payload

        contributions = prepared.pop("contributions", None)
        if contributions is not None:
            if not isinstance(contributions, dict):
                raise ConfigurationError("'contributions' section must be a mapping")
            pension = contributions.get("pension")
            if isinstance(pension, dict) and "tier2" in pension:
                pension = dict(pension)
                prepared["pension_tier2"] = pension.pop("tier2")
            prepared["pension"] = pension
            prepared["insurance"] = contributions.get("insurance")

        if prepared.get("solver") is None:
            prepared.pop("solver", None)

        return prepared

    @field_validator("meta")
    @classmethod
    def _freeze_meta(cls, meta: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(meta))

    @field_serializer("meta")
    def _serialise_meta(self, meta: Mapping[str, Any]) -> dict[str, Any]:
        return dict(meta)

    @model_validator(mode="after")
    def _validate_year(self) -> YearConfiguration:
        if len(self.federal.brackets) < 5:
            # The open top tier cannot end the phase-down, so tier four must be bounded.
            raise ConfigurationError(
                "Federal brackets require five tiers; the basic amount phase-down "
                "ends at the upper bound of the fourth tier"
            )
        if self.federal.basic_personal_amount.minimum is None:
            raise ConfigurationError("Federal basic personal amount requires a minimum")
        if self.pension_tier2.ceiling <= self.pension.ceiling:
            raise ConfigurationError(
                "Second-tier pension ceiling must exceed the first-tier ceiling"
            )
        return self

    @computed_field
    @property
    def phase_out_start(self) -> float:
        return float(self.federal.brackets[2].upper_bound)

    @computed_field
    @property
    def phase_out_end(self) -> float:
        return float(self.federal.brackets[3].upper_bound)


class TaxYearManifestEntry(ImmutableModel):
    """One shipped tax year; the file name defaults to ``<year>.yaml``."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename if self.filename else f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Index of the tax year files available to the engine."""

    years: Sequence[TaxYearManifestEntry]

    @field_validator("years")
    @classmethod
    def _reject_duplicates(
        cls, entries: Sequence[TaxYearManifestEntry]
    ) -> Sequence[TaxYearManifestEntry]:
        declared = [entry.year for entry in entries]
        duplicates = sorted({year for year in declared if declared.count(year) > 1})
        if duplicates:
            listed = ", ".join(str(year) for year in duplicates)
            raise ConfigurationError(f"Duplicate year {listed} in the manifest")
        return entries

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        """Return the entry for ``year``; raises :class:`KeyError` when absent."""

        entries = {entry.year: entry for entry in self.years}
        return entries[year]

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "BasicPersonalAmount",
    "ConfigurationError",
    "EmploymentAmountConfig",
    "ImmutableModel",
    "InsuranceConfig",
    "JurisdictionConfig",
    "PensionConfig",
    "SecondTierPensionConfig",
    "SolverConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
]
