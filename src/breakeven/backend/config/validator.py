"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Sequence

from .year_config import (
    ConfigurationError,
    InsuranceConfig,
    JurisdictionConfig,
    PensionConfig,
    SecondTierPensionConfig,
    SolverConfig,
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_jurisdiction(scope: str, jurisdiction: JurisdictionConfig) -> list[str]:
    errors: list[str] = []

    previous_rate: float | None = None
    for index, bracket in enumerate(jurisdiction.brackets):
        if bracket.rate < 0 or bracket.rate >= 1:
            errors.append(
                _format_scope(
                    f"{scope}.brackets[{index}]",
                    f"rate {bracket.rate} must be within [0, 1)",
                )
            )
        if previous_rate is not None and bracket.rate < previous_rate:
            errors.append(
                _format_scope(
                    f"{scope}.brackets[{index}]",
                    "marginal rates must not decrease between brackets",
                )
            )
        previous_rate = bracket.rate

    amount = jurisdiction.basic_personal_amount
    if amount.maximum <= 0:
        errors.append(_format_scope(scope, "basic personal amount should be positive"))
    if amount.minimum is not None and amount.minimum > amount.maximum:
        errors.append(
            _format_scope(scope, "basic personal amount minimum exceeds the maximum")
        )

    return errors


def _validate_pension(
    pension: PensionConfig, tier2: SecondTierPensionConfig
) -> list[str]:
    errors: list[str] = []

    if pension.added_rate >= pension.base_rate:
        errors.append(
            _format_scope(
                "contributions.pension",
                "added rate must be strictly below the base rate",
            )
        )
    if tier2.ceiling <= pension.ceiling:
        errors.append(
            _format_scope(
                "contributions.pension.tier2",
                (
                    f"ceiling {tier2.ceiling} should exceed the first-tier "
                    f"ceiling {pension.ceiling}"
                ),
            )
        )
    if tier2.rate > pension.base_rate:
        errors.append(
            _format_scope(
                "contributions.pension.tier2",
                "second-tier rate should not exceed the first-tier base rate",
            )
        )

    return errors


def _validate_insurance(insurance: InsuranceConfig) -> list[str]:
    errors: list[str] = []

    if insurance.rate <= 0:
        errors.append(
            _format_scope("contributions.insurance", "premium rate should be positive")
        )

    return errors


def _validate_solver(config: YearConfiguration, solver: SolverConfig) -> list[str]:
    errors: list[str] = []

    top_rate = config.federal.brackets[-1].rate + config.provincial.brackets[-1].rate
    if top_rate >= solver.max_payroll_deduction_rate:
        errors.append(
            _format_scope(
                "solver",
                (
                    f"combined top marginal rate {top_rate:.4f} reaches the maximum "
                    f"payroll deduction rate {solver.max_payroll_deduction_rate}"
                ),
            )
        )
    if solver.precision >= 1:
        errors.append(
            _format_scope("solver", "precision coarser than one currency unit")
        )

    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_jurisdiction("jurisdictions.federal", config.federal))
    errors.extend(_validate_jurisdiction("jurisdictions.provincial", config.provincial))
    errors.extend(_validate_pension(config.pension, config.pension_tier2))
    errors.extend(_validate_insurance(config.insurance))
    errors.extend(_validate_solver(config, config.solver))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Map each requested year (every manifest year by default) to its issues."""

    return {
        int(year): validate_year_configuration(load_year_configuration(year))
        for year in (years or available_years())
    }


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validate-config",
        description="Check bracket tables, contribution and solver settings per tax year.",
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Tax years to check (all manifest years when omitted)",
    )
    return parser


def _report(year: int) -> bool:
    try:
        config = load_year_configuration(year)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[{year}] failed to load configuration: {error}")
        return False

    issues = validate_year_configuration(config)
    if not issues:
        print(f"[{year}] OK ({config.federal.name} / {config.provincial.name})")
        return True

    print(f"[{year}] {len(issues)} issue(s) detected:")
    for issue in issues:
        print(f"  - {issue}")
    return False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the configuration checks and return a process exit code."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    results = [_report(year) for year in years]
    return 0 if all(results) else 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
