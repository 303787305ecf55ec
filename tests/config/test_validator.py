from breakeven.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from breakeven.backend.config.year_config import TaxBracket, load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert all(not issues for issues in results.values()), results


def test_validator_flags_decreasing_marginal_rates() -> None:
    config = load_year_configuration(2024)
    brackets = list(config.provincial.brackets)
    brackets[2] = TaxBracket(upper=150_000, rate=0.05)
    provincial = config.provincial.model_copy(update={"brackets": tuple(brackets)})
    broken = config.model_copy(update={"provincial": provincial})

    errors = validate_year_configuration(broken)

    assert any(
        "jurisdictions.provincial.brackets[2]" in error and "must not decrease" in error
        for error in errors
    )


def test_validator_flags_deduction_cap_below_top_rate() -> None:
    config = load_year_configuration(2024)
    solver = config.solver.model_copy(update={"max_payroll_deduction_rate": 0.4})
    broken = config.model_copy(update={"solver": solver})

    errors = validate_year_configuration(broken)

    assert any(error.startswith("solver:") for error in errors)


def test_validator_flags_second_tier_ceiling() -> None:
    config = load_year_configuration(2024)
    tier2 = config.pension_tier2.model_copy(update={"ceiling": config.pension.ceiling})
    broken = config.model_copy(update={"pension_tier2": tier2})

    errors = validate_year_configuration(broken)

    assert any("contributions.pension.tier2" in error for error in errors)


def test_cli_reports_ok(capsys) -> None:
    exit_code = main(["2024"])

    assert exit_code == 0
    assert "[2024] OK" in capsys.readouterr().out


def test_cli_reports_missing_year(capsys) -> None:
    exit_code = main(["1999"])

    assert exit_code == 1
    assert "[1999] failed to load configuration" in capsys.readouterr().out
