"""Domain-specific calculation helpers."""

from .break_even import SearchInterval, bisect, calculate_break_even, solve_gross_income
from .contributions import (
    calculate_insurance_premium,
    calculate_pension_tier1,
    calculate_pension_tier2,
    calculate_total_pension_contribution,
)
from .credits import calculate_credits, federal_basic_amount
from .deductions import (
    calculate_base_deduction,
    calculate_enhanced_deduction,
    calculate_total_deduction,
)
from .income_tax import (
    calculate_gross_tax,
    calculate_income_tax,
    calculate_taxable_income,
)
from .payroll import (
    calculate_net_income,
    calculate_payroll,
    calculate_total_payroll_deduction,
)
from .utils import (
    InvalidInputError,
    calculate_progressive_tax,
    format_percentage,
    require_non_negative,
    require_positive,
    round_currency,
    round_rate,
)

__all__ = [
    "InvalidInputError",
    "SearchInterval",
    "bisect",
    "calculate_base_deduction",
    "calculate_break_even",
    "calculate_credits",
    "calculate_enhanced_deduction",
    "calculate_gross_tax",
    "calculate_income_tax",
    "calculate_insurance_premium",
    "calculate_net_income",
    "calculate_payroll",
    "calculate_pension_tier1",
    "calculate_pension_tier2",
    "calculate_progressive_tax",
    "calculate_taxable_income",
    "calculate_total_deduction",
    "calculate_total_payroll_deduction",
    "calculate_total_pension_contribution",
    "federal_basic_amount",
    "format_percentage",
    "require_non_negative",
    "require_positive",
    "round_currency",
    "round_rate",
    "solve_gross_income",
]
