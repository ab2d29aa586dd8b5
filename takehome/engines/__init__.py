"""Calculation engines: brackets, payroll, deductions, credits."""

from takehome.engines.bracket_calculator import (
    BracketTaxResult,
    calculate_bracket_tax,
    marginal_rate,
    validate_bracket_table,
)
from takehome.engines.credits import CreditResolver
from takehome.engines.deductions import DeductionResolver
from takehome.engines.payroll import compute_contribution, compute_contributions

__all__ = [
    "BracketTaxResult",
    "calculate_bracket_tax",
    "compute_contribution",
    "compute_contributions",
    "CreditResolver",
    "DeductionResolver",
    "marginal_rate",
    "validate_bracket_table",
]
