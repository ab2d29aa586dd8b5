"""Payroll-style social contributions.

Covers capped schemes (social security wage base), uncapped schemes with an
additional rate above a threshold (Medicare), schemes with a free-earnings
threshold (UK National Insurance) and multi-tier schemes (Brazil INSS).
"""

from collections.abc import Sequence
from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO, calculate_bracket_tax
from takehome.models.results import NamedAmount
from takehome.models.rules import ContributionRule


def compute_contribution(gross_income: Decimal, rule: ContributionRule) -> Decimal:
    """Contribution owed under a single rule."""
    capped = gross_income if rule.wage_base is None else min(gross_income, rule.wage_base)

    if rule.tiers:
        amount = calculate_bracket_tax(capped, rule.tiers, rule.name).total
    else:
        amount = max(capped - rule.threshold, ZERO) * rule.rate

    if rule.additional_rate is not None:
        amount += max(gross_income - rule.additional_threshold, ZERO) * rule.additional_rate
    return amount


def compute_contributions(
    gross_income: Decimal, rules: Sequence[ContributionRule]
) -> list[NamedAmount]:
    """One named amount per rule, in rule order."""
    if gross_income < ZERO:
        raise ValueError(f"Gross income must be non-negative, got {gross_income}")
    return [
        NamedAmount(name=rule.name, amount=compute_contribution(gross_income, rule))
        for rule in rules
    ]
