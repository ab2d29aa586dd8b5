"""Tests for payroll-style social contributions."""

from decimal import Decimal

import pytest

from takehome.engines.payroll import compute_contribution, compute_contributions
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.rules import ContributionRule

SOCIAL_SECURITY = ContributionRule(
    name="social_security", rate=Decimal("0.062"), wage_base=Decimal("176100")
)
MEDICARE = ContributionRule(
    name="medicare",
    rate=Decimal("0.0145"),
    additional_rate=Decimal("0.009"),
    additional_threshold=Decimal("200000"),
)
NATIONAL_INSURANCE = ContributionRule(
    name="national_insurance",
    rate=Decimal("0.08"),
    threshold=Decimal("12570"),
    wage_base=Decimal("50270"),
    additional_rate=Decimal("0.02"),
    additional_threshold=Decimal("50270"),
)


class TestCappedContribution:
    def test_below_wage_base(self):
        assert compute_contribution(Decimal("100000"), SOCIAL_SECURITY) == Decimal("6200")

    def test_at_wage_base(self):
        """176,100 * 6.2% = 10,918.20"""
        assert compute_contribution(Decimal("176100"), SOCIAL_SECURITY) == Decimal("10918.2")

    def test_capped_above_wage_base(self):
        at_cap = compute_contribution(Decimal("176100"), SOCIAL_SECURITY)
        assert compute_contribution(Decimal("300000"), SOCIAL_SECURITY) == at_cap


class TestAdditionalRate:
    def test_below_threshold(self):
        assert compute_contribution(Decimal("150000"), MEDICARE) == Decimal("2175")

    def test_above_threshold(self):
        """250,000 * 1.45% + 50,000 * 0.9% = 3,625 + 450 = 4,075"""
        assert compute_contribution(Decimal("250000"), MEDICARE) == Decimal("4075")


class TestThresholdAndUpperRate:
    def test_below_primary_threshold(self):
        assert compute_contribution(Decimal("10000"), NATIONAL_INSURANCE) == Decimal("0")

    def test_main_band(self):
        """(50,000 - 12,570) * 8% = 2,994.40"""
        assert compute_contribution(Decimal("50000"), NATIONAL_INSURANCE) == Decimal("2994.4")

    def test_above_upper_limit(self):
        """37,700 * 8% + 9,730 * 2% = 3,016 + 194.60"""
        assert compute_contribution(Decimal("60000"), NATIONAL_INSURANCE) == Decimal("3210.6")


class TestTieredContribution:
    @pytest.fixture
    def tiered(self):
        return ContributionRule(
            name="pension",
            wage_base=Decimal("30000"),
            tiers=tuple(
                brackets_from_thresholds(
                    [(Decimal("10000"), Decimal("0.05")), (None, Decimal("0.10"))]
                )
            ),
        )

    def test_tiers_walked_progressively(self, tiered):
        """10,000 * 5% + 10,000 * 10% = 1,500"""
        assert compute_contribution(Decimal("20000"), tiered) == Decimal("1500")

    def test_tiers_stop_at_ceiling(self, tiered):
        """10,000 * 5% + 20,000 * 10% = 2,500"""
        assert compute_contribution(Decimal("90000"), tiered) == Decimal("2500")


class TestComputeContributions:
    def test_one_amount_per_rule_in_order(self):
        amounts = compute_contributions(Decimal("100000"), [SOCIAL_SECURITY, MEDICARE])
        assert [a.name for a in amounts] == ["social_security", "medicare"]
        assert [a.amount for a in amounts] == [Decimal("6200"), Decimal("1450")]

    def test_no_rules(self):
        assert compute_contributions(Decimal("100000"), []) == []

    def test_zero_gross(self):
        amounts = compute_contributions(Decimal("0"), [SOCIAL_SECURITY, NATIONAL_INSURANCE])
        assert all(a.amount == Decimal("0") for a in amounts)

    def test_negative_gross_rejected(self):
        with pytest.raises(ValueError):
            compute_contributions(Decimal("-5"), [SOCIAL_SECURITY])
