"""United Kingdom: income tax (England or Scotland bands), National Insurance
and student loan repayments.
"""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    UK_ABOVE_THE_LINE_CAPS,
    UK_BRACKETS,
    UK_NI_MAIN_RATE,
    UK_NI_PRIMARY_THRESHOLD,
    UK_NI_UPPER_EARNINGS_LIMIT,
    UK_NI_UPPER_RATE,
    UK_PERSONAL_ALLOWANCE,
    UK_STUDENT_LOAN_RATE,
    UK_STUDENT_LOAN_THRESHOLDS,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.params import TaxCalculationParams
from takehome.models.rules import ContributionRule, JurisdictionProfile

# Personal allowance shrinks by 1 for every 2 of income above this.
ALLOWANCE_TAPER_THRESHOLD = Decimal("100000")

NATIONAL_INSURANCE = ContributionRule(
    name="national_insurance",
    rate=UK_NI_MAIN_RATE,
    threshold=UK_NI_PRIMARY_THRESHOLD,
    wage_base=UK_NI_UPPER_EARNINGS_LIMIT,
    additional_rate=UK_NI_UPPER_RATE,
    additional_threshold=UK_NI_UPPER_EARNINGS_LIMIT,
)


def student_loan_rule(plan: str) -> ContributionRule:
    return ContributionRule(
        name="student_loan",
        rate=UK_STUDENT_LOAN_RATE,
        threshold=UK_STUDENT_LOAN_THRESHOLDS[plan],
    )


def build_uk_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="GB",
            name="United Kingdom",
            currency="GBP",
            tax_year=year,
            tables={
                regime: tuple(brackets_from_thresholds(thresholds))
                for regime, thresholds in UK_BRACKETS[year].items()
            },
            regimes=("england", "scotland"),
            personal_exemption=UK_PERSONAL_ALLOWANCE[year],
            above_the_line_caps=UK_ABOVE_THE_LINE_CAPS,
            contributions=(NATIONAL_INSURANCE,),
        )
        for year in UK_BRACKETS
    }


class UnitedKingdomStrategy(JurisdictionStrategy):
    """Bands apply after the personal allowance, which tapers above 100k."""

    def adjust_taxable_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        income_after_deductions: Decimal,
    ) -> Decimal:
        excess = max(income_after_deductions - ALLOWANCE_TAPER_THRESHOLD, ZERO)
        allowance = max(profile.personal_exemption - excess / 2, ZERO)
        return max(income_after_deductions - allowance, ZERO)

    def contribution_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams
    ) -> list[ContributionRule]:
        rules = super().contribution_rules(profile, params)
        plan = params.options.student_loan_plan
        if plan is not None:
            rules.append(student_loan_rule(plan.value))
        return rules
