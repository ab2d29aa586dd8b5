"""Brazil: IRPF on annualized monthly tables, INSS and dependent deductions."""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.engines.payroll import compute_contribution
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    BRAZIL_BRACKETS,
    BRAZIL_DEPENDENT_DEDUCTION,
    BRAZIL_INSS_CEILING,
    BRAZIL_INSS_TIERS,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.params import TaxCalculationParams
from takehome.models.rules import ContributionRule, JurisdictionProfile


def build_brazil_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="BR",
            name="Brazil",
            currency="BRL",
            tax_year=year,
            tables={"national": tuple(brackets_from_thresholds(thresholds))},
            contributions=(
                ContributionRule(
                    name="inss",
                    wage_base=BRAZIL_INSS_CEILING[year],
                    tiers=tuple(brackets_from_thresholds(BRAZIL_INSS_TIERS[year])),
                ),
            ),
            estimate_notes=("Monthly withholding tables annualized",),
        )
        for year, thresholds in BRAZIL_BRACKETS.items()
    }


class BrazilStrategy(JurisdictionStrategy):
    """INSS and a fixed amount per dependent come off the IRPF base."""

    def adjust_taxable_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        income_after_deductions: Decimal,
    ) -> Decimal:
        inss = sum(
            (compute_contribution(params.gross_income, rule) for rule in profile.contributions),
            ZERO,
        )
        dependents = BRAZIL_DEPENDENT_DEDUCTION * params.dependents
        return max(income_after_deductions - inss - dependents, ZERO)
