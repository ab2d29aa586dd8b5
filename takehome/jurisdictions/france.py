"""France: professional-expense abatement, family quotient, CSG and CRDS."""

from decimal import Decimal

from takehome.engines.bracket_calculator import (
    ZERO,
    BracketTaxResult,
    calculate_bracket_tax,
    marginal_rate,
)
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    FRANCE_ABOVE_THE_LINE_CAPS,
    FRANCE_BRACKETS,
    FRANCE_CRDS_RATE,
    FRANCE_CSG_RATE,
    FRANCE_PROFESSIONAL_ABATEMENT,
    FRANCE_SOCIAL_SECURITY_RATE,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.enums import FilingStatus, SurtaxBase
from takehome.models.params import TaxCalculationParams
from takehome.models.rules import ContributionRule, JurisdictionProfile, SurtaxRule


def household_parts(filing_status: FilingStatus, dependents: int) -> Decimal:
    """Number of shares (parts) in the family quotient.

    One per adult (two for a joint return), half for each of the first two
    dependents and one for each further dependent.
    """
    parts = Decimal("2") if filing_status == FilingStatus.MFJ else Decimal("1")
    for i in range(dependents):
        parts += Decimal("0.5") if i < 2 else Decimal("1")
    return parts


def build_france_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="FR",
            name="France",
            currency="EUR",
            tax_year=year,
            tables={"national": tuple(brackets_from_thresholds(thresholds))},
            above_the_line_caps=FRANCE_ABOVE_THE_LINE_CAPS,
            contributions=(
                ContributionRule(name="social_security", rate=FRANCE_SOCIAL_SECURITY_RATE),
            ),
            surtaxes=(
                SurtaxRule(name="csg", base=SurtaxBase.GROSS_INCOME, rate=FRANCE_CSG_RATE),
                SurtaxRule(name="crds", base=SurtaxBase.GROSS_INCOME, rate=FRANCE_CRDS_RATE),
            ),
            estimate_notes=(
                "Family quotient benefit cap not applied",
                "CSG and CRDS assessed on full gross salary",
            ),
        )
        for year, thresholds in FRANCE_BRACKETS.items()
    }


class FranceStrategy(JurisdictionStrategy):
    """Brackets apply per household share; the result is scaled back up."""

    def adjust_taxable_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        income_after_deductions: Decimal,
    ) -> Decimal:
        abatement = params.gross_income * FRANCE_PROFESSIONAL_ABATEMENT
        return max(income_after_deductions - abatement, ZERO)

    def apply_brackets(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        taxable_income: Decimal,
    ) -> BracketTaxResult:
        parts = household_parts(params.filing_status, params.dependents)
        per_part = calculate_bracket_tax(
            taxable_income / parts, self.select_table(profile, params, regime), regime
        )
        line_items = [
            item.model_copy(
                update={
                    "lower_bound": item.lower_bound * parts,
                    "upper_bound": None if item.upper_bound is None else item.upper_bound * parts,
                    "amount_taxed": item.amount_taxed * parts,
                    "tax": item.tax * parts,
                }
            )
            for item in per_part.line_items
        ]
        return BracketTaxResult(total=sum((i.tax for i in line_items), ZERO), line_items=line_items)

    def marginal_rate(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        taxable_income: Decimal,
    ) -> Decimal:
        parts = household_parts(params.filing_status, params.dependents)
        return marginal_rate(taxable_income / parts, self.select_table(profile, params, regime))
