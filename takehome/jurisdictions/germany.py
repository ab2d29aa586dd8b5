"""Germany: banded approximation of the income tax tariff.

The statutory tariff is a polynomial in the middle zones; this uses linear
bands with the same edges and flags every result as an estimate.
"""

from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    GERMANY_ABOVE_THE_LINE_CAPS,
    GERMANY_BRACKETS,
    GERMANY_CHURCH_TAX_RATE,
    GERMANY_SOCIAL_INSURANCE,
    GERMANY_SOLIDARITY_RATE,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.enums import SurtaxBase
from takehome.models.params import TaxCalculationParams
from takehome.models.rules import ContributionRule, JurisdictionProfile, SurtaxRule

SOCIAL_INSURANCE = tuple(
    ContributionRule(name=name, rate=rate, wage_base=ceiling)
    for name, rate, ceiling in GERMANY_SOCIAL_INSURANCE
)


def build_germany_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="DE",
            name="Germany",
            currency="EUR",
            tax_year=year,
            tables={"national": tuple(brackets_from_thresholds(thresholds))},
            above_the_line_caps=GERMANY_ABOVE_THE_LINE_CAPS,
            contributions=SOCIAL_INSURANCE,
            surtaxes=(
                SurtaxRule(
                    name="solidarity_surcharge",
                    base=SurtaxBase.INCOME_TAX,
                    rate=GERMANY_SOLIDARITY_RATE,
                    simplified_note="Solidarity surcharge exemption limit not applied",
                ),
            ),
            estimate_notes=("Income tax tariff approximated with linear bands",),
        )
        for year, thresholds in GERMANY_BRACKETS.items()
    }


class GermanyStrategy(JurisdictionStrategy):
    """Banded tariff, solidarity surcharge, capped social insurance.

    Church members also pay church tax on the income tax, at the caller's
    state rate when given.
    """

    def surtax_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> list[SurtaxRule]:
        rules = super().surtax_rules(profile, params, regime)
        options = params.options
        if options.is_church_member:
            rate = options.church_tax_rate
            rules.append(
                SurtaxRule(
                    name="church_tax",
                    base=SurtaxBase.INCOME_TAX,
                    rate=GERMANY_CHURCH_TAX_RATE if rate is None else rate,
                )
            )
        return rules
