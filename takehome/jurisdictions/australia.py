"""Australia: resident income tax, Medicare levy and Medicare levy surcharge."""

from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    AUSTRALIA_ABOVE_THE_LINE_CAPS,
    AUSTRALIA_BRACKETS,
    AUSTRALIA_MEDICARE_LEVY_RATE,
    AUSTRALIA_MEDICARE_LEVY_SURCHARGE,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.enums import SurtaxBase
from takehome.models.params import TaxCalculationParams
from takehome.models.rules import JurisdictionProfile, SurtaxRule

MEDICARE_LEVY_SURCHARGE = SurtaxRule(
    name="medicare_levy_surcharge",
    base=SurtaxBase.TAXABLE_INCOME,
    tiers=tuple(brackets_from_thresholds(AUSTRALIA_MEDICARE_LEVY_SURCHARGE)),
)


def build_australia_profiles() -> dict[int, JurisdictionProfile]:
    # The tax-free threshold is the 0% bracket; nothing else is exempted.
    return {
        year: JurisdictionProfile(
            country_code="AU",
            name="Australia",
            currency="AUD",
            tax_year=year,
            tables={"national": tuple(brackets_from_thresholds(thresholds))},
            above_the_line_caps=AUSTRALIA_ABOVE_THE_LINE_CAPS,
            surtaxes=(
                SurtaxRule(
                    name="medicare_levy",
                    base=SurtaxBase.TAXABLE_INCOME,
                    rate=AUSTRALIA_MEDICARE_LEVY_RATE,
                ),
            ),
        )
        for year, thresholds in AUSTRALIA_BRACKETS.items()
    }


class AustraliaStrategy(JurisdictionStrategy):
    """Resident rates with the flat 2% Medicare levy on taxable income."""

    def surtax_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> list[SurtaxRule]:
        rules = super().surtax_rules(profile, params, regime)
        if not params.options.has_private_health:
            rules.append(MEDICARE_LEVY_SURCHARGE)
        return rules
