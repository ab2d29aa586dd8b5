"""South Africa: PAYE brackets, primary rebate and UIF."""

from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    SOUTH_AFRICA_ABOVE_THE_LINE_CAPS,
    SOUTH_AFRICA_BRACKETS,
    SOUTH_AFRICA_PRIMARY_REBATE,
    SOUTH_AFRICA_UIF_CEILING,
    SOUTH_AFRICA_UIF_RATE,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.rules import ContributionRule, CreditRule, JurisdictionProfile


def build_south_africa_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="ZA",
            name="South Africa",
            currency="ZAR",
            tax_year=year,
            tables={"national": tuple(brackets_from_thresholds(thresholds))},
            above_the_line_caps=SOUTH_AFRICA_ABOVE_THE_LINE_CAPS,
            contributions=(
                ContributionRule(
                    name="uif",
                    rate=SOUTH_AFRICA_UIF_RATE,
                    wage_base=SOUTH_AFRICA_UIF_CEILING,
                ),
            ),
            credit_rules=(
                CreditRule(name="primary_rebate", amount=SOUTH_AFRICA_PRIMARY_REBATE[year]),
            ),
        )
        for year, thresholds in SOUTH_AFRICA_BRACKETS.items()
    }


class SouthAfricaStrategy(JurisdictionStrategy):
    """The primary rebate is a non-refundable credit, so low earners owe nothing."""
