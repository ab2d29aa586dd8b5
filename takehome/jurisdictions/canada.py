"""Canada: federal tax, CPP, EI and provincial tax."""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    CANADA_ABOVE_THE_LINE_CAPS,
    CANADA_BASIC_PERSONAL_AMOUNT,
    CANADA_CPP_RATE,
    CANADA_CPP_WAGE_BASE,
    CANADA_EI_RATE,
    CANADA_EI_WAGE_BASE,
    CANADA_FEDERAL_BRACKETS,
    CANADA_ONTARIO_BRACKETS,
    CANADA_PROVINCE_FLAT_RATES,
)
from takehome.models.brackets import TaxBracket, brackets_from_thresholds
from takehome.models.rules import ContributionRule, JurisdictionProfile

PROVINCE_NAMES: dict[str, str] = {
    "ON": "Ontario",
    "QC": "Quebec",
    "BC": "British Columbia",
    "AB": "Alberta",
    "MB": "Manitoba",
    "SK": "Saskatchewan",
    "NS": "Nova Scotia",
    "NB": "New Brunswick",
    "NL": "Newfoundland and Labrador",
    "PE": "Prince Edward Island",
}
ONTARIO_BASIC_PERSONAL_AMOUNT = Decimal("12399")
CPP_BASIC_EXEMPTION = Decimal("3500")

CONTRIBUTIONS = (
    ContributionRule(
        name="cpp",
        rate=CANADA_CPP_RATE,
        wage_base=CANADA_CPP_WAGE_BASE,
        threshold=CPP_BASIC_EXEMPTION,
    ),
    ContributionRule(name="ei", rate=CANADA_EI_RATE, wage_base=CANADA_EI_WAGE_BASE),
)


def build_canada_profiles(province: str | None = None) -> dict[int, JurisdictionProfile]:
    if province is not None and province not in PROVINCE_NAMES:
        raise ValueError(f"Unsupported Canadian province: {province}")

    profiles: dict[int, JurisdictionProfile] = {}
    for year, thresholds in CANADA_FEDERAL_BRACKETS.items():
        tables: dict[str, tuple[TaxBracket, ...]] = {
            "federal": tuple(brackets_from_thresholds(thresholds))
        }
        secondary_deduction = ZERO
        notes: tuple[str, ...] = ()
        if province == "ON":
            tables["secondary"] = tuple(brackets_from_thresholds(CANADA_ONTARIO_BRACKETS[year]))
            secondary_deduction = ONTARIO_BASIC_PERSONAL_AMOUNT
        elif province is not None:
            rate = CANADA_PROVINCE_FLAT_RATES[province]
            tables["secondary"] = (TaxBracket(lower_bound=ZERO, rate=rate),)
            secondary_deduction = CANADA_BASIC_PERSONAL_AMOUNT[year]
            notes = (
                f"{PROVINCE_NAMES[province]} income tax approximated with a flat {rate:.2%} rate",
            )

        name = "Canada"
        if province is not None:
            name = f"Canada - {PROVINCE_NAMES[province]}"
        profiles[year] = JurisdictionProfile(
            country_code="CA",
            state_code=province,
            name=name,
            currency="CAD",
            tax_year=year,
            tables=tables,
            regimes=("federal",),
            secondary_name=PROVINCE_NAMES[province].lower().replace(" ", "_") if province else None,
            secondary_deduction=secondary_deduction,
            personal_exemption=CANADA_BASIC_PERSONAL_AMOUNT[year],
            above_the_line_caps=CANADA_ABOVE_THE_LINE_CAPS,
            contributions=CONTRIBUTIONS,
            estimate_notes=(
                "Basic personal amount subtracted from income instead of claimed as a credit",
                *notes,
            ),
        )
    return profiles


class CanadaStrategy(JurisdictionStrategy):
    """Federal table on income after the basic personal amount, plus a province."""
