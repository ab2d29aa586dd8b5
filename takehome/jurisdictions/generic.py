"""Fallback for jurisdictions without tax tables."""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.models.brackets import TaxBracket
from takehome.models.rules import JurisdictionProfile

GENERIC_REGIME = "generic"
# ISO 4217 code for "no currency"; amounts stay in whatever the caller used.
GENERIC_CURRENCY = "XXX"


def build_generic_profile(rate: Decimal) -> JurisdictionProfile:
    return JurisdictionProfile(
        country_code="XX",
        name="Generic estimate",
        currency=GENERIC_CURRENCY,
        tax_year=0,
        tables={GENERIC_REGIME: (TaxBracket(lower_bound=ZERO, rate=rate),)},
        regimes=(GENERIC_REGIME,),
        estimate_notes=(f"Flat estimated rate of {rate:.2%} applied to taxable income",),
    )


class GenericStrategy(JurisdictionStrategy):
    """One unbounded bracket at a flat rate. Year and regime are ignored."""

    def __init__(self, rate: Decimal) -> None:
        super().__init__({0: build_generic_profile(rate)})
        self.rate = rate

    def profile_for(self, year: int) -> tuple[JurisdictionProfile, str | None]:
        return self.profiles[0], None

    def resolve_regime(self, profile: JurisdictionProfile, regime: str | None) -> str:
        return GENERIC_REGIME
