"""Shared test fixtures for takehome."""

from decimal import Decimal

import pytest

from takehome.engines.orchestrator import TaxCalculator
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.generic import GenericStrategy
from takehome.jurisdictions.registry import JurisdictionRegistry
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.enums import FilingStatus
from takehome.models.params import (
    CreditInput,
    DeductionInput,
    JurisdictionKey,
    TaxCalculationParams,
)
from takehome.models.rules import ContributionRule, JurisdictionProfile

# [0, 10,000) at 10%, [10,000, inf) at 20%
TWO_BRACKETS = [(Decimal("10000"), Decimal("0.10")), (None, Decimal("0.20"))]


def make_profile(
    country_code: str,
    thresholds: list[tuple[Decimal | None, Decimal]],
    contributions: tuple[ContributionRule, ...] = (),
) -> JurisdictionProfile:
    return JurisdictionProfile(
        country_code=country_code,
        name=f"Test {country_code}",
        currency="TST",
        tax_year=2024,
        tables={"national": tuple(brackets_from_thresholds(thresholds))},
        contributions=contributions,
    )


@pytest.fixture
def two_bracket_profile() -> JurisdictionProfile:
    return make_profile("ZZ", TWO_BRACKETS)


@pytest.fixture
def test_calculator(two_bracket_profile) -> TaxCalculator:
    """Calculator over two synthetic jurisdictions.

    ZZ: two brackets, nothing else. YY: no income tax, one 6% contribution
    capped at a 60,000 wage base.
    """
    capped = ContributionRule(name="pension", rate=Decimal("0.06"), wage_base=Decimal("60000"))
    registry = JurisdictionRegistry(
        {
            ("ZZ", None): JurisdictionStrategy({2024: two_bracket_profile}),
            ("YY", None): JurisdictionStrategy(
                {2024: make_profile("YY", [(None, Decimal("0"))], (capped,))}
            ),
        },
        GenericStrategy(Decimal("0.25")),
    )
    return TaxCalculator(registry=registry)


@pytest.fixture(scope="session")
def calculator() -> TaxCalculator:
    """Calculator over the default registry."""
    return TaxCalculator()


@pytest.fixture
def make_params():
    def _make(
        gross: str | int,
        country: str = "ZZ",
        state: str | None = None,
        year: int = 2024,
        **kwargs,
    ) -> TaxCalculationParams:
        kwargs.setdefault("filing_status", FilingStatus.SINGLE)
        kwargs.setdefault("deductions", DeductionInput())
        kwargs.setdefault("credits", CreditInput())
        return TaxCalculationParams(
            gross_income=Decimal(str(gross)),
            jurisdiction=JurisdictionKey(country_code=country, state_code=state),
            year=year,
            **kwargs,
        )

    return _make
