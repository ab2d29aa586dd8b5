"""India: new and old regimes, section 87A rebate, surcharge and cess."""

from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    INDIA_ABOVE_THE_LINE_CAPS,
    INDIA_BRACKETS,
    INDIA_CESS_RATE,
    INDIA_REBATE_87A,
    INDIA_STANDARD_DEDUCTION,
    INDIA_SURCHARGE,
)
from takehome.models.brackets import brackets_from_thresholds
from takehome.models.enums import PhaseOutKind, SurtaxBase
from takehome.models.rules import CreditRule, JurisdictionProfile, PhaseOut, SurtaxRule


def _rebates(year: int) -> tuple[CreditRule, ...]:
    rules = []
    for regime, (amount, limit) in INDIA_REBATE_87A[year].items():
        rules.append(
            CreditRule(
                name="rebate_87a",
                amount=amount,
                phase_out=PhaseOut(kind=PhaseOutKind.CUTOFF, start=limit, marginal_relief=True),
                regimes=(regime,),
            )
        )
    return tuple(rules)


def _surtaxes() -> tuple[SurtaxRule, ...]:
    surcharges = tuple(
        SurtaxRule(
            name="surcharge",
            base=SurtaxBase.INCOME_TAX,
            rate_schedule=tuple(schedule),
            regimes=(regime,),
            marginal_relief=True,
        )
        for regime, schedule in INDIA_SURCHARGE.items()
    )
    cess = SurtaxRule(
        name="health_and_education_cess",
        base=SurtaxBase.TAX_AND_SURTAXES,
        rate=INDIA_CESS_RATE,
    )
    return (*surcharges, cess)


def build_india_profiles() -> dict[int, JurisdictionProfile]:
    return {
        year: JurisdictionProfile(
            country_code="IN",
            name="India",
            currency="INR",
            tax_year=year,
            tables={
                regime: tuple(brackets_from_thresholds(thresholds))
                for regime, thresholds in INDIA_BRACKETS[year].items()
            },
            regimes=("new", "old"),
            standard_deduction_by_regime=INDIA_STANDARD_DEDUCTION[year],
            above_the_line_regimes=("old",),
            above_the_line_caps=INDIA_ABOVE_THE_LINE_CAPS,
            surtaxes=_surtaxes(),
            credit_rules=_rebates(year),
        )
        for year in INDIA_BRACKETS
    }


class IndiaStrategy(JurisdictionStrategy):
    """Regime picks the slab table, standard deduction and rebate limit.

    The 87A rebate and each surcharge step carry marginal relief: the tax
    and cess above a limit never exceed the income above it.
    """
