"""United States: federal income tax, FICA and state income tax.

California uses its graduated FTB schedule plus the Mental Health Services
Tax. A handful of other states are approximated with a flat rate, and the
states without a wage income tax carry no state table at all.
"""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.tables import (
    ADDITIONAL_MEDICARE_TAX_RATE,
    ADDITIONAL_MEDICARE_TAX_THRESHOLD,
    CA_MENTAL_HEALTH_RATE,
    CA_MENTAL_HEALTH_THRESHOLD,
    CALIFORNIA_BRACKETS,
    CALIFORNIA_STANDARD_DEDUCTION,
    CHILD_TAX_CREDIT_PER_CHILD,
    CHILD_TAX_CREDIT_PHASEOUT_RATE,
    CHILD_TAX_CREDIT_PHASEOUT_START,
    FEDERAL_BRACKETS,
    FEDERAL_STANDARD_DEDUCTION,
    REGULAR_MEDICARE_TAX_RATE,
    SOCIAL_SECURITY_RATE,
    SOCIAL_SECURITY_WAGE_BASE,
    US_ABOVE_THE_LINE_CAPS,
    US_NO_INCOME_TAX_STATES,
    US_STATE_FLAT_RATES,
)
from takehome.models.brackets import TaxBracket, brackets_from_thresholds
from takehome.models.enums import FilingStatus, PhaseOutKind, SurtaxBase
from takehome.models.params import TaxCalculationParams
from takehome.models.results import DeductionBreakdown
from takehome.models.rules import (
    ContributionRule,
    CreditRule,
    JurisdictionProfile,
    PhaseOut,
    SurtaxRule,
)

STATE_NAMES: dict[str, str] = {
    "CA": "California",
    "NY": "New York",
    "IL": "Illinois",
    "PA": "Pennsylvania",
    "OH": "Ohio",
    "GA": "Georgia",
    "NC": "North Carolina",
    "TX": "Texas",
    "FL": "Florida",
    "WA": "Washington",
    "NV": "Nevada",
    "WY": "Wyoming",
    "SD": "South Dakota",
    "TN": "Tennessee",
}

SUPPORTED_STATES: tuple[str, ...] = ("CA", *US_STATE_FLAT_RATES, *US_NO_INCOME_TAX_STATES)


def _contributions(year: int) -> tuple[ContributionRule, ...]:
    return (
        ContributionRule(
            name="social_security",
            rate=SOCIAL_SECURITY_RATE,
            wage_base=SOCIAL_SECURITY_WAGE_BASE[year],
        ),
        ContributionRule(
            name="medicare",
            rate=REGULAR_MEDICARE_TAX_RATE,
            additional_rate=ADDITIONAL_MEDICARE_TAX_RATE,
            additional_threshold=ADDITIONAL_MEDICARE_TAX_THRESHOLD[FilingStatus.SINGLE],
            additional_threshold_by_status=ADDITIONAL_MEDICARE_TAX_THRESHOLD,
        ),
    )


CHILD_TAX_CREDIT = CreditRule(
    name="child_tax_credit",
    per_dependent=CHILD_TAX_CREDIT_PER_CHILD,
    phase_out=PhaseOut(
        kind=PhaseOutKind.LINEAR,
        start=CHILD_TAX_CREDIT_PHASEOUT_START[FilingStatus.SINGLE],
        start_by_status=CHILD_TAX_CREDIT_PHASEOUT_START,
        rate=CHILD_TAX_CREDIT_PHASEOUT_RATE,
    ),
    simplified_note=(
        "Child tax credit phase-out applied as 5% of income over the threshold "
        "instead of $50 per $1,000 step"
    ),
)


def _status_tables(
    prefix: str, by_status: dict[FilingStatus, list[tuple[Decimal | None, Decimal]]]
) -> dict[str, tuple[TaxBracket, ...]]:
    return {
        f"{prefix}/{status.value}": tuple(brackets_from_thresholds(thresholds))
        for status, thresholds in by_status.items()
    }


def build_us_profiles(state: str | None = None) -> dict[int, JurisdictionProfile]:
    """One profile per data year, for the federal rules plus an optional state."""
    if state is not None and state not in SUPPORTED_STATES:
        raise ValueError(f"Unsupported US state: {state}")

    profiles: dict[int, JurisdictionProfile] = {}
    for year in FEDERAL_BRACKETS:
        tables = _status_tables("federal", FEDERAL_BRACKETS[year])
        extra: dict = {}
        surtaxes: tuple[SurtaxRule, ...] = ()
        notes: tuple[str, ...] = ()

        if state == "CA":
            tables.update(_status_tables("secondary", CALIFORNIA_BRACKETS[year]))
            extra = {
                "secondary_name": "california",
                "secondary_deduction_by_status": CALIFORNIA_STANDARD_DEDUCTION[year],
            }
            surtaxes = (
                SurtaxRule(
                    name="ca_mental_health_services_tax",
                    base=SurtaxBase.TAXABLE_INCOME,
                    rate=CA_MENTAL_HEALTH_RATE,
                    threshold=CA_MENTAL_HEALTH_THRESHOLD,
                    on_secondary=True,
                ),
            )
        elif state in US_STATE_FLAT_RATES:
            rate = US_STATE_FLAT_RATES[state]
            tables["secondary"] = (TaxBracket(lower_bound=ZERO, rate=rate),)
            extra = {"secondary_name": STATE_NAMES[state].lower().replace(" ", "_")}
            notes = (
                f"{STATE_NAMES[state]} income tax approximated with a flat {rate:.2%} rate",
            )

        name = "United States"
        if state is not None:
            name = f"United States - {STATE_NAMES[state]}"
        profiles[year] = JurisdictionProfile(
            country_code="US",
            state_code=state,
            name=name,
            currency="USD",
            tax_year=year,
            tables=tables,
            regimes=("federal",),
            standard_deduction=FEDERAL_STANDARD_DEDUCTION[year][FilingStatus.SINGLE],
            standard_deduction_by_status=FEDERAL_STANDARD_DEDUCTION[year],
            itemizing_allowed=True,
            above_the_line_caps=US_ABOVE_THE_LINE_CAPS[year],
            contributions=_contributions(year),
            surtaxes=surtaxes,
            credit_rules=(CHILD_TAX_CREDIT,),
            refundable_credit_inputs=frozenset({"earned_income_credit"}),
            estimate_notes=notes,
            **extra,
        )
    return profiles


class UnitedStatesStrategy(JurisdictionStrategy):
    """Federal brackets by filing status, FICA, child tax credit, state tax."""

    def credit_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        taxable_income: Decimal,
        deductions: DeductionBreakdown,
    ) -> Decimal:
        # Phase-outs are measured against AGI, not taxable income.
        return max(params.gross_income - deductions.adjustments, ZERO)
