"""Jurisdiction rule models.

A ``JurisdictionProfile`` is the immutable bundle of bracket tables,
payroll contribution rules, surtaxes and credit rules for one
``(country, state)`` pair and one data year.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from takehome.models.brackets import TaxBracket
from takehome.models.enums import FilingStatus, PhaseOutKind, SurtaxBase


class ContributionRule(BaseModel):
    """Flat-rate (optionally capped or tiered) social contribution."""

    model_config = ConfigDict(frozen=True)

    name: str
    rate: Decimal = Decimal("0")
    wage_base: Decimal | None = None
    threshold: Decimal = Decimal("0")
    additional_rate: Decimal | None = None
    additional_threshold: Decimal = Decimal("0")
    additional_threshold_by_status: dict[FilingStatus, Decimal] = Field(default_factory=dict)
    # Multi-tier contribution; when set, ``rate`` is ignored.
    tiers: tuple[TaxBracket, ...] | None = None


class SurtaxRule(BaseModel):
    """Additional tax on computed tax or on income above a threshold."""

    model_config = ConfigDict(frozen=True)

    name: str
    base: SurtaxBase
    rate: Decimal = Decimal("0")
    threshold: Decimal = Decimal("0")
    # (taxable income threshold, rate): the rate of the highest threshold
    # exceeded applies. Overrides ``rate`` when non-empty.
    rate_schedule: tuple[tuple[Decimal, Decimal], ...] = ()
    # Income bases only: banded levy on the income; overrides ``rate``.
    tiers: tuple[TaxBracket, ...] | None = None
    # Schedule surtaxes only: tax above a schedule threshold may not exceed
    # the tax at the threshold plus the income above it.
    marginal_relief: bool = False
    simplified_note: str | None = None
    # Income bases use the secondary (state or provincial) taxable income.
    on_secondary: bool = False
    # Empty means every regime.
    regimes: tuple[str, ...] = ()

    def applies_to(self, regime: str) -> bool:
        return not self.regimes or regime in self.regimes

    def step_for(self, taxable_income: Decimal) -> tuple[Decimal, Decimal] | None:
        """Highest schedule threshold exceeded and the rate below it."""
        step = None
        previous_rate = Decimal("0")
        for income_threshold, rate in self.rate_schedule:
            if taxable_income > income_threshold:
                step = (income_threshold, previous_rate)
                previous_rate = rate
        return step

    def rate_for(self, taxable_income: Decimal) -> Decimal:
        if not self.rate_schedule:
            return self.rate
        applicable = Decimal("0")
        for income_threshold, rate in self.rate_schedule:
            if taxable_income > income_threshold:
                applicable = rate
        return applicable


class PhaseOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: PhaseOutKind
    start: Decimal
    start_by_status: dict[FilingStatus, Decimal] = Field(default_factory=dict)
    end: Decimal | None = None
    rate: Decimal | None = None
    marginal_relief: bool = False


class CreditRule(BaseModel):
    """A jurisdiction credit or rebate.

    ``amount`` is a flat credit; ``per_dependent`` is multiplied by the
    dependents count. Both may be set.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    amount: Decimal = Decimal("0")
    per_dependent: Decimal = Decimal("0")
    phase_out: PhaseOut | None = None
    refundable: bool = False
    simplified_note: str | None = None
    regimes: tuple[str, ...] = ()

    def applies_to(self, regime: str) -> bool:
        return not self.regimes or regime in self.regimes


class JurisdictionProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_code: str
    state_code: str | None = None
    name: str
    currency: str
    tax_year: int
    # Keyed by regime, or "<regime>/<filing status>" where brackets differ by
    # status. "secondary" holds a state or provincial table.
    tables: dict[str, tuple[TaxBracket, ...]]
    regimes: tuple[str, ...] = ("national",)
    secondary_name: str | None = None
    secondary_deduction: Decimal = Decimal("0")
    secondary_deduction_by_status: dict[FilingStatus, Decimal] = Field(default_factory=dict)
    personal_exemption: Decimal = Decimal("0")
    standard_deduction: Decimal = Decimal("0")
    standard_deduction_by_status: dict[FilingStatus, Decimal] = Field(default_factory=dict)
    standard_deduction_by_regime: dict[str, Decimal] = Field(default_factory=dict)
    itemizing_allowed: bool = False
    above_the_line_allowed: bool = True
    # When set, above-the-line deductions are only allowed under these regimes.
    above_the_line_regimes: tuple[str, ...] = ()
    above_the_line_caps: dict[str, Decimal] = Field(default_factory=dict)
    contributions: tuple[ContributionRule, ...] = ()
    surtaxes: tuple[SurtaxRule, ...] = ()
    credit_rules: tuple[CreditRule, ...] = ()
    refundable_credit_inputs: frozenset[str] = frozenset()
    estimate_notes: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        if self.state_code:
            return f"{self.country_code}-{self.state_code}"
        return self.country_code

    @property
    def default_regime(self) -> str:
        return self.regimes[0]

    def deduction_for(self, filing_status: FilingStatus, regime: str) -> Decimal:
        if regime in self.standard_deduction_by_regime:
            return self.standard_deduction_by_regime[regime]
        return self.standard_deduction_by_status.get(filing_status, self.standard_deduction)

    def allows_above_the_line(self, regime: str) -> bool:
        if not self.above_the_line_allowed:
            return False
        return not self.above_the_line_regimes or regime in self.above_the_line_regimes

    def table_key(self, base: str, filing_status: FilingStatus) -> str | None:
        for key in (f"{base}/{filing_status.value}", base):
            if key in self.tables:
                return key
        return None

    def secondary_deduction_for(self, filing_status: FilingStatus) -> Decimal:
        return self.secondary_deduction_by_status.get(filing_status, self.secondary_deduction)


def rules_for_status(
    contributions: tuple[ContributionRule, ...],
    credit_rules: tuple[CreditRule, ...],
    filing_status: FilingStatus,
) -> tuple[list[ContributionRule], list[CreditRule]]:
    """Resolve status-dependent thresholds into plain rules."""
    resolved_contributions = [
        rule.model_copy(
            update={"additional_threshold": rule.additional_threshold_by_status[filing_status]}
        )
        if filing_status in rule.additional_threshold_by_status
        else rule
        for rule in contributions
    ]
    resolved_credits: list[CreditRule] = []
    for rule in credit_rules:
        phase_out = rule.phase_out
        if phase_out is not None and filing_status in phase_out.start_by_status:
            phase_out = phase_out.model_copy(
                update={"start": phase_out.start_by_status[filing_status]}
            )
            rule = rule.model_copy(update={"phase_out": phase_out})
        resolved_credits.append(rule)
    return resolved_contributions, resolved_credits
