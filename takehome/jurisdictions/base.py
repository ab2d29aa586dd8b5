"""Jurisdiction strategy base class.

A strategy owns the profiles for one jurisdiction (one per data year) and
turns calculation params into tax components. Deductions and credits go
through the shared resolvers; bracket arithmetic goes through the shared
bracket calculator. Subclasses override hooks, never the pipeline.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from takehome.engines.bracket_calculator import (
    ZERO,
    BracketTaxResult,
    calculate_bracket_tax,
    marginal_rate,
    validate_bracket_table,
)
from takehome.engines.credits import CreditResolver
from takehome.engines.deductions import DeductionResolver
from takehome.engines.payroll import compute_contributions
from takehome.exceptions import ConfigurationError, UnknownRegimeError
from takehome.models.brackets import TaxBracket
from takehome.models.enums import SurtaxBase
from takehome.models.params import TaxCalculationParams
from takehome.models.results import CreditBreakdown, DeductionBreakdown, NamedAmount
from takehome.models.rules import (
    ContributionRule,
    CreditRule,
    JurisdictionProfile,
    SurtaxRule,
    rules_for_status,
)

logger = logging.getLogger(__name__)


class StrategyOutcome(BaseModel):
    """Tax components for one call, before the orchestrator totals them."""

    model_config = ConfigDict(frozen=True)

    profile: JurisdictionProfile
    regime: str
    taxable_income: Decimal
    bracket: BracketTaxResult
    contributions: list[NamedAmount] = Field(default_factory=list)
    surtaxes: list[NamedAmount] = Field(default_factory=list)
    deductions: DeductionBreakdown
    credits: CreditBreakdown
    marginal_rate: Decimal
    is_estimate: bool = False
    notes: list[str] = Field(default_factory=list)


def merge_bracket_results(results: list[BracketTaxResult]) -> BracketTaxResult:
    total = ZERO
    line_items = []
    for result in results:
        total += result.total
        line_items.extend(result.line_items)
    return BracketTaxResult(total=total, line_items=line_items)


def tax_load(rules: list[SurtaxRule], taxable_income: Decimal) -> Decimal:
    """Total owed per unit of income tax once surtaxes on tax are added."""
    running = ZERO
    for rule in rules:
        rate = rule.rate_for(taxable_income)
        if rule.base == SurtaxBase.INCOME_TAX:
            running += rate
        elif rule.base == SurtaxBase.TAX_AND_SURTAXES:
            running += (1 + running) * rate
    return 1 + running


class JurisdictionStrategy:
    """Progressive-bracket strategy driven entirely by profile data."""

    def __init__(
        self,
        profiles: Mapping[int, JurisdictionProfile],
        deduction_resolver: DeductionResolver | None = None,
        credit_resolver: CreditResolver | None = None,
    ) -> None:
        if not profiles:
            raise ConfigurationError(f"{type(self).__name__} has no profiles")
        self.profiles = dict(sorted(profiles.items()))
        self.deduction_resolver = deduction_resolver or DeductionResolver()
        self.credit_resolver = credit_resolver or CreditResolver()
        for profile in self.profiles.values():
            for name, table in profile.tables.items():
                validate_bracket_table(table, f"{profile.key} {profile.tax_year} {name}")
            for rule in profile.contributions:
                if rule.tiers:
                    validate_bracket_table(rule.tiers, f"{profile.key} {rule.name}")
            for surtax in profile.surtaxes:
                if surtax.tiers:
                    validate_bracket_table(surtax.tiers, f"{profile.key} {surtax.name}")

    # -- identity ---------------------------------------------------------

    @property
    def latest(self) -> JurisdictionProfile:
        return self.profiles[max(self.profiles)]

    @property
    def key(self) -> str:
        return self.latest.key

    @property
    def name(self) -> str:
        return self.latest.name

    @property
    def currency(self) -> str:
        return self.latest.currency

    @property
    def regimes(self) -> tuple[str, ...]:
        return self.latest.regimes

    @property
    def years(self) -> list[int]:
        return list(self.profiles)

    # -- profile and regime selection --------------------------------------

    def profile_for(self, year: int) -> tuple[JurisdictionProfile, str | None]:
        """Profile for the year, else the latest earlier one, else the earliest."""
        if year in self.profiles:
            return self.profiles[year], None
        earlier = [y for y in self.profiles if y < year]
        data_year = max(earlier) if earlier else min(self.profiles)
        logger.debug("%s has no %d tables; using %d", self.key, year, data_year)
        note = f"No {year} tables for {self.key}; used {data_year} figures"
        return self.profiles[data_year], note

    def resolve_regime(self, profile: JurisdictionProfile, regime: str | None) -> str:
        if regime is None:
            return profile.default_regime
        normalized = regime.strip().lower()
        if normalized not in profile.regimes:
            raise UnknownRegimeError(regime, profile.key, list(profile.regimes))
        return normalized

    # -- hooks --------------------------------------------------------------

    def select_table(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> tuple[TaxBracket, ...]:
        key = profile.table_key(regime, params.filing_status)
        if key is None:
            raise ConfigurationError(f"{profile.key} has no table for regime '{regime}'")
        return profile.tables[key]

    def standard_deduction(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> Decimal:
        return profile.deduction_for(params.filing_status, regime)

    def adjust_taxable_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        income_after_deductions: Decimal,
    ) -> Decimal:
        """Subtract flat exemptions applied before the brackets."""
        return max(income_after_deductions - profile.personal_exemption, ZERO)

    def apply_brackets(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        taxable_income: Decimal,
    ) -> BracketTaxResult:
        table = self.select_table(profile, params, regime)
        return calculate_bracket_tax(taxable_income, table, regime)

    def secondary_taxable_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        deductions: DeductionBreakdown,
    ) -> Decimal:
        """Income the state or provincial table applies to."""
        adjusted = params.gross_income - deductions.adjustments
        return max(adjusted - profile.secondary_deduction_for(params.filing_status), ZERO)

    def extra_brackets(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        deductions: DeductionBreakdown,
    ) -> list[BracketTaxResult]:
        key = profile.table_key("secondary", params.filing_status)
        if key is None:
            return []
        income = self.secondary_taxable_income(profile, params, deductions)
        return [
            calculate_bracket_tax(income, profile.tables[key], profile.secondary_name or "secondary")
        ]

    def contribution_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams
    ) -> list[ContributionRule]:
        contributions, _ = rules_for_status(
            profile.contributions, (), params.filing_status
        )
        return contributions

    def credit_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> list[CreditRule]:
        _, credits = rules_for_status((), profile.credit_rules, params.filing_status)
        return [rule for rule in credits if rule.applies_to(regime)]

    def credit_income(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        taxable_income: Decimal,
        deductions: DeductionBreakdown,
    ) -> Decimal:
        """Income the credit phase-outs are measured against."""
        return taxable_income

    def surtax_rules(
        self, profile: JurisdictionProfile, params: TaxCalculationParams, regime: str
    ) -> list[SurtaxRule]:
        return [rule for rule in profile.surtaxes if rule.applies_to(regime)]

    def relief_cap(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        rule: SurtaxRule,
        later_rules: list[SurtaxRule],
        taxable_income: Decimal,
        income_tax: Decimal,
    ) -> Decimal | None:
        """Largest surtax that keeps tax above a schedule step within the income above it.

        Tax at the step is charged at the rate below it. Later surtaxes on
        tax count against the cap, so the whole charge rises no faster than
        income does.
        """
        step = rule.step_for(taxable_income)
        if step is None:
            return None
        threshold, rate_below = step
        tax_at_threshold = self.apply_brackets(profile, params, regime, threshold).total
        on_tax = [r for r in later_rules if r.base == SurtaxBase.TAX_AND_SURTAXES]
        load = tax_load(on_tax, taxable_income)
        excess = taxable_income - threshold
        return tax_at_threshold * (1 + rate_below) + excess / load - income_tax

    def compute_surtaxes(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        taxable_income: Decimal,
        income_tax: Decimal,
        deductions: DeductionBreakdown,
    ) -> list[NamedAmount]:
        """Apply surtax rules in order.

        ``income_tax`` is bracket tax after non-refundable credits.
        """
        rules = self.surtax_rules(profile, params, regime)
        secondary_income: Decimal | None = None
        surtaxes: list[NamedAmount] = []
        running = ZERO
        for index, rule in enumerate(rules):
            rate = rule.rate_for(taxable_income)
            if rule.base == SurtaxBase.INCOME_TAX:
                amount = income_tax * rate
                if rule.marginal_relief and amount > ZERO:
                    cap = self.relief_cap(
                        profile, params, regime, rule, rules[index + 1 :],
                        taxable_income, income_tax,
                    )
                    if cap is not None and cap < amount:
                        logger.debug("%s %s limited by marginal relief", profile.key, rule.name)
                        amount = max(cap, ZERO)
            elif rule.base == SurtaxBase.TAX_AND_SURTAXES:
                amount = (income_tax + running) * rate
            else:
                if rule.base == SurtaxBase.GROSS_INCOME:
                    income = params.gross_income
                elif rule.on_secondary:
                    if secondary_income is None:
                        secondary_income = self.secondary_taxable_income(
                            profile, params, deductions
                        )
                    income = secondary_income
                else:
                    income = taxable_income
                if rule.tiers:
                    amount = calculate_bracket_tax(income, rule.tiers, rule.name).total
                else:
                    amount = max(income - rule.threshold, ZERO) * rate
            running += amount
            surtaxes.append(NamedAmount(name=rule.name, amount=amount))
        return surtaxes

    def marginal_rate(
        self,
        profile: JurisdictionProfile,
        params: TaxCalculationParams,
        regime: str,
        taxable_income: Decimal,
    ) -> Decimal:
        return marginal_rate(taxable_income, self.select_table(profile, params, regime))

    # -- pipeline ------------------------------------------------------------

    def compute(self, params: TaxCalculationParams) -> StrategyOutcome:
        profile, year_note = self.profile_for(params.year)
        # Raises UnknownRegimeError before anything is computed.
        regime = self.resolve_regime(profile, params.regime)
        notes: list[str] = list(profile.estimate_notes)
        if year_note:
            notes.append(year_note)

        deductions = self.deduction_resolver.resolve(
            params.deductions,
            self.standard_deduction(profile, params, regime),
            caps=profile.above_the_line_caps,
            itemizing_allowed=profile.itemizing_allowed,
            above_the_line_allowed=profile.allows_above_the_line(regime),
        )
        income_after_deductions = max(params.gross_income - deductions.total, ZERO)
        taxable_income = self.adjust_taxable_income(profile, params, income_after_deductions)

        contributions = compute_contributions(
            params.gross_income, self.contribution_rules(profile, params)
        )
        bracket = merge_bracket_results(
            [self.apply_brackets(profile, params, regime, taxable_income)]
            + self.extra_brackets(profile, params, deductions)
        )

        surtax_rules = self.surtax_rules(profile, params, regime)
        credits = self.credit_resolver.resolve(
            params.credits,
            self.credit_rules(profile, params, regime),
            dependents=params.dependents,
            income=self.credit_income(profile, params, taxable_income, deductions),
            income_tax=bracket.total,
            refundable_inputs=profile.refundable_credit_inputs,
            relief_load=tax_load(surtax_rules, taxable_income),
        )
        non_refundable = credits.total - credits.refundable_total
        surtaxes = self.compute_surtaxes(
            profile,
            params,
            regime,
            taxable_income,
            max(bracket.total - non_refundable, ZERO),
            deductions,
        )

        notes.extend(deductions.notes)
        notes.extend(credits.notes)
        charged = {s.name for s in surtaxes if s.amount > ZERO}
        surtax_notes = [
            rule.simplified_note
            for rule in surtax_rules
            if rule.simplified_note and rule.name in charged
        ]
        notes.extend(surtax_notes)
        return StrategyOutcome(
            profile=profile,
            regime=regime,
            taxable_income=taxable_income,
            bracket=bracket,
            contributions=contributions,
            surtaxes=surtaxes,
            deductions=deductions,
            credits=credits,
            marginal_rate=self.marginal_rate(profile, params, regime, taxable_income),
            is_estimate=(
                bool(profile.estimate_notes)
                or year_note is not None
                or credits.is_estimate
                or bool(surtax_notes)
            ),
            notes=notes,
        )
