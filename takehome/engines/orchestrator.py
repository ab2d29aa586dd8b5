"""Tax calculation entry point.

Validates params, resolves a strategy through the registry, runs it and
assembles the immutable result. Also runs "what-if" scenarios: each variant
is the base params with overrides applied, computed independently, with the
delta taken against the base result.
"""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from takehome.engines.bracket_calculator import ZERO
from takehome.exceptions import DataValidationError
from takehome.jurisdictions.registry import JurisdictionRegistry, build_default_registry
from takehome.models.params import TaxCalculationParams
from takehome.models.results import (
    ScenarioComparison,
    ScenarioDelta,
    ScenarioOutcome,
    ScenarioVariant,
    TaxCalculationResult,
)
from takehome.settings import EngineSettings

logger = logging.getLogger(__name__)


def apply_overrides(
    base: TaxCalculationParams, overrides: dict[str, Any]
) -> TaxCalculationParams:
    """Copy of ``base`` with overrides applied and re-validated.

    Keys may be dotted (``deductions.retirement_contributions``) or nested
    dicts; nested models are merged rather than replaced.
    """
    data = base.model_dump()
    for key, value in overrides.items():
        path = key.split(".")
        if path[0] not in TaxCalculationParams.model_fields:
            raise DataValidationError(key, "not a calculation parameter")
        target = data
        for part in path[:-1]:
            if not isinstance(target.get(part), dict):
                raise DataValidationError(key, f"'{part}' has no sub-fields")
            target = target[part]
        leaf = path[-1]
        if isinstance(value, dict) and isinstance(target.get(leaf), dict):
            target[leaf] = {**target[leaf], **value}
        else:
            target[leaf] = value
    try:
        return TaxCalculationParams.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(p) for p in error["loc"])
        raise DataValidationError(field, error["msg"]) from e


class TaxCalculator:
    """Computes tax results for any registered jurisdiction."""

    def __init__(
        self,
        registry: JurisdictionRegistry | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.registry = registry or build_default_registry(self.settings.generic_rate)

    def validate(self, params: TaxCalculationParams) -> None:
        if params.gross_income < ZERO:
            raise DataValidationError("gross_income", "must be zero or greater")
        if not self.settings.min_year <= params.year <= self.settings.max_year:
            raise DataValidationError(
                "year",
                f"must be between {self.settings.min_year} and {self.settings.max_year}",
            )
        if params.dependents < 0:
            raise DataValidationError("dependents", "must be zero or greater")

    def calculate_tax(self, params: TaxCalculationParams) -> TaxCalculationResult:
        self.validate(params)
        resolution = self.registry.resolve(params.jurisdiction)
        strategy = resolution.strategy
        outcome = strategy.compute(params)
        logger.debug(
            "%s via %s (data year %d, regime %s)",
            params.jurisdiction,
            type(strategy).__name__,
            outcome.profile.tax_year,
            outcome.regime,
        )

        payroll_total = sum((c.amount for c in outcome.contributions), ZERO)
        surtax_total = sum((s.amount for s in outcome.surtaxes), ZERO)
        total_tax = outcome.bracket.total + payroll_total + surtax_total - outcome.credits.total
        if not outcome.credits.refundable_applied:
            total_tax = max(total_tax, self.settings.tax_floor)

        gross = params.gross_income
        effective_rate = total_tax / gross if gross > ZERO else ZERO

        notes = list(outcome.notes)
        if resolution.fallback_reason:
            notes.insert(0, resolution.fallback_reason)

        return TaxCalculationResult(
            country_code=params.jurisdiction.country_code,
            state_code=params.jurisdiction.state_code,
            currency=outcome.profile.currency,
            regime=outcome.regime,
            filing_status=params.filing_status,
            year=params.year,
            data_year=outcome.profile.tax_year,
            strategy=type(strategy).__name__,
            gross_income=gross,
            taxable_income=outcome.taxable_income,
            bracket_tax=outcome.bracket.total,
            payroll_total=payroll_total,
            surtax_total=surtax_total,
            total_tax=total_tax,
            take_home_pay=gross - total_tax,
            effective_rate=effective_rate,
            marginal_rate=outcome.marginal_rate,
            brackets=outcome.bracket.line_items,
            payroll_contributions=outcome.contributions,
            surtaxes=outcome.surtaxes,
            deductions=outcome.deductions,
            credits=outcome.credits,
            is_estimate=outcome.is_estimate or resolution.is_fallback,
            notes=notes,
        )

    def compare_scenarios(
        self,
        base: TaxCalculationParams,
        variants: Sequence[ScenarioVariant],
    ) -> ScenarioComparison:
        base_result = self.calculate_tax(base)
        outcomes: list[ScenarioOutcome] = []
        for variant in variants:
            result = self.calculate_tax(apply_overrides(base, variant.overrides))
            outcomes.append(
                ScenarioOutcome(
                    name=variant.name,
                    result=result,
                    delta=ScenarioDelta(
                        take_home_pay=result.take_home_pay - base_result.take_home_pay,
                        total_tax=result.total_tax - base_result.total_tax,
                        effective_rate=result.effective_rate - base_result.effective_rate,
                    ),
                )
            )
        return ScenarioComparison(base=base_result, variants=outcomes)

