"""Data models for takehome."""

from takehome.models.brackets import BracketLineItem, TaxBracket, brackets_from_thresholds
from takehome.models.enums import FilingStatus, PhaseOutKind, SurtaxBase
from takehome.models.params import (
    CreditInput,
    DeductionInput,
    JurisdictionKey,
    TaxCalculationParams,
)
from takehome.models.results import (
    CreditBreakdown,
    DeductionBreakdown,
    NamedAmount,
    ScenarioComparison,
    ScenarioDelta,
    ScenarioOutcome,
    ScenarioVariant,
    TaxCalculationResult,
)
from takehome.models.rules import (
    ContributionRule,
    CreditRule,
    JurisdictionProfile,
    PhaseOut,
    SurtaxRule,
)

__all__ = [
    "BracketLineItem",
    "brackets_from_thresholds",
    "ContributionRule",
    "CreditBreakdown",
    "CreditInput",
    "CreditRule",
    "DeductionBreakdown",
    "DeductionInput",
    "FilingStatus",
    "JurisdictionKey",
    "JurisdictionProfile",
    "NamedAmount",
    "PhaseOut",
    "PhaseOutKind",
    "ScenarioComparison",
    "ScenarioDelta",
    "ScenarioOutcome",
    "ScenarioVariant",
    "SurtaxBase",
    "SurtaxRule",
    "TaxBracket",
    "TaxCalculationParams",
    "TaxCalculationResult",
]
