"""takehome: multi-jurisdiction income tax and take-home pay engine."""

from takehome.engines.orchestrator import TaxCalculator
from takehome.exceptions import (
    ConfigurationError,
    DataValidationError,
    InvalidBracketTableError,
    TaxComputationError,
    UnknownRegimeError,
)
from takehome.jurisdictions.registry import JurisdictionRegistry, build_default_registry
from takehome.models import (
    CreditInput,
    DeductionInput,
    FilingStatus,
    JurisdictionKey,
    ScenarioVariant,
    TaxCalculationParams,
    TaxCalculationResult,
)
from takehome.settings import EngineSettings

__version__ = "0.1.0"

__all__ = [
    "build_default_registry",
    "ConfigurationError",
    "CreditInput",
    "DataValidationError",
    "DeductionInput",
    "EngineSettings",
    "FilingStatus",
    "InvalidBracketTableError",
    "JurisdictionKey",
    "JurisdictionRegistry",
    "ScenarioVariant",
    "TaxCalculationParams",
    "TaxCalculationResult",
    "TaxCalculator",
    "TaxComputationError",
    "UnknownRegimeError",
]
