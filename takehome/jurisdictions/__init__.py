"""Jurisdiction strategies, tax tables and the registry that maps keys to them."""

from takehome.jurisdictions.base import JurisdictionStrategy, StrategyOutcome
from takehome.jurisdictions.generic import GenericStrategy
from takehome.jurisdictions.registry import (
    JurisdictionRegistry,
    Resolution,
    build_default_registry,
)

__all__ = [
    "build_default_registry",
    "GenericStrategy",
    "JurisdictionRegistry",
    "JurisdictionStrategy",
    "Resolution",
    "StrategyOutcome",
]
