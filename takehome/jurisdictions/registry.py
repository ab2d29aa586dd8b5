"""Jurisdiction registry.

Static mapping from ``(country, state)`` to a strategy, built once and never
mutated. Lookup falls back from state to country to the generic strategy;
falling back is a coverage gap, not an error.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from takehome.jurisdictions.australia import AustraliaStrategy, build_australia_profiles
from takehome.jurisdictions.base import JurisdictionStrategy
from takehome.jurisdictions.brazil import BrazilStrategy, build_brazil_profiles
from takehome.jurisdictions.canada import PROVINCE_NAMES, CanadaStrategy, build_canada_profiles
from takehome.jurisdictions.france import FranceStrategy, build_france_profiles
from takehome.jurisdictions.generic import GenericStrategy
from takehome.jurisdictions.germany import GermanyStrategy, build_germany_profiles
from takehome.jurisdictions.india import IndiaStrategy, build_india_profiles
from takehome.jurisdictions.south_africa import SouthAfricaStrategy, build_south_africa_profiles
from takehome.jurisdictions.uk import UnitedKingdomStrategy, build_uk_profiles
from takehome.jurisdictions.us import SUPPORTED_STATES, UnitedStatesStrategy, build_us_profiles
from takehome.models.params import JurisdictionKey
from takehome.settings import EngineSettings

logger = logging.getLogger(__name__)

RegistryKey = tuple[str, str | None]


@dataclass(frozen=True)
class Resolution:
    strategy: JurisdictionStrategy
    exact: bool
    fallback_reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return not self.exact


class JurisdictionRegistry:
    """Read-only lookup of strategies by jurisdiction key."""

    def __init__(
        self,
        strategies: Mapping[RegistryKey, JurisdictionStrategy],
        fallback: JurisdictionStrategy,
    ) -> None:
        self._strategies = MappingProxyType(dict(strategies))
        self.fallback = fallback

    def __contains__(self, key: RegistryKey) -> bool:
        return key in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def get(self, country_code: str, state_code: str | None = None) -> JurisdictionStrategy | None:
        return self._strategies.get((country_code, state_code))

    def resolve(self, key: JurisdictionKey) -> Resolution:
        strategy = self.get(key.country_code, key.state_code)
        if strategy is not None:
            logger.debug("Resolved %s to %s", key, type(strategy).__name__)
            return Resolution(strategy=strategy, exact=True)

        if key.state_code is not None:
            strategy = self.get(key.country_code)
            if strategy is not None:
                reason = (
                    f"No tax tables for {key}; used {key.country_code} national rules only"
                )
                logger.warning(reason)
                return Resolution(strategy=strategy, exact=False, fallback_reason=reason)

        reason = f"No tax tables for {key}; used a generic flat-rate estimate"
        logger.warning(reason)
        return Resolution(strategy=self.fallback, exact=False, fallback_reason=reason)

    def supported(self) -> list[RegistryKey]:
        return sorted(self._strategies, key=lambda k: (k[0], k[1] or ""))

    def items(self) -> list[tuple[RegistryKey, JurisdictionStrategy]]:
        return [(key, self._strategies[key]) for key in self.supported()]


def build_default_registry(
    generic_rate: Decimal | None = None,
) -> JurisdictionRegistry:
    """Registry of every jurisdiction with tax tables."""
    if generic_rate is None:
        generic_rate = EngineSettings().generic_rate

    strategies: dict[RegistryKey, JurisdictionStrategy] = {
        ("US", None): UnitedStatesStrategy(build_us_profiles()),
        ("GB", None): UnitedKingdomStrategy(build_uk_profiles()),
        ("IN", None): IndiaStrategy(build_india_profiles()),
        ("CA", None): CanadaStrategy(build_canada_profiles()),
        ("AU", None): AustraliaStrategy(build_australia_profiles()),
        ("DE", None): GermanyStrategy(build_germany_profiles()),
        ("FR", None): FranceStrategy(build_france_profiles()),
        ("BR", None): BrazilStrategy(build_brazil_profiles()),
        ("ZA", None): SouthAfricaStrategy(build_south_africa_profiles()),
    }
    for state in SUPPORTED_STATES:
        strategies[("US", state)] = UnitedStatesStrategy(build_us_profiles(state))
    for province in PROVINCE_NAMES:
        strategies[("CA", province)] = CanadaStrategy(build_canada_profiles(province))

    return JurisdictionRegistry(strategies, GenericStrategy(generic_rate))
