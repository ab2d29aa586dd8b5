"""Engine configuration."""

from decimal import Decimal

from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    """Knobs for the calculation engine.

    Passed to ``TaxCalculator`` explicitly; there is no global settings object.
    """

    min_year: int = 2020
    max_year: int = 2030
    generic_rate: Decimal = Field(
        default=Decimal("0.25"),
        ge=0,
        le=1,
        description="Flat rate the fallback strategy applies to taxable income",
    )
    tax_floor: Decimal = Field(
        default=Decimal("0"),
        description="Lowest total tax reported unless a refundable credit applies",
    )
