"""Calculation output models.

Results are frozen and carry every component, using zero rather than a
missing field for anything that does not apply.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from takehome.models.brackets import BracketLineItem
from takehome.models.enums import FilingStatus


class NamedAmount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    amount: Decimal


class DeductionBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Decimal = Decimal("0")
    standard: Decimal = Decimal("0")
    itemized_used: bool = False
    adjustments: Decimal = Decimal("0")  # above-the-line portion of total
    itemized: list[NamedAmount] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)


class CreditBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Decimal = Decimal("0")
    refundable_total: Decimal = Decimal("0")
    itemized: list[NamedAmount] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    is_estimate: bool = False

    @property
    def refundable_applied(self) -> bool:
        return self.refundable_total > 0


class TaxCalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_code: str
    state_code: str | None
    currency: str
    regime: str
    filing_status: FilingStatus
    year: int
    data_year: int
    strategy: str
    # Amounts
    gross_income: Decimal
    taxable_income: Decimal
    bracket_tax: Decimal
    payroll_total: Decimal
    surtax_total: Decimal
    total_tax: Decimal
    take_home_pay: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    # Breakdowns
    brackets: list[BracketLineItem] = Field(default_factory=list)
    payroll_contributions: list[NamedAmount] = Field(default_factory=list)
    surtaxes: list[NamedAmount] = Field(default_factory=list)
    deductions: DeductionBreakdown = Field(default_factory=DeductionBreakdown)
    credits: CreditBreakdown = Field(default_factory=CreditBreakdown)
    is_estimate: bool = False
    notes: list[str] = Field(default_factory=list)

    @property
    def jurisdiction(self) -> str:
        if self.state_code:
            return f"{self.country_code}-{self.state_code}"
        return self.country_code

    def to_flat_record(self) -> dict[str, str | int | bool | None]:
        """Flatten into a single-level record for external storage.

        Decimals are written as strings so no precision is lost. Breakdown
        rows become ``<section>.<name>`` keys.
        """
        record: dict[str, str | int | bool | None] = {
            "country_code": self.country_code,
            "state_code": self.state_code,
            "currency": self.currency,
            "regime": self.regime,
            "filing_status": self.filing_status.value,
            "year": self.year,
            "data_year": self.data_year,
            "strategy": self.strategy,
            "gross_income": str(self.gross_income),
            "taxable_income": str(self.taxable_income),
            "bracket_tax": str(self.bracket_tax),
            "payroll_total": str(self.payroll_total),
            "surtax_total": str(self.surtax_total),
            "total_tax": str(self.total_tax),
            "take_home_pay": str(self.take_home_pay),
            "effective_rate": str(self.effective_rate),
            "marginal_rate": str(self.marginal_rate),
            "deductions.total": str(self.deductions.total),
            "credits.total": str(self.credits.total),
            "is_estimate": self.is_estimate,
            "notes": "; ".join(self.notes) or None,
        }
        for i, line in enumerate(self.brackets):
            record[f"brackets.{line.table}.{i}"] = str(line.tax)
        for section, rows in (
            ("payroll", self.payroll_contributions),
            ("surtax", self.surtaxes),
            ("deduction", self.deductions.itemized),
            ("credit", self.credits.itemized),
        ):
            for row in rows:
                record[f"{section}.{row.name}"] = str(row.amount)
        return record


class ScenarioVariant(BaseModel):
    name: str
    overrides: dict[str, Any] = Field(default_factory=dict)


class ScenarioDelta(BaseModel):
    """Variant minus base."""

    model_config = ConfigDict(frozen=True)

    take_home_pay: Decimal
    total_tax: Decimal
    effective_rate: Decimal


class ScenarioOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    result: TaxCalculationResult
    delta: ScenarioDelta


class ScenarioComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    base: TaxCalculationResult
    variants: list[ScenarioOutcome] = Field(default_factory=list)

    def best(self) -> ScenarioOutcome | None:
        """Variant with the highest take-home pay, if any beats the base."""
        better = [v for v in self.variants if v.delta.take_home_pay > 0]
        if not better:
            return None
        return max(better, key=lambda v: v.delta.take_home_pay)
