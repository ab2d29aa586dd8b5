"""Calculation input models.

Everything here is transient: the caller builds a ``TaxCalculationParams``
per call and the engine never keeps a reference to it.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from takehome.models.enums import FilingStatus, StudentLoanPlan

# Free-form country names and non-ISO codes accepted from callers.
COUNTRY_ALIASES: dict[str, str] = {
    "UK": "GB",
    "UNITED KINGDOM": "GB",
    "ENGLAND": "GB",
    "USA": "US",
    "UNITED STATES": "US",
    "INDIA": "IN",
    "CANADA": "CA",
    "AUSTRALIA": "AU",
    "GERMANY": "DE",
    "FRANCE": "FR",
    "BRAZIL": "BR",
    "SOUTH AFRICA": "ZA",
}

# Short forms accepted for filing status alongside the enum values.
FILING_STATUS_ALIASES: dict[str, FilingStatus] = {
    "SINGLE": FilingStatus.SINGLE,
    "MFJ": FilingStatus.MFJ,
    "MFS": FilingStatus.MFS,
    "HOH": FilingStatus.HOH,
}


class JurisdictionKey(BaseModel):
    country_code: str
    state_code: str | None = None

    @field_validator("country_code")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        code = v.strip().upper()
        return COUNTRY_ALIASES.get(code, code)

    @field_validator("state_code")
    @classmethod
    def normalize_state(cls, v: str | None) -> str | None:
        if v is None:
            return None
        code = v.strip().upper()
        return code or None

    def __str__(self) -> str:
        if self.state_code:
            return f"{self.country_code}-{self.state_code}"
        return self.country_code


class DeductionInput(BaseModel):
    """Caller-supplied deductions. Omitted fields count as zero."""

    standard_deduction_override: Decimal | None = None
    itemized_total: Decimal | None = None
    retirement_contributions: Decimal = Decimal("0")
    hsa_contributions: Decimal = Decimal("0")
    student_loan_interest: Decimal = Decimal("0")
    health_insurance_premiums: Decimal = Decimal("0")
    other_above_the_line: Decimal = Decimal("0")

    def above_the_line(self) -> dict[str, Decimal]:
        return {
            "retirement_contributions": self.retirement_contributions,
            "hsa_contributions": self.hsa_contributions,
            "student_loan_interest": self.student_loan_interest,
            "health_insurance_premiums": self.health_insurance_premiums,
            "other_above_the_line": self.other_above_the_line,
        }


class CreditInput(BaseModel):
    earned_income_credit: Decimal = Decimal("0")
    # Replaces the jurisdiction's computed per-dependent credit when set.
    child_credit: Decimal | None = None
    education_credit: Decimal = Decimal("0")
    other_credits: Decimal = Decimal("0")


class JurisdictionOptions(BaseModel):
    """Personal circumstances only some jurisdictions tax on.

    Jurisdictions ignore the options that do not concern them.
    """

    # Germany: church tax on income tax.
    is_church_member: bool = False
    church_tax_rate: Decimal | None = None
    # United Kingdom: student loan repayment plan.
    student_loan_plan: StudentLoanPlan | None = None
    # Australia: Medicare levy surcharge applies without hospital cover.
    has_private_health: bool = True

    @field_validator("student_loan_plan", mode="before")
    @classmethod
    def normalize_plan(cls, v: object) -> object:
        if isinstance(v, str):
            plan = v.strip().lower().replace(" ", "")
            return None if plan in ("", "none") else plan
        return v


class TaxCalculationParams(BaseModel):
    gross_income: Decimal
    jurisdiction: JurisdictionKey
    year: int
    regime: str | None = None
    filing_status: FilingStatus = FilingStatus.SINGLE
    dependents: int = 0
    deductions: DeductionInput = Field(default_factory=DeductionInput)
    credits: CreditInput = Field(default_factory=CreditInput)
    options: JurisdictionOptions = Field(default_factory=JurisdictionOptions)

    @field_validator("filing_status", mode="before")
    @classmethod
    def normalize_filing_status(cls, v: object) -> object:
        if isinstance(v, str) and not isinstance(v, FilingStatus):
            key = v.strip().upper()
            return FILING_STATUS_ALIASES.get(key, key)
        return v
