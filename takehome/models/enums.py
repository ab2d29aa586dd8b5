"""Enumerations for takehome."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "SINGLE"
    MFJ = "MARRIED_FILING_JOINTLY"
    MFS = "MARRIED_FILING_SEPARATELY"
    HOH = "HEAD_OF_HOUSEHOLD"


class SurtaxBase(StrEnum):
    INCOME_TAX = "INCOME_TAX"  # bracket tax after non-refundable credits
    TAX_AND_SURTAXES = "TAX_AND_SURTAXES"  # income tax plus earlier surtaxes
    TAXABLE_INCOME = "TAXABLE_INCOME"
    GROSS_INCOME = "GROSS_INCOME"


class PhaseOutKind(StrEnum):
    CUTOFF = "CUTOFF"
    LINEAR = "LINEAR"


class StudentLoanPlan(StrEnum):
    PLAN1 = "plan1"
    PLAN2 = "plan2"
    PLAN4 = "plan4"
    PLAN5 = "plan5"
