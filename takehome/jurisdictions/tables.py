"""Jurisdiction tax tables.

Bracket tables, standard deductions, contribution rates and thresholds for
every registered jurisdiction. Keyed by data year (and filing status or
regime where the rules differ). Never hardcode rates in computation code.

Brackets are written as ``(upper_bound, rate)`` tuples; ``None`` marks the
unbounded top bracket. All amounts are annual, in the local currency.

Sources:
  - US: IRS Rev. Proc. 2023-34 (2024), Rev. Proc. 2024-40 (2025),
    FTB Publication 1001, SSA wage base announcements
  - GB: HMRC rates and thresholds 2024/25
  - IN: Finance Act 2024, Union Budget 2025-26
  - CA: CRA indexation 2024
  - AU: ATO resident rates 2024-25
  - DE: EStG section 32a (2024), approximated with linear bands
  - FR: bareme IR 2024
  - BR: Receita Federal IRPF 2024, INSS 2024 (monthly figures x 12)
  - ZA: SARS 2024/25
"""

from decimal import Decimal

from takehome.models.enums import FilingStatus

Thresholds = list[tuple[Decimal | None, Decimal]]

# ===========================================================================
# United States
# ===========================================================================

# Federal ordinary income brackets: {year: {filing_status: [(upper_bound, rate), ...]}}
FEDERAL_BRACKETS: dict[int, dict[FilingStatus, Thresholds]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.12")),
            (Decimal("100525"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243725"), Decimal("0.32")),
            (Decimal("609350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFJ: [
            (Decimal("23200"), Decimal("0.10")),
            (Decimal("94300"), Decimal("0.12")),
            (Decimal("201050"), Decimal("0.22")),
            (Decimal("383900"), Decimal("0.24")),
            (Decimal("487450"), Decimal("0.32")),
            (Decimal("731200"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFS: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.12")),
            (Decimal("100525"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243725"), Decimal("0.32")),
            (Decimal("365600"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.HOH: [
            (Decimal("16550"), Decimal("0.10")),
            (Decimal("63100"), Decimal("0.12")),
            (Decimal("100500"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243700"), Decimal("0.32")),
            (Decimal("609350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
    },
    2025: {
        FilingStatus.SINGLE: [
            (Decimal("11925"), Decimal("0.10")),
            (Decimal("48475"), Decimal("0.12")),
            (Decimal("103350"), Decimal("0.22")),
            (Decimal("197300"), Decimal("0.24")),
            (Decimal("250525"), Decimal("0.32")),
            (Decimal("626350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFJ: [
            (Decimal("23850"), Decimal("0.10")),
            (Decimal("96950"), Decimal("0.12")),
            (Decimal("206700"), Decimal("0.22")),
            (Decimal("394600"), Decimal("0.24")),
            (Decimal("501050"), Decimal("0.32")),
            (Decimal("751600"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFS: [
            (Decimal("11925"), Decimal("0.10")),
            (Decimal("48475"), Decimal("0.12")),
            (Decimal("103350"), Decimal("0.22")),
            (Decimal("197300"), Decimal("0.24")),
            (Decimal("250525"), Decimal("0.32")),
            (Decimal("375800"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.HOH: [
            (Decimal("17000"), Decimal("0.10")),
            (Decimal("64850"), Decimal("0.12")),
            (Decimal("103350"), Decimal("0.22")),
            (Decimal("197300"), Decimal("0.24")),
            (Decimal("250500"), Decimal("0.32")),
            (Decimal("626350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
    },
}

FEDERAL_STANDARD_DEDUCTION: dict[int, dict[FilingStatus, Decimal]] = {
    2024: {
        FilingStatus.SINGLE: Decimal("14600"),
        FilingStatus.MFJ: Decimal("29200"),
        FilingStatus.MFS: Decimal("14600"),
        FilingStatus.HOH: Decimal("21900"),
    },
    2025: {
        FilingStatus.SINGLE: Decimal("15000"),
        FilingStatus.MFJ: Decimal("30000"),
        FilingStatus.MFS: Decimal("15000"),
        FilingStatus.HOH: Decimal("22500"),
    },
}

# Adjustments to income, capped per year
US_ABOVE_THE_LINE_CAPS: dict[int, dict[str, Decimal]] = {
    2024: {
        "retirement_contributions": Decimal("23000"),  # 401(k) elective deferral
        "hsa_contributions": Decimal("4150"),  # self-only coverage
        "student_loan_interest": Decimal("2500"),
    },
    2025: {
        "retirement_contributions": Decimal("23500"),
        "hsa_contributions": Decimal("4300"),
        "student_loan_interest": Decimal("2500"),
    },
}

# ---------------------------------------------------------------------------
# FICA
# ---------------------------------------------------------------------------
SOCIAL_SECURITY_RATE = Decimal("0.062")
SOCIAL_SECURITY_WAGE_BASE: dict[int, Decimal] = {
    2024: Decimal("168600"),
    2025: Decimal("176100"),
}
REGULAR_MEDICARE_TAX_RATE = Decimal("0.0145")
# Additional Medicare Tax (IRC Section 3101(b)(2)); thresholds are statutory
ADDITIONAL_MEDICARE_TAX_RATE = Decimal("0.009")
ADDITIONAL_MEDICARE_TAX_THRESHOLD: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("200000"),
    FilingStatus.MFJ: Decimal("250000"),
    FilingStatus.MFS: Decimal("125000"),
    FilingStatus.HOH: Decimal("200000"),
}

# ---------------------------------------------------------------------------
# Child tax credit (IRC Section 24)
# ---------------------------------------------------------------------------
CHILD_TAX_CREDIT_PER_CHILD = Decimal("2000")
CHILD_TAX_CREDIT_PHASEOUT_START: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("200000"),
    FilingStatus.MFJ: Decimal("400000"),
    FilingStatus.MFS: Decimal("200000"),
    FilingStatus.HOH: Decimal("200000"),
}
# $50 per $1,000 of excess income, smoothed to 5% of the excess.
CHILD_TAX_CREDIT_PHASEOUT_RATE = Decimal("0.05")

# ---------------------------------------------------------------------------
# California (R&TC Section 17041, FTB Publication 1001)
# ---------------------------------------------------------------------------
_CA_SINGLE: Thresholds = [
    (Decimal("10412"), Decimal("0.01")),
    (Decimal("24684"), Decimal("0.02")),
    (Decimal("38959"), Decimal("0.04")),
    (Decimal("54081"), Decimal("0.06")),
    (Decimal("68350"), Decimal("0.08")),
    (Decimal("349137"), Decimal("0.093")),
    (Decimal("418961"), Decimal("0.103")),
    (Decimal("698271"), Decimal("0.113")),
    (None, Decimal("0.123")),
]
_CA_MFJ: Thresholds = [
    (Decimal("20824"), Decimal("0.01")),
    (Decimal("49368"), Decimal("0.02")),
    (Decimal("77918"), Decimal("0.04")),
    (Decimal("108162"), Decimal("0.06")),
    (Decimal("136700"), Decimal("0.08")),
    (Decimal("698274"), Decimal("0.093")),
    (Decimal("837922"), Decimal("0.103")),
    (Decimal("1396542"), Decimal("0.113")),
    (None, Decimal("0.123")),
]
_CA_HOH: Thresholds = [
    (Decimal("20839"), Decimal("0.01")),
    (Decimal("49371"), Decimal("0.02")),
    (Decimal("63644"), Decimal("0.04")),
    (Decimal("78765"), Decimal("0.06")),
    (Decimal("93037"), Decimal("0.08")),
    (Decimal("474824"), Decimal("0.093")),
    (Decimal("569790"), Decimal("0.103")),
    (Decimal("949649"), Decimal("0.113")),
    (None, Decimal("0.123")),
]
# 2025 FTB tables are not published yet; 2024 thresholds carried forward.
CALIFORNIA_BRACKETS: dict[int, dict[FilingStatus, Thresholds]] = {
    year: {
        FilingStatus.SINGLE: _CA_SINGLE,
        FilingStatus.MFJ: _CA_MFJ,
        FilingStatus.MFS: _CA_SINGLE,
        FilingStatus.HOH: _CA_HOH,
    }
    for year in (2024, 2025)
}

CALIFORNIA_STANDARD_DEDUCTION: dict[int, dict[FilingStatus, Decimal]] = {
    year: {
        FilingStatus.SINGLE: Decimal("5540"),
        FilingStatus.MFJ: Decimal("11080"),
        FilingStatus.MFS: Decimal("5540"),
        FilingStatus.HOH: Decimal("11080"),
    }
    for year in (2024, 2025)
}

# Mental Health Services Tax: 1% on income above $1M (R&TC Section 17043(a))
CA_MENTAL_HEALTH_THRESHOLD = Decimal("1000000")
CA_MENTAL_HEALTH_RATE = Decimal("0.01")

# Flat approximations of graduated state schedules; results are flagged.
US_STATE_FLAT_RATES: dict[str, Decimal] = {
    "NY": Decimal("0.0685"),
    "IL": Decimal("0.0495"),
    "PA": Decimal("0.0307"),
    "OH": Decimal("0.0399"),
    "GA": Decimal("0.0575"),
    "NC": Decimal("0.0499"),
}
US_NO_INCOME_TAX_STATES: tuple[str, ...] = ("TX", "FL", "WA", "NV", "WY", "SD", "TN")

# ===========================================================================
# United Kingdom (2024/25)
# ===========================================================================
UK_PERSONAL_ALLOWANCE: dict[int, Decimal] = {2024: Decimal("12570")}

# Bands apply to income after the personal allowance.
UK_BRACKETS: dict[int, dict[str, Thresholds]] = {
    2024: {
        "england": [
            (Decimal("37700"), Decimal("0.20")),
            (Decimal("125140"), Decimal("0.40")),
            (None, Decimal("0.45")),
        ],
        "scotland": [
            (Decimal("2306"), Decimal("0.19")),
            (Decimal("13991"), Decimal("0.20")),
            (Decimal("31092"), Decimal("0.21")),
            (Decimal("62430"), Decimal("0.42")),
            (Decimal("112570"), Decimal("0.45")),
            (None, Decimal("0.48")),
        ],
    },
}

# Class 1 employee National Insurance
UK_NI_PRIMARY_THRESHOLD = Decimal("12570")
UK_NI_UPPER_EARNINGS_LIMIT = Decimal("50270")
UK_NI_MAIN_RATE = Decimal("0.08")  # from 6 April 2024
UK_NI_UPPER_RATE = Decimal("0.02")

UK_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "retirement_contributions": Decimal("60000"),  # pension annual allowance
}

# Student loan repayment thresholds by plan; 9% of earnings above them
UK_STUDENT_LOAN_THRESHOLDS: dict[str, Decimal] = {
    "plan1": Decimal("22015"),
    "plan2": Decimal("27295"),
    "plan4": Decimal("27660"),
    "plan5": Decimal("25000"),
}
UK_STUDENT_LOAN_RATE = Decimal("0.09")

# ===========================================================================
# India
# ===========================================================================
INDIA_BRACKETS: dict[int, dict[str, Thresholds]] = {
    2024: {
        "new": [
            (Decimal("300000"), Decimal("0")),
            (Decimal("700000"), Decimal("0.05")),
            (Decimal("1000000"), Decimal("0.10")),
            (Decimal("1200000"), Decimal("0.15")),
            (Decimal("1500000"), Decimal("0.20")),
            (None, Decimal("0.30")),
        ],
        "old": [
            (Decimal("250000"), Decimal("0")),
            (Decimal("500000"), Decimal("0.05")),
            (Decimal("1000000"), Decimal("0.20")),
            (None, Decimal("0.30")),
        ],
    },
    2025: {
        "new": [
            (Decimal("400000"), Decimal("0")),
            (Decimal("800000"), Decimal("0.05")),
            (Decimal("1200000"), Decimal("0.10")),
            (Decimal("1600000"), Decimal("0.15")),
            (Decimal("2000000"), Decimal("0.20")),
            (Decimal("2400000"), Decimal("0.25")),
            (None, Decimal("0.30")),
        ],
        "old": [
            (Decimal("250000"), Decimal("0")),
            (Decimal("500000"), Decimal("0.05")),
            (Decimal("1000000"), Decimal("0.20")),
            (None, Decimal("0.30")),
        ],
    },
}

INDIA_STANDARD_DEDUCTION: dict[int, dict[str, Decimal]] = {
    2024: {"new": Decimal("75000"), "old": Decimal("50000")},
    2025: {"new": Decimal("75000"), "old": Decimal("50000")},
}

# Section 87A rebate: (amount, taxable income limit)
INDIA_REBATE_87A: dict[int, dict[str, tuple[Decimal, Decimal]]] = {
    2024: {
        "new": (Decimal("25000"), Decimal("700000")),
        "old": (Decimal("12500"), Decimal("500000")),
    },
    2025: {
        "new": (Decimal("60000"), Decimal("1200000")),
        "old": (Decimal("12500"), Decimal("500000")),
    },
}

# Surcharge on tax by taxable income: (income threshold, rate)
INDIA_SURCHARGE: dict[str, list[tuple[Decimal, Decimal]]] = {
    "old": [
        (Decimal("5000000"), Decimal("0.10")),
        (Decimal("10000000"), Decimal("0.15")),
        (Decimal("20000000"), Decimal("0.25")),
        (Decimal("50000000"), Decimal("0.37")),
    ],
    # New regime caps the surcharge at 25%.
    "new": [
        (Decimal("5000000"), Decimal("0.10")),
        (Decimal("10000000"), Decimal("0.15")),
        (Decimal("20000000"), Decimal("0.25")),
    ],
}
INDIA_CESS_RATE = Decimal("0.04")  # Health and Education Cess

# Chapter VI-A deductions, old regime only
INDIA_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "retirement_contributions": Decimal("150000"),  # 80C
    "health_insurance_premiums": Decimal("50000"),  # 80D
}

# ===========================================================================
# Canada (2024)
# ===========================================================================
CANADA_FEDERAL_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("55867"), Decimal("0.15")),
        (Decimal("111733"), Decimal("0.205")),
        (Decimal("173205"), Decimal("0.26")),
        (Decimal("246752"), Decimal("0.29")),
        (None, Decimal("0.33")),
    ],
}
CANADA_BASIC_PERSONAL_AMOUNT: dict[int, Decimal] = {2024: Decimal("15000")}

CANADA_ONTARIO_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("51446"), Decimal("0.0505")),
        (Decimal("102894"), Decimal("0.0915")),
        (Decimal("150000"), Decimal("0.1116")),
        (Decimal("220000"), Decimal("0.1216")),
        (None, Decimal("0.1316")),
    ],
}

# Flat approximations of provincial schedules; results are flagged.
CANADA_PROVINCE_FLAT_RATES: dict[str, Decimal] = {
    "QC": Decimal("0.14"),
    "BC": Decimal("0.0506"),
    "AB": Decimal("0.10"),
    "MB": Decimal("0.108"),
    "SK": Decimal("0.105"),
    "NS": Decimal("0.0879"),
    "NB": Decimal("0.0968"),
    "NL": Decimal("0.087"),
    "PE": Decimal("0.098"),
}

CANADA_CPP_RATE = Decimal("0.0595")
CANADA_CPP_WAGE_BASE = Decimal("66600")  # YMPE
CANADA_EI_RATE = Decimal("0.0163")
CANADA_EI_WAGE_BASE = Decimal("61500")  # maximum insurable earnings

CANADA_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "retirement_contributions": Decimal("31560"),  # RRSP dollar limit
}

# ===========================================================================
# Australia (2024-25, residents)
# ===========================================================================
AUSTRALIA_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("18200"), Decimal("0")),
        (Decimal("45000"), Decimal("0.19")),
        (Decimal("120000"), Decimal("0.325")),
        (Decimal("180000"), Decimal("0.37")),
        (None, Decimal("0.45")),
    ],
}
AUSTRALIA_MEDICARE_LEVY_RATE = Decimal("0.02")
# Medicare levy surcharge without private hospital cover, banded above the
# singles threshold
AUSTRALIA_MEDICARE_LEVY_SURCHARGE: Thresholds = [
    (Decimal("90000"), Decimal("0")),
    (Decimal("105000"), Decimal("0.01")),
    (Decimal("140000"), Decimal("0.0125")),
    (None, Decimal("0.015")),
]
AUSTRALIA_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "retirement_contributions": Decimal("27500"),  # concessional super cap
}

# ===========================================================================
# Germany (2024), linear-band approximation of the section 32a tariff
# ===========================================================================
GERMANY_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("10908"), Decimal("0")),
        (Decimal("15999"), Decimal("0.14")),
        (Decimal("62809"), Decimal("0.23942")),
        (Decimal("277825"), Decimal("0.42")),
        (None, Decimal("0.45")),
    ],
}
GERMANY_SOLIDARITY_RATE = Decimal("0.055")
# Kirchensteuer on income tax; 8% in Bavaria and Baden-Wuerttemberg
GERMANY_CHURCH_TAX_RATE = Decimal("0.09")

# Employee shares of social insurance: (name, rate, contribution ceiling)
GERMANY_SOCIAL_INSURANCE: list[tuple[str, Decimal, Decimal]] = [
    ("pension_insurance", Decimal("0.093"), Decimal("90600")),
    ("unemployment_insurance", Decimal("0.012"), Decimal("90600")),
    ("health_insurance", Decimal("0.073"), Decimal("62100")),
    ("long_term_care_insurance", Decimal("0.0175"), Decimal("62100")),
]
GERMANY_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "health_insurance_premiums": Decimal("5000"),  # Vorsorgeaufwendungen
}

# ===========================================================================
# France (2024)
# ===========================================================================
# Bands apply to income per household share (quotient familial).
FRANCE_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("10777"), Decimal("0")),
        (Decimal("27478"), Decimal("0.11")),
        (Decimal("78570"), Decimal("0.30")),
        (Decimal("168994"), Decimal("0.41")),
        (None, Decimal("0.45")),
    ],
}
FRANCE_PROFESSIONAL_ABATEMENT = Decimal("0.10")
FRANCE_CSG_RATE = Decimal("0.092")
FRANCE_CRDS_RATE = Decimal("0.005")
FRANCE_SOCIAL_SECURITY_RATE = Decimal("0.15")
FRANCE_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "other_above_the_line": Decimal("10000"),
}

# ===========================================================================
# Brazil (2024, annualized monthly tables)
# ===========================================================================
BRAZIL_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("27110.40"), Decimal("0")),
        (Decimal("33919.80"), Decimal("0.075")),
        (Decimal("45012.60"), Decimal("0.15")),
        (Decimal("55976.16"), Decimal("0.225")),
        (None, Decimal("0.275")),
    ],
}
BRAZIL_INSS_TIERS: dict[int, Thresholds] = {
    2024: [
        (Decimal("16944"), Decimal("0.075")),
        (Decimal("32000.16"), Decimal("0.09")),
        (Decimal("48000.36"), Decimal("0.12")),
        (None, Decimal("0.14")),
    ],
}
BRAZIL_INSS_CEILING: dict[int, Decimal] = {2024: Decimal("90089.88")}
BRAZIL_DEPENDENT_DEDUCTION = Decimal("2275.08")

# ===========================================================================
# South Africa (2024/25)
# ===========================================================================
SOUTH_AFRICA_BRACKETS: dict[int, Thresholds] = {
    2024: [
        (Decimal("237100"), Decimal("0.18")),
        (Decimal("370500"), Decimal("0.26")),
        (Decimal("512800"), Decimal("0.31")),
        (Decimal("673000"), Decimal("0.36")),
        (Decimal("857900"), Decimal("0.39")),
        (Decimal("1817000"), Decimal("0.41")),
        (None, Decimal("0.45")),
    ],
}
SOUTH_AFRICA_PRIMARY_REBATE: dict[int, Decimal] = {2024: Decimal("17235")}
SOUTH_AFRICA_UIF_RATE = Decimal("0.01")
SOUTH_AFRICA_UIF_CEILING = Decimal("212544")
SOUTH_AFRICA_ABOVE_THE_LINE_CAPS: dict[str, Decimal] = {
    "retirement_contributions": Decimal("350000"),  # section 11F annual cap
}
