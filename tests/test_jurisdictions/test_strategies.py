"""Known-value tests for each jurisdiction strategy.

Expected amounts are computed by hand from the published tables.
"""

from decimal import Decimal

import pytest

from takehome.jurisdictions.france import household_parts
from takehome.models.enums import FilingStatus
from takehome.models.params import CreditInput, DeductionInput, JurisdictionOptions


CENT = Decimal("0.01")


def _amount(rows, name):
    return next(row.amount for row in rows if row.name == name)


def _table_tax(result, table):
    return sum((line.tax for line in result.brackets if line.table == table), Decimal("0"))


class TestUnitedStates:
    def test_single_100k(self, calculator, make_params):
        """Taxable 85,000: 1,192.50 + 4,386 + 8,035.50 = 13,614"""
        result = calculator.calculate_tax(make_params(100000, country="US", year=2025))
        assert result.taxable_income == Decimal("85000")
        assert result.bracket_tax == Decimal("13614")
        assert _amount(result.payroll_contributions, "social_security") == Decimal("6200")
        assert _amount(result.payroll_contributions, "medicare") == Decimal("1450")
        assert result.total_tax == Decimal("21264")
        assert result.take_home_pay == Decimal("78736")
        assert result.marginal_rate == Decimal("0.22")
        assert result.is_estimate is False

    def test_additional_medicare(self, calculator, make_params):
        """250,000 * 1.45% + 50,000 * 0.9% = 4,075"""
        result = calculator.calculate_tax(make_params(250000, country="US", year=2025))
        assert _amount(result.payroll_contributions, "medicare") == Decimal("4075")
        assert _amount(result.payroll_contributions, "social_security") == Decimal("10918.2")

    def test_additional_medicare_mfj_threshold(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(250000, country="US", year=2025, filing_status=FilingStatus.MFJ)
        )
        assert _amount(result.payroll_contributions, "medicare") == Decimal("3625")

    def test_mfj_with_children(self, calculator, make_params):
        """Taxable 90,000: 2,385 + 7,938 = 10,323; less 4,000 CTC; plus 9,180 FICA."""
        result = calculator.calculate_tax(
            make_params(
                120000, country="US", year=2025, filing_status=FilingStatus.MFJ, dependents=2
            )
        )
        assert result.bracket_tax == Decimal("10323")
        assert result.credits.total == Decimal("4000")
        assert result.payroll_total == Decimal("9180")
        assert result.total_tax == Decimal("15503")
        assert result.is_estimate is True

    def test_child_credit_phase_out(self, calculator, make_params):
        """2,000 - (230,000 - 200,000) * 5% = 500"""
        result = calculator.calculate_tax(
            make_params(230000, country="US", year=2025, dependents=1)
        )
        assert _amount(result.credits.itemized, "child_tax_credit") == Decimal("500")

    def test_itemized_deductions(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(
                100000,
                country="US",
                year=2025,
                deductions=DeductionInput(itemized_total=Decimal("25000")),
            )
        )
        assert result.deductions.itemized_used is True
        assert result.taxable_income == Decimal("75000")

    def test_401k_capped(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(
                100000,
                country="US",
                year=2025,
                deductions=DeductionInput(retirement_contributions=Decimal("30000")),
            )
        )
        assert result.taxable_income == Decimal("61500")
        assert any("capped at 23,500.00" in n for n in result.notes)

    def test_earned_income_credit_is_refundable(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(
                10000,
                country="US",
                year=2025,
                credits=CreditInput(earned_income_credit=Decimal("3000")),
            )
        )
        assert result.credits.refundable_total == Decimal("3000")
        assert result.total_tax == Decimal("-2235")

    def test_california(self, calculator, make_params):
        """CA taxable 94,460 on the single schedule: 5,437.63"""
        result = calculator.calculate_tax(make_params(100000, country="US", state="CA", year=2025))
        assert _table_tax(result, "federal") == Decimal("13614")
        assert _table_tax(result, "california") == Decimal("5437.63")
        assert result.total_tax == Decimal("26701.63")
        assert result.marginal_rate == Decimal("0.22")
        assert _amount(result.surtaxes, "ca_mental_health_services_tax") == Decimal("0")

    def test_california_mental_health_tax(self, calculator, make_params):
        """CA taxable 1,494,460: 1% of the 494,460 over 1M"""
        result = calculator.calculate_tax(
            make_params(1500000, country="US", state="CA", year=2025)
        )
        assert _amount(result.surtaxes, "ca_mental_health_services_tax") == Decimal("4944.6")

    def test_flat_rate_state(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(100000, country="US", state="NY", year=2025))
        assert _table_tax(result, "new_york") == Decimal("6850")
        assert result.is_estimate is True
        assert "New York income tax approximated with a flat 6.85% rate" in result.notes

    def test_no_income_tax_state(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(100000, country="US", state="TX", year=2025))
        assert result.total_tax == Decimal("21264")
        assert {line.table for line in result.brackets} == {"federal"}
        assert result.is_estimate is False

    def test_2024_tables(self, calculator, make_params):
        """Taxable 85,400: 1,160 + 4,266 + 8,415 = 13,841"""
        result = calculator.calculate_tax(make_params(100000, country="US", year=2024))
        assert result.bracket_tax == Decimal("13841")


class TestUnitedKingdom:
    def test_england_50k(self, calculator, make_params):
        """37,430 * 20% = 7,486; NI (50,000 - 12,570) * 8% = 2,994.40"""
        result = calculator.calculate_tax(make_params(50000, country="GB", year=2024))
        assert result.regime == "england"
        assert result.currency == "GBP"
        assert result.bracket_tax == Decimal("7486")
        assert _amount(result.payroll_contributions, "national_insurance") == Decimal("2994.4")
        assert result.total_tax == Decimal("10480.4")

    def test_allowance_taper(self, calculator, make_params):
        """Allowance 12,570 - 10,000 = 2,570; 37,700 * 20% + 79,730 * 40% = 39,432"""
        result = calculator.calculate_tax(make_params(120000, country="GB", year=2024))
        assert result.taxable_income == Decimal("117430")
        assert result.bracket_tax == Decimal("39432")

    def test_allowance_fully_withdrawn(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(130000, country="GB", year=2024))
        assert result.taxable_income == Decimal("130000")

    def test_scotland(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(50000, country="GB", year=2024, regime="scotland")
        )
        assert result.bracket_tax == Decimal("9028.31")

    def test_later_year_flagged(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(50000, country="UK", year=2025))
        assert result.data_year == 2024
        assert result.is_estimate is True

    def test_student_loan_plan2(self, calculator, make_params):
        """(50,000 - 27,295) * 9% = 2,043.45 on top of NI"""
        result = calculator.calculate_tax(
            make_params(
                50000,
                country="GB",
                year=2024,
                options=JurisdictionOptions(student_loan_plan="plan2"),
            )
        )
        assert _amount(result.payroll_contributions, "student_loan") == Decimal("2043.45")
        assert result.total_tax == Decimal("12523.85")

    def test_student_loan_below_threshold(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(
                20000,
                country="GB",
                year=2024,
                options=JurisdictionOptions(student_loan_plan="Plan 1"),
            )
        )
        assert _amount(result.payroll_contributions, "student_loan") == Decimal("0")

    def test_no_plan_no_repayment(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(50000, country="GB", year=2024))
        assert [c.name for c in result.payroll_contributions] == ["national_insurance"]


class TestIndia:
    def test_rebate_covers_tax_up_to_limit(self, calculator, make_params):
        """Taxable exactly 12 lakh: tax 60,000, rebate 60,000"""
        result = calculator.calculate_tax(make_params(1275000, country="IN", year=2025))
        assert result.regime == "new"
        assert result.taxable_income == Decimal("1200000")
        assert result.total_tax == Decimal("0")

    def test_rebate_marginal_relief(self, calculator, make_params):
        """Tax 63,750 on 12.25 lakh; relief leaves tax plus cess at the 25,000 excess."""
        result = calculator.calculate_tax(make_params(1300000, country="IN", year=2025))
        assert result.bracket_tax == Decimal("63750")
        rebate = _amount(result.credits.itemized, "rebate_87a")
        cess = _amount(result.surtaxes, "health_and_education_cess")
        assert rebate.quantize(CENT) == Decimal("39711.54")
        assert cess.quantize(CENT) == Decimal("961.54")
        assert result.total_tax.quantize(CENT) == Decimal("25000.00")

    def test_surcharge_and_cess(self, calculator, make_params):
        """Taxable 60 lakh: tax 13.8 lakh, 10% surcharge, 4% cess on both"""
        result = calculator.calculate_tax(make_params(6075000, country="IN", year=2025))
        assert result.bracket_tax == Decimal("1380000")
        assert _amount(result.surtaxes, "surcharge") == Decimal("138000")
        assert _amount(result.surtaxes, "health_and_education_cess") == Decimal("60720")
        assert result.total_tax == Decimal("1578720")
        assert result.is_estimate is False

    def test_surcharge_marginal_relief(self, calculator, make_params):
        """Taxable 51 lakh: tax 11.1 lakh. At 50 lakh tax plus cess is 11,23,200, so
        the 1 lakh above may add at most 1 lakh: surcharge 66,153.85, not 1,11,000.
        """
        result = calculator.calculate_tax(make_params(5175000, country="IN", year=2025))
        assert result.taxable_income == Decimal("5100000")
        assert result.bracket_tax == Decimal("1110000")
        assert _amount(result.surtaxes, "surcharge").quantize(CENT) == Decimal("66153.85")
        assert result.total_tax.quantize(CENT) == Decimal("1223200.00")

    def test_surcharge_relief_at_higher_step(self, calculator, make_params):
        """Taxable 1.01 crore: tax and surcharge stop at 28,38,000 plus the excess net of cess."""
        result = calculator.calculate_tax(make_params(10175000, country="IN", year=2025))
        assert result.bracket_tax == Decimal("2610000")
        surcharge = _amount(result.surtaxes, "surcharge")
        assert surcharge < Decimal("2610000") * Decimal("0.15")
        assert (result.bracket_tax + surcharge).quantize(CENT) == Decimal("2934153.85")

    def test_old_regime_with_capped_deductions(self, calculator, make_params):
        """50,000 standard + 1.5 lakh 80C + 50,000 80D; taxable 7.5 lakh"""
        result = calculator.calculate_tax(
            make_params(
                1000000,
                country="IN",
                year=2025,
                regime="old",
                deductions=DeductionInput(
                    retirement_contributions=Decimal("200000"),
                    health_insurance_premiums=Decimal("60000"),
                ),
            )
        )
        assert result.taxable_income == Decimal("750000")
        assert result.bracket_tax == Decimal("62500")
        assert result.total_tax == Decimal("65000")
        assert len([n for n in result.notes if "capped" in n]) == 2

    def test_new_regime_ignores_chapter_via(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(
                1500000,
                country="IN",
                year=2025,
                deductions=DeductionInput(retirement_contributions=Decimal("150000")),
            )
        )
        assert result.taxable_income == Decimal("1425000")
        assert any("not deductible" in n for n in result.notes)

    def test_old_regime_rebate_marginal_relief(self, calculator, make_params):
        """Taxable 5,00,001: tax 12,500.20, but tax plus cess may not exceed the excess."""
        at_limit = calculator.calculate_tax(
            make_params(550000, country="IN", year=2025, regime="old")
        )
        above = calculator.calculate_tax(
            make_params(550001, country="IN", year=2025, regime="old")
        )
        assert at_limit.total_tax == Decimal("0")
        assert above.bracket_tax == Decimal("12500.20")
        assert above.total_tax.quantize(CENT) == Decimal("1.00")
        assert above.take_home_pay.quantize(CENT) == Decimal("550000.00")

    def test_old_regime_relief_runs_out(self, calculator, make_params):
        """Taxable 5,50,000: tax 22,500 is below the 50,000 excess, so no rebate."""
        result = calculator.calculate_tax(
            make_params(600000, country="IN", year=2025, regime="old")
        )
        assert result.bracket_tax == Decimal("22500")
        assert result.credits.total == Decimal("0")
        assert result.total_tax == Decimal("23400")


class TestCanada:
    def test_federal_only(self, calculator, make_params):
        """Taxable 65,000: 8,380.05 + 1,872.265; CPP 3,754.45; EI 1,002.45"""
        result = calculator.calculate_tax(make_params(80000, country="CA", year=2024))
        assert result.bracket_tax == Decimal("10252.315")
        assert _amount(result.payroll_contributions, "cpp") == Decimal("3754.45")
        assert _amount(result.payroll_contributions, "ei") == Decimal("1002.45")
        assert result.total_tax == Decimal("15009.215")
        assert result.is_estimate is True

    def test_ontario(self, calculator, make_params):
        """Ontario taxable 67,601: 2,598.023 + 1,478.1825"""
        result = calculator.calculate_tax(make_params(80000, country="CA", state="ON", year=2024))
        assert _table_tax(result, "ontario") == Decimal("4076.2055")

    def test_flat_rate_province(self, calculator, make_params):
        """(80,000 - 15,000) * 5.06% = 3,289"""
        result = calculator.calculate_tax(make_params(80000, country="CA", state="BC", year=2024))
        assert _table_tax(result, "british_columbia") == Decimal("3289")


class TestAustralia:
    def test_100k(self, calculator, make_params):
        """26,800 * 19% + 55,000 * 32.5% = 22,967; levy 2,000"""
        result = calculator.calculate_tax(make_params(100000, country="AU", year=2024))
        assert result.bracket_tax == Decimal("22967")
        assert _amount(result.surtaxes, "medicare_levy") == Decimal("2000")
        assert result.total_tax == Decimal("24967")

    def test_levy_surcharge_without_private_cover(self, calculator, make_params):
        """(100,000 - 90,000) * 1% = 100"""
        result = calculator.calculate_tax(
            make_params(
                100000,
                country="AU",
                year=2024,
                options=JurisdictionOptions(has_private_health=False),
            )
        )
        assert _amount(result.surtaxes, "medicare_levy_surcharge") == Decimal("100")
        assert result.total_tax == Decimal("25067")

    def test_levy_surcharge_top_tier(self, calculator, make_params):
        """15,000 * 1% + 35,000 * 1.25% + 10,000 * 1.5% = 737.50"""
        result = calculator.calculate_tax(
            make_params(
                150000,
                country="AU",
                year=2024,
                options=JurisdictionOptions(has_private_health=False),
            )
        )
        assert _amount(result.surtaxes, "medicare_levy_surcharge") == Decimal("737.5")

    def test_private_cover_avoids_surcharge(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(150000, country="AU", year=2024))
        assert [s.name for s in result.surtaxes] == ["medicare_levy"]


class TestGermany:
    def test_60k(self, calculator, make_params):
        """5,091 * 14% + 44,001 * 23.942% = 11,247.45942"""
        result = calculator.calculate_tax(make_params(60000, country="DE", year=2024))
        assert result.bracket_tax == Decimal("11247.45942")
        assert _amount(result.surtaxes, "solidarity_surcharge") == Decimal("618.6102681")
        assert result.payroll_total == Decimal("11730")
        assert result.is_estimate is True

    def test_social_insurance_ceilings(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(200000, country="DE", year=2024))
        assert _amount(result.payroll_contributions, "pension_insurance") == Decimal("8425.8")
        assert _amount(result.payroll_contributions, "health_insurance") == Decimal("4533.3")

    def test_church_tax(self, calculator, make_params):
        """9% of 11,247.45942 income tax"""
        result = calculator.calculate_tax(
            make_params(
                60000,
                country="DE",
                year=2024,
                options=JurisdictionOptions(is_church_member=True),
            )
        )
        assert _amount(result.surtaxes, "church_tax") == Decimal("1012.2713478")

    def test_church_tax_state_rate(self, calculator, make_params):
        """Bavaria: 8% of 11,247.45942"""
        options = JurisdictionOptions(is_church_member=True, church_tax_rate=Decimal("0.08"))
        result = calculator.calculate_tax(
            make_params(60000, country="DE", year=2024, options=options)
        )
        assert _amount(result.surtaxes, "church_tax") == Decimal("899.7967536")

    def test_no_church_tax_by_default(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(60000, country="DE", year=2024))
        assert "church_tax" not in [s.name for s in result.surtaxes]


class TestFrance:
    def test_household_parts(self):
        assert household_parts(FilingStatus.SINGLE, 0) == Decimal("1")
        assert household_parts(FilingStatus.MFJ, 2) == Decimal("3")
        assert household_parts(FilingStatus.MFJ, 3) == Decimal("4")

    def test_single_50k(self, calculator, make_params):
        """Taxable 45,000 after the 10% abatement: 1,837.11 + 5,256.60"""
        result = calculator.calculate_tax(make_params(50000, country="FR", year=2024))
        assert result.taxable_income == Decimal("45000")
        assert result.bracket_tax == Decimal("7093.71")
        assert _amount(result.surtaxes, "csg") == Decimal("4600")
        assert _amount(result.surtaxes, "crds") == Decimal("250")
        assert _amount(result.payroll_contributions, "social_security") == Decimal("7500")

    def test_family_quotient(self, calculator, make_params):
        """Three parts of 30,000: (1,837.11 + 756.60) * 3 = 7,781.13"""
        result = calculator.calculate_tax(
            make_params(
                100000, country="FR", year=2024, filing_status=FilingStatus.MFJ, dependents=2
            )
        )
        assert result.bracket_tax == Decimal("7781.13")
        assert result.marginal_rate == Decimal("0.30")


class TestBrazil:
    def test_60k(self, calculator, make_params):
        """INSS 6,225.828 comes off the IRPF base before the brackets."""
        result = calculator.calculate_tax(make_params(60000, country="BR", year=2024))
        assert _amount(result.payroll_contributions, "inss") == Decimal("6225.828")
        assert result.taxable_income == Decimal("53774.172")
        assert result.bracket_tax == Decimal("4145.9787")

    def test_inss_ceiling(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(100000, country="BR", year=2024))
        assert _amount(result.payroll_contributions, "inss") == Decimal("10438.4112")

    def test_dependents_reduce_base(self, calculator, make_params):
        result = calculator.calculate_tax(
            make_params(60000, country="BR", year=2024, dependents=2)
        )
        assert result.taxable_income == Decimal("49224.012")


class TestSouthAfrica:
    def test_300k(self, calculator, make_params):
        """59,032 less the 17,235 primary rebate, plus capped UIF 2,125.44"""
        result = calculator.calculate_tax(make_params(300000, country="ZA", year=2024))
        assert result.bracket_tax == Decimal("59032")
        assert _amount(result.credits.itemized, "primary_rebate") == Decimal("17235")
        assert _amount(result.payroll_contributions, "uif") == Decimal("2125.44")
        assert result.total_tax == Decimal("43922.44")

    def test_rebate_limited_to_tax(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(90000, country="ZA", year=2024))
        assert result.credits.total == Decimal("16200")
        assert result.total_tax == Decimal("900")


class TestGeneric:
    def test_flat_rate(self, calculator, make_params):
        result = calculator.calculate_tax(make_params(100000, country="XY", year=2025))
        assert result.regime == "generic"
        assert result.bracket_tax == Decimal("25000")
        assert result.data_year == 0

    @pytest.mark.parametrize("regime", [None, "anything"])
    def test_regime_ignored(self, calculator, make_params, regime):
        result = calculator.calculate_tax(
            make_params(100000, country="XY", year=2025, regime=regime)
        )
        assert result.regime == "generic"
