"""Tests for what-if scenario comparison."""

from decimal import Decimal

import pytest

from takehome.engines.orchestrator import apply_overrides
from takehome.exceptions import DataValidationError
from takehome.models.enums import FilingStatus
from takehome.models.results import ScenarioVariant


@pytest.fixture
def base(make_params):
    return make_params(100000, country="US", year=2025)


class TestApplyOverrides:
    def test_dotted_key(self, base):
        params = apply_overrides(base, {"deductions.retirement_contributions": "23500"})
        assert params.deductions.retirement_contributions == Decimal("23500")
        assert base.deductions.retirement_contributions == Decimal("0")

    def test_nested_dict_is_merged(self, base):
        params = apply_overrides(base, {"jurisdiction": {"state_code": "CA"}})
        assert params.jurisdiction.country_code == "US"
        assert params.jurisdiction.state_code == "CA"

    def test_top_level_value_coerced(self, base):
        params = apply_overrides(base, {"filing_status": "MARRIED_FILING_JOINTLY"})
        assert params.filing_status == FilingStatus.MFJ

    @pytest.mark.parametrize("status", ["MFJ", "mfj", " Mfj "])
    def test_filing_status_short_form(self, base, status):
        params = apply_overrides(base, {"filing_status": status})
        assert params.filing_status == FilingStatus.MFJ

    def test_options_override(self, base):
        params = apply_overrides(base, {"options.student_loan_plan": "plan2"})
        assert params.options.student_loan_plan == "plan2"
        assert base.options.student_loan_plan is None

    def test_unknown_field(self, base):
        with pytest.raises(DataValidationError) as exc_info:
            apply_overrides(base, {"salary": "1"})
        assert exc_info.value.field == "salary"

    def test_invalid_value(self, base):
        with pytest.raises(DataValidationError) as exc_info:
            apply_overrides(base, {"filing_status": "WIDOWED"})
        assert exc_info.value.field == "filing_status"

    def test_subfield_of_scalar(self, base):
        with pytest.raises(DataValidationError):
            apply_overrides(base, {"year.month": 3})


class TestCompareScenarios:
    def test_retirement_contribution_lowers_tax(self, calculator, base):
        """23,500 off taxable income at 22% saves 5,170."""
        comparison = calculator.compare_scenarios(
            base,
            [ScenarioVariant(name="max401k", overrides={"deductions.retirement_contributions": "23500"})],
        )
        outcome = comparison.variants[0]
        assert comparison.base.total_tax == Decimal("21264")
        assert outcome.result.total_tax == Decimal("16094")
        assert outcome.delta.total_tax == Decimal("-5170")
        assert outcome.delta.take_home_pay == Decimal("5170")

    def test_best_variant(self, calculator, base):
        comparison = calculator.compare_scenarios(
            base,
            [
                ScenarioVariant(name="max401k", overrides={"deductions.retirement_contributions": "23500"}),
                ScenarioVariant(name="raise", overrides={"gross_income": "110000"}),
            ],
        )
        assert [v.name for v in comparison.variants] == ["max401k", "raise"]
        # 10,000 more at 22% federal plus 7.65% FICA: take-home +7,035
        assert comparison.variants[1].delta.take_home_pay == Decimal("7035")
        assert comparison.best().name == "raise"

    def test_no_variant_improves(self, calculator, base):
        comparison = calculator.compare_scenarios(
            base, [ScenarioVariant(name="move", overrides={"jurisdiction.state_code": "CA"})]
        )
        assert comparison.variants[0].delta.take_home_pay == Decimal("-5437.63")
        assert comparison.best() is None

    def test_no_variants(self, calculator, base):
        comparison = calculator.compare_scenarios(base, [])
        assert comparison.variants == []
        assert comparison.best() is None

    def test_variant_error_propagates(self, calculator, base):
        with pytest.raises(DataValidationError):
            calculator.compare_scenarios(
                base, [ScenarioVariant(name="bad", overrides={"gross_income": "-1"})]
            )

    def test_base_not_mutated(self, calculator, base):
        before = base.model_dump()
        calculator.compare_scenarios(
            base, [ScenarioVariant(name="mfj", overrides={"filing_status": "MARRIED_FILING_JOINTLY"})]
        )
        assert base.model_dump() == before
