"""Tests for calculator request models."""

import pytest
from pydantic import ValidationError

from calcsite.blueprints.forms import (
    AutoLoanForm,
    DeflationForm,
    InsuranceForm,
    ProjectionForm,
    RetirementForm,
    ScenarioForm,
    StudentLoanForm,
)


class TestBlankNumbers:
    """Blank or non-numeric number fields are read as zero."""

    @pytest.mark.parametrize("blank", ["", "  ", None, "nan", "abc", float("nan")])
    def test_blank_values_coerce_to_zero(self, blank):
        form = AutoLoanForm.model_validate(
            {
                "principal": 20000,
                "down_payment": blank,
                "annual_rate_percent": 5,
                "term_months": 48,
            }
        )

        assert form.down_payment == 0

    def test_range_checked_after_coercion(self):
        """A blank term becomes zero and then fails the positive-term check."""
        with pytest.raises(ValidationError):
            AutoLoanForm.model_validate(
                {"principal": 20000, "annual_rate_percent": 5, "term_months": ""}
            )

    def test_optional_numbers_stay_unset(self):
        form = StudentLoanForm.model_validate({"principal": 10000})

        assert form.annual_rate_percent is None
        assert form.award_year is None

    def test_numeric_strings_parsed(self):
        form = ProjectionForm.model_validate(
            {"base_value": "1500.5", "annual_rate_percent": "4", "periods": "12"}
        )

        assert form.base_value == 1500.5
        assert form.periods == 12


class TestFormConversion:
    def test_projection_to_input(self):
        form = ProjectionForm.model_validate(
            {"base_value": 100, "annual_rate_percent": 3, "periods": 5}
        )

        projection = form.to_input()

        assert projection.base_value == 100
        assert projection.compounding_unit == "year"
        assert projection.deflator_rate_percent is None

    def test_insurance_profile(self):
        form = InsuranceForm.model_validate(
            {"premium": 300, "age_multiplier": 1.2, "smoker": True}
        )

        profile = form.to_profile()

        assert profile.age_multiplier == 1.2
        assert profile.smoker is True

    def test_scenario_deltas_limits(self):
        base = {"base_value": 100, "annual_rate_percent": 3, "periods": 5}

        with pytest.raises(ValidationError):
            ScenarioForm.model_validate({"base": base, "deltas": []})

        form = ScenarioForm.model_validate({"base": base, "deltas": {"low": -1}})
        assert form.deltas == {"low": -1.0}


class TestProjectionLimits:
    """Projections that leave float range are rejected before they run."""

    def test_overflowing_projection_rejected(self):
        with pytest.raises(ValidationError, match="representable range"):
            ProjectionForm.model_validate(
                {"base_value": 1000, "annual_rate_percent": 1000, "periods": 1200}
            )

    def test_large_but_finite_projection_accepted(self):
        form = ProjectionForm.model_validate(
            {"base_value": 1000, "annual_rate_percent": 1000, "periods": 100}
        )

        assert form.periods == 100

    def test_scenario_offset_below_total_loss_rejected(self):
        """A -100% base with the default -2 offset would flip the series negative."""
        base = {"base_value": 1000, "annual_rate_percent": -100, "periods": 10}

        with pytest.raises(ValidationError, match="below -100%"):
            ScenarioForm.model_validate({"base": base})

    def test_scenario_offset_reaching_total_loss_accepted(self):
        base = {"base_value": 1000, "annual_rate_percent": -98, "periods": 10}

        form = ScenarioForm.model_validate({"base": base})

        assert form.deltas is None

    def test_overflowing_scenario_offset_rejected(self):
        base = {"base_value": 1000, "annual_rate_percent": 5, "periods": 1200}

        with pytest.raises(ValidationError, match="representable range"):
            ScenarioForm.model_validate({"base": base, "deltas": {"boom": 500}})


class TestRetirementForm:
    def test_defaults(self):
        plan = RetirementForm.model_validate({}).to_input()

        assert plan.current_age == 30
        assert plan.retirement_age == 65
        assert plan.desired_income_percent == 80
        assert plan.generation is None

    def test_retirement_before_current_age_rejected(self):
        with pytest.raises(ValidationError, match="Retirement age"):
            RetirementForm.model_validate({"current_age": 50, "retirement_age": 40})

    def test_unknown_generation_rejected(self):
        with pytest.raises(ValidationError):
            RetirementForm.model_validate({"generation": "greatest"})


class TestDeflationForm:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="End year"):
            DeflationForm.model_validate(
                {"amount": 100, "start_year": 2020, "end_year": 2015}
            )

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            DeflationForm.model_validate(
                {"amount": 0, "start_year": 2015, "end_year": 2020}
            )
