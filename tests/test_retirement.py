"""Tests for the retirement savings projection."""

import pytest
from pydantic import ValidationError

from calcsite.models.retirement import (
    GENERATION_BENCHMARKS,
    LIFE_EXPECTANCY,
    RetirementInput,
    generation_from_age,
    project_retirement,
    savings_trajectory,
)


@pytest.fixture
def plan():
    return RetirementInput()


class TestProjectRetirement:
    """Test cases for project_retirement()."""

    def test_default_plan_totals(self, plan):
        """35 years of 7% on savings plus monthly contributions and match."""
        result = project_retirement(plan, current_year=2025)
        rate = 0.07 / 12
        factor = ((1 + rate) ** 420 - 1) / rate

        assert result.years_to_retirement == 35
        assert result.future_current_savings == pytest.approx(25000 * 1.07**35)
        assert result.future_contributions == pytest.approx(500 * factor)
        assert result.future_employer_match == pytest.approx(75000 * 0.03 / 12 * factor)
        assert result.future_value == pytest.approx(
            result.future_current_savings
            + result.future_contributions
            + result.future_employer_match
        )

    def test_income_uses_four_percent_rule(self, plan):
        result = project_retirement(plan, current_year=2025)

        assert result.monthly_retirement_income == pytest.approx(
            result.future_value * 0.04 / 12
        )
        assert result.inflation_adjusted_income == pytest.approx(
            result.monthly_retirement_income / 1.03**35
        )

    def test_shortfall_is_annual(self, plan):
        result = project_retirement(plan, current_year=2025)
        desired = 75000 * 0.8 / 12

        assert result.desired_monthly_income == pytest.approx(desired)
        assert result.annual_shortfall == pytest.approx(
            max(0.0, desired - result.inflation_adjusted_income) * 12
        )

    def test_required_savings_and_recommendation(self, plan):
        result = project_retirement(plan, current_year=2025)
        rate = 0.07 / 12
        factor = ((1 + rate) ** 420 - 1) / rate
        required = 75000 * 0.8 / 0.04 * 1.03**35

        assert result.required_savings == pytest.approx(required)
        assert result.recommended_contribution == pytest.approx(
            max(
                0.0,
                required - result.future_current_savings - result.future_employer_match,
            )
            / factor
        )

    def test_recommendation_reaches_required_savings(self, plan):
        """Contributing the recommended amount closes the gap exactly."""
        result = project_retirement(plan, current_year=2025)
        funded = RetirementInput(monthly_contribution=result.recommended_contribution)

        assert project_retirement(funded).future_value == pytest.approx(
            result.required_savings
        )

    def test_lifestyle_and_healthcare(self, plan):
        result = project_retirement(
            plan, healthcare_inflation_multiplier=2.0, current_year=2025
        )

        assert result.lifestyle_maintenance_needed == pytest.approx(75000 * 0.8 / 12)
        assert result.healthcare_costs == pytest.approx(75000 * 0.15 * 2.0 / 12)

    def test_retiring_now(self):
        """No years left: savings stay as they are and nothing more is recommended."""
        plan = RetirementInput(current_age=65, retirement_age=65)

        result = project_retirement(plan)

        assert result.future_value == pytest.approx(25000)
        assert result.future_contributions == 0
        assert result.recommended_contribution == 0

    def test_zero_return_sums_contributions(self):
        plan = RetirementInput(
            expected_return_percent=0, employer_match_percent=0, current_savings=0
        )

        result = project_retirement(plan)

        assert result.future_value == pytest.approx(500 * 420)
        assert result.recommended_contribution == pytest.approx(
            result.required_savings / 420
        )

    def test_no_shortfall_when_well_funded(self):
        plan = RetirementInput(current_savings=5_000_000)

        result = project_retirement(plan)

        assert result.annual_shortfall == 0
        assert result.recommended_contribution == 0

    def test_generation_benchmark_and_life_expectancy(self):
        plan = RetirementInput(current_age=30, gender="female")

        result = project_retirement(plan, current_year=2025)

        assert result.generation == "millennials"
        assert result.generation_benchmark == GENERATION_BENCHMARKS["millennials"]
        assert result.life_expectancy == LIFE_EXPECTANCY["female"]

    def test_explicit_generation_wins(self):
        plan = RetirementInput(current_age=30, generation="gen_x")

        assert project_retirement(plan, current_year=2025).generation == "gen_x"


class TestRetirementInput:
    def test_retirement_before_current_age(self):
        with pytest.raises(ValidationError):
            RetirementInput(current_age=60, retirement_age=55)


class TestGenerationFromAge:
    """Test cases for generation_from_age()."""

    @pytest.mark.parametrize(
        "age,expected",
        [
            (28, "gen_z"),
            (44, "millennials"),
            (45, "gen_x"),
            (60, "gen_x"),
            (61, "baby_boomers"),
        ],
    )
    def test_birth_year_boundaries(self, age, expected):
        assert generation_from_age(age, current_year=2025) == expected

    def test_defaults_to_this_year(self):
        assert generation_from_age(0) == "gen_z"


class TestSavingsTrajectory:
    def test_one_point_per_year_with_real_values(self, plan):
        points = savings_trajectory(plan)

        assert len(points) == 36
        assert points[-1].nominal_value == pytest.approx(25000 * 1.07**35)
        assert points[-1].real_value == pytest.approx(25000 * (1.07 / 1.03) ** 35)
