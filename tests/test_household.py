"""Tests for household budgeting calculators."""

import pytest

from calcsite.models.household import budget_50_30_20, emergency_fund, risk_level


class TestBudget:
    """Test cases for budget_50_30_20()."""

    def test_split(self):
        plan = budget_50_30_20(5000, 0, 10)

        assert plan.needs.monthly == pytest.approx(2500)
        assert plan.wants.monthly == pytest.approx(1500)
        assert plan.savings.monthly == pytest.approx(1000)
        assert plan.annual_income == 60000

    def test_inflated_budget(self):
        plan = budget_50_30_20(5000, 3, 10)
        growth = 1.03**10

        assert plan.annual_income_future == pytest.approx(60000 * growth)
        assert plan.needs.annual_future == pytest.approx(30000 * growth)
        assert plan.needs.inflation_increase == pytest.approx(30000 * (growth - 1))
        assert plan.savings_real_value == pytest.approx(12000 / growth)


class TestEmergencyFund:
    """Test cases for emergency_fund()."""

    def test_gap_and_timeline(self):
        plan = emergency_fund(3000, 6, 4000, 500, 3)

        assert plan.target_amount == 18000
        assert plan.savings_gap == 14000
        assert plan.months_to_goal == 28
        assert plan.recommended_monthly == 389
        assert plan.inflation_adjusted_target == pytest.approx(18000 * 1.03**5)
        assert plan.purchasing_power_loss_percent == pytest.approx((1.03**5 - 1) * 100)
        assert plan.months_covered == pytest.approx(4000 / 3000)
        assert plan.risk_level == "medium"

    def test_already_funded(self):
        plan = emergency_fund(2000, 3, 10000, 0, 3)

        assert plan.savings_gap == 0
        assert plan.months_to_goal == 0
        assert plan.recommended_monthly == 0
        assert plan.risk_level == "low"

    def test_no_savings_capacity(self):
        plan = emergency_fund(2000, 6, 0, 0, 3)

        assert plan.months_to_goal == 0
        assert plan.risk_level == "high"


class TestRiskLevel:
    def test_thresholds(self):
        assert risk_level(0.5) == "high"
        assert risk_level(1) == "medium"
        assert risk_level(2.9) == "medium"
        assert risk_level(3) == "low"
