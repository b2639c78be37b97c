"""
Household budgeting: the 50/30/20 budget and emergency fund planning.
"""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

NEEDS_SHARE = 0.5
WANTS_SHARE = 0.3
SAVINGS_SHARE = 0.2

EMERGENCY_FUND_HORIZON_YEARS = 5
EMERGENCY_FUND_BUILD_MONTHS = 36

RiskLevel = Literal["low", "medium", "high"]


class BudgetLine(BaseModel):
    """One budget category, today and after inflation."""

    model_config = ConfigDict(frozen=True)

    monthly: float
    annual: float
    annual_future: float = Field(..., description="Annual amount after inflation")
    inflation_increase: float = Field(
        ..., description="Extra annual amount needed because of inflation"
    )


class BudgetPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_income: float
    annual_income: float
    annual_income_future: float
    years_ahead: int
    needs: BudgetLine
    wants: BudgetLine
    savings: BudgetLine
    savings_real_value: float = Field(
        ..., description="Today's annual savings expressed in future money's worth"
    )


class EmergencyFundPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_amount: float
    current_savings: float
    savings_gap: float
    months_to_goal: int
    recommended_monthly: float
    inflation_adjusted_target: float
    purchasing_power_loss_percent: float
    months_covered: float
    risk_level: RiskLevel


def _budget_line(monthly: float, growth: float) -> BudgetLine:
    annual = monthly * 12
    return BudgetLine(
        monthly=monthly,
        annual=annual,
        annual_future=annual * growth,
        inflation_increase=annual * (growth - 1),
    )


def budget_50_30_20(
    monthly_income: float, inflation_percent: float, years_ahead: int
) -> BudgetPlan:
    """
    Split take-home income into needs, wants and savings.

    Args:
        monthly_income: Monthly take-home income
        inflation_percent: Annual inflation (%)
        years_ahead: Years over which to project the budget

    Returns:
        BudgetPlan with today's and inflated amounts
    """
    growth = (1 + inflation_percent / 100) ** years_ahead
    savings = _budget_line(monthly_income * SAVINGS_SHARE, growth)

    return BudgetPlan(
        monthly_income=monthly_income,
        annual_income=monthly_income * 12,
        annual_income_future=monthly_income * 12 * growth,
        years_ahead=years_ahead,
        needs=_budget_line(monthly_income * NEEDS_SHARE, growth),
        wants=_budget_line(monthly_income * WANTS_SHARE, growth),
        savings=savings,
        savings_real_value=savings.annual / growth,
    )


def risk_level(months_covered: float) -> RiskLevel:
    if months_covered < 1:
        return "high"
    if months_covered < 3:
        return "medium"
    return "low"


def emergency_fund(
    monthly_expenses: float,
    months_of_coverage: float,
    current_savings: float,
    monthly_savings_capacity: float,
    inflation_percent: float,
) -> EmergencyFundPlan:
    """
    Size an emergency fund and the path to reach it.

    Args:
        monthly_expenses: Essential monthly expenses (> 0)
        months_of_coverage: Months of expenses to hold
        current_savings: Savings already set aside
        monthly_savings_capacity: Amount that can be saved each month
        inflation_percent: Annual inflation (%)

    Returns:
        EmergencyFundPlan
    """
    target = monthly_expenses * months_of_coverage
    inflation_adjusted_target = target * (
        1 + inflation_percent / 100
    ) ** EMERGENCY_FUND_HORIZON_YEARS
    gap = max(0.0, target - current_savings)

    months_to_goal = 0
    if gap > 0 and monthly_savings_capacity > 0:
        months_to_goal = math.ceil(gap / monthly_savings_capacity)

    recommended = math.ceil(gap / EMERGENCY_FUND_BUILD_MONTHS) if gap > 0 else 0
    months_covered = current_savings / monthly_expenses
    loss = (inflation_adjusted_target - target) / target * 100 if target > 0 else 0.0

    return EmergencyFundPlan(
        target_amount=target,
        current_savings=current_savings,
        savings_gap=gap,
        months_to_goal=months_to_goal,
        recommended_monthly=recommended,
        inflation_adjusted_target=inflation_adjusted_target,
        purchasing_power_loss_percent=loss,
        months_covered=months_covered,
        risk_level=risk_level(months_covered),
    )
