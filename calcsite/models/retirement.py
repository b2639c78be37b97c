"""
Retirement savings projection.

Current savings compound annually at the expected return while monthly
contributions and the employer match compound monthly. The total at
retirement is turned into income with the 4% withdrawal rule and compared
with the desired share of today's salary, both in today's money.
"""

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .generations import HEALTHCARE_INFLATION_MULTIPLIER
from .projection import (
    ProjectionPoint,
    annuity_factor,
    future_value,
    future_value_of_series,
    present_value,
    project,
)

Generation = Literal["baby_boomers", "gen_x", "millennials", "gen_z"]
Gender = Literal["male", "female"]

SAFE_WITHDRAWAL_RATE = 0.04
LIFESTYLE_REPLACEMENT_RATIO = 0.8
HEALTHCARE_INCOME_SHARE = 0.15


class GenerationBenchmark(BaseModel):
    """Typical retirement figures for one generation."""

    model_config = ConfigDict(frozen=True)

    birth_years: str
    average_contribution_percent: float
    median_savings: float
    retirement_age: int
    social_security_benefit: float = Field(..., description="Monthly benefit")


GENERATION_BENCHMARKS: Dict[str, GenerationBenchmark] = {
    "baby_boomers": GenerationBenchmark(
        birth_years="1946-1964",
        average_contribution_percent=12.5,
        median_savings=152000,
        retirement_age=62,
        social_security_benefit=1800,
    ),
    "gen_x": GenerationBenchmark(
        birth_years="1965-1980",
        average_contribution_percent=10.8,
        median_savings=89000,
        retirement_age=65,
        social_security_benefit=1650,
    ),
    "millennials": GenerationBenchmark(
        birth_years="1981-1996",
        average_contribution_percent=8.4,
        median_savings=23000,
        retirement_age=67,
        social_security_benefit=1400,
    ),
    "gen_z": GenerationBenchmark(
        birth_years="1997-2012",
        average_contribution_percent=6.2,
        median_savings=11000,
        retirement_age=70,
        social_security_benefit=1200,
    ),
}

LIFE_EXPECTANCY: Dict[str, float] = {"male": 76.1, "female": 81.1}


class RetirementInput(BaseModel):
    """Retirement plan parameters; rates and shares are percentages."""

    model_config = ConfigDict(frozen=True)

    current_age: int = Field(default=30, ge=0, le=120)
    retirement_age: int = Field(default=65, ge=0, le=120)
    current_salary: float = Field(default=75000, ge=0)
    current_savings: float = Field(default=25000, ge=0)
    monthly_contribution: float = Field(default=500, ge=0)
    employer_match_percent: float = Field(default=3, ge=0, le=100)
    expected_return_percent: float = Field(default=7)
    inflation_percent: float = Field(default=3)
    retirement_duration_years: int = Field(default=25, ge=0)
    desired_income_percent: float = Field(
        default=80, ge=0, description="Desired retirement income as a share of salary"
    )
    gender: Gender = "male"
    generation: Optional[Generation] = Field(
        default=None, description="Derived from current age when omitted"
    )

    @model_validator(mode="after")
    def check_ages(self) -> "RetirementInput":
        if self.retirement_age < self.current_age:
            raise ValueError("Retirement age cannot be below current age")
        return self


class RetirementProjection(BaseModel):
    """Savings at retirement and the income gap they leave."""

    model_config = ConfigDict(frozen=True)

    years_to_retirement: int
    future_current_savings: float
    future_contributions: float
    future_employer_match: float
    future_value: float = Field(..., description="Total savings at retirement")
    monthly_retirement_income: float = Field(
        ..., description="4% rule income at retirement, nominal"
    )
    inflation_adjusted_income: float = Field(
        ..., description="Monthly retirement income in today's money"
    )
    desired_monthly_income: float
    annual_shortfall: float = Field(..., ge=0)
    required_savings: float = Field(
        ..., description="Nominal savings needed at retirement for the desired income"
    )
    recommended_contribution: float = Field(
        ..., ge=0, description="Monthly contribution that reaches the required savings"
    )
    lifestyle_maintenance_needed: float
    healthcare_costs: float = Field(..., description="Monthly healthcare cost estimate")
    generation: Generation
    generation_benchmark: GenerationBenchmark
    life_expectancy: float


def generation_from_age(age: int, current_year: Optional[int] = None) -> Generation:
    """Generation of someone of ``age`` in ``current_year`` (this year by default)."""
    birth_year = (current_year or date.today().year) - age
    if birth_year >= 1997:
        return "gen_z"
    if birth_year >= 1981:
        return "millennials"
    if birth_year >= 1965:
        return "gen_x"
    return "baby_boomers"


def project_retirement(
    plan: RetirementInput,
    healthcare_inflation_multiplier: float = HEALTHCARE_INFLATION_MULTIPLIER,
    current_year: Optional[int] = None,
) -> RetirementProjection:
    """
    Project retirement savings and compare the resulting income with the goal.

    Args:
        plan: Retirement plan parameters
        healthcare_inflation_multiplier: How much faster healthcare costs grow
            than general prices
        current_year: Year used to derive the generation when the plan has none

    Returns:
        RetirementProjection with totals, income, shortfall and recommendation
    """
    years = plan.retirement_age - plan.current_age
    months = years * 12
    monthly_rate = plan.expected_return_percent / 100 / 12

    future_savings = future_value(
        plan.current_savings, plan.expected_return_percent, years
    )
    future_contributions = future_value_of_series(
        plan.monthly_contribution, monthly_rate, months
    )
    monthly_match = plan.current_salary * plan.employer_match_percent / 100 / 12
    future_match = future_value_of_series(monthly_match, monthly_rate, months)
    total = future_savings + future_contributions + future_match

    monthly_income = total * SAFE_WITHDRAWAL_RATE / 12
    real_income = present_value(monthly_income, plan.inflation_percent, years)
    desired_monthly = plan.current_salary * plan.desired_income_percent / 100 / 12
    shortfall = max(0.0, desired_monthly - real_income)

    required = future_value(
        desired_monthly * 12 / SAFE_WITHDRAWAL_RATE, plan.inflation_percent, years
    )
    additional_needed = max(0.0, required - future_savings - future_match)
    factor = annuity_factor(monthly_rate, months)
    recommended = additional_needed / factor if factor > 0 else 0.0

    generation = plan.generation or generation_from_age(plan.current_age, current_year)

    return RetirementProjection(
        years_to_retirement=years,
        future_current_savings=future_savings,
        future_contributions=future_contributions,
        future_employer_match=future_match,
        future_value=total,
        monthly_retirement_income=monthly_income,
        inflation_adjusted_income=real_income,
        desired_monthly_income=desired_monthly,
        annual_shortfall=shortfall * 12,
        required_savings=required,
        recommended_contribution=recommended,
        lifestyle_maintenance_needed=plan.current_salary
        * LIFESTYLE_REPLACEMENT_RATIO
        / 12,
        healthcare_costs=plan.current_salary
        * HEALTHCARE_INCOME_SHARE
        * healthcare_inflation_multiplier
        / 12,
        generation=generation,
        generation_benchmark=GENERATION_BENCHMARKS[generation],
        life_expectancy=LIFE_EXPECTANCY[plan.gender],
    )


def savings_trajectory(plan: RetirementInput) -> List[ProjectionPoint]:
    """Yearly growth of current savings to retirement, with real values."""
    return project(
        plan.current_savings,
        plan.expected_return_percent,
        plan.retirement_age - plan.current_age,
        deflator_rate_percent=plan.inflation_percent,
    )
