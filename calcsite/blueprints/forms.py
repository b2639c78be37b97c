"""
Request models for the calculator endpoints.

These models are the form layer in front of the projection engine: they
validate and default user input so the engine can treat it as trusted. As on
the web forms, a blank or non-numeric number field counts as zero before
range checks apply.
"""

import math
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from calcsite.models.insurance import PremiumProfile
from calcsite.models.projection import (
    CompoundingUnit,
    ProjectionInput,
    projection_is_finite,
)
from calcsite.models.rate_tables import PortfolioStrategy
from calcsite.models.retirement import Gender, Generation, RetirementInput
from calcsite.models.scenarios import MIN_RATE_PERCENT, scenario_rates
from calcsite.models.student_loan import IDRPlan, RepaymentPlan

ROIBenchmark = Literal["none", "treasury_3m", "treasury_10y", "treasury_30y"]

BENCHMARK_TREASURY_KEYS = {
    "treasury_3m": "bills_3m",
    "treasury_10y": "notes_10y",
    "treasury_30y": "bonds_30y",
}


def _is_blank_number(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() == "nan":
            return True
        try:
            return math.isnan(float(text))
        except ValueError:
            return True
    return False


class CalculatorForm(BaseModel):
    """Base form: blank numeric fields coerce to zero."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_blank_numbers(cls, v: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is not None and field.annotation in (float, int) and _is_blank_number(v):
            return 0
        return v


class AmortizationForm(CalculatorForm):
    principal: float = Field(..., ge=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., gt=0, le=600)
    include_schedule: bool = Field(default=False)


class OwnershipOptions(CalculatorForm):
    miles_per_year: float = Field(default=12000, ge=0)
    mpg: float = Field(default=25, gt=0)
    gas_price: float = Field(default=3.5, ge=0)
    inflation_percent: float = Field(default=3.0, ge=-50, le=100)


class AutoLoanForm(CalculatorForm):
    principal: float = Field(..., ge=0)
    down_payment: float = Field(default=0, ge=0)
    trade_in_value: float = Field(default=0, ge=0)
    amount_owed: float = Field(default=0, ge=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., gt=0, le=120)
    sales_tax_percent: float = Field(default=0, ge=0, le=100)
    other_fees: float = Field(default=0, ge=0)
    advanced: Optional[OwnershipOptions] = None


class ProjectionForm(CalculatorForm):
    base_value: float = Field(..., gt=0)
    annual_rate_percent: float = Field(..., ge=-100, le=1000)
    periods: int = Field(..., ge=0, le=1200)
    compounding_unit: CompoundingUnit = "year"
    deflator_rate_percent: Optional[float] = Field(default=None, gt=-100, le=1000)

    @model_validator(mode="after")
    def check_finite_growth(self) -> "ProjectionForm":
        if not projection_is_finite(
            self.base_value,
            self.annual_rate_percent,
            self.periods,
            deflator_rate_percent=self.deflator_rate_percent,
            compounding_unit=self.compounding_unit,
        ):
            raise ValueError("Projection grows beyond the representable range")
        return self

    def to_input(self) -> ProjectionInput:
        return ProjectionInput(**self.model_dump())


class ScenarioForm(CalculatorForm):
    base: ProjectionForm
    deltas: Optional[Union[Dict[str, float], List[float]]] = None

    @field_validator("deltas")
    @classmethod
    def validate_deltas(cls, v):
        if v is not None and not 1 <= len(v) <= 10:
            raise ValueError("Between 1 and 10 scenarios are supported")
        return v

    @model_validator(mode="after")
    def check_scenario_rates(self) -> "ScenarioForm":
        base = self.base
        for label, rate in scenario_rates(base.annual_rate_percent, self.deltas).items():
            if rate < MIN_RATE_PERCENT:
                raise ValueError(f"Scenario {label} has a rate below -100%: {rate:g}%")
            if not projection_is_finite(
                base.base_value,
                rate,
                base.periods,
                deflator_rate_percent=base.deflator_rate_percent,
                compounding_unit=base.compounding_unit,
            ):
                raise ValueError(f"Scenario {label} grows beyond the representable range")
        return self


class LegacyForm(CalculatorForm):
    initial_wealth: float = Field(..., gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    portfolio_type: PortfolioStrategy = "mixed"
    generations: int = Field(default=3, ge=0, le=5)


class PPPForm(CalculatorForm):
    amount: float = Field(..., ge=0)
    from_country: str = Field(default="USA", min_length=3, max_length=3)
    to_country: str = Field(default="GBR", min_length=3, max_length=3)


class InsuranceForm(CalculatorForm):
    premium: float = Field(..., gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    years: int = Field(default=10, ge=0, le=50)
    age_multiplier: float = Field(default=1.0, gt=0)
    family_multiplier: float = Field(default=1.0, gt=0)
    plan_multiplier: float = Field(default=1.0, gt=0)
    region_multiplier: float = Field(default=1.0, gt=0)
    smoker: bool = False
    medical_inflation_percent: Optional[float] = Field(default=None, ge=-50, le=100)
    general_inflation_percent: float = Field(default=2.5, ge=-50, le=100)

    def to_profile(self) -> PremiumProfile:
        return PremiumProfile(
            age_multiplier=self.age_multiplier,
            family_multiplier=self.family_multiplier,
            plan_multiplier=self.plan_multiplier,
            region_multiplier=self.region_multiplier,
            smoker=self.smoker,
        )


class ROIForm(CalculatorForm):
    initial: float = Field(..., gt=0)
    final: float = Field(..., ge=0)
    years: float = Field(..., gt=0, le=100)
    tax_rate_percent: float = Field(default=0, ge=0, le=100)
    inflation_percent: float = Field(default=3.0, ge=-50, le=100)
    benchmark: ROIBenchmark = "none"


class BudgetForm(CalculatorForm):
    monthly_income: float = Field(..., ge=0)
    inflation_percent: float = Field(default=3.0, ge=-50, le=100)
    years_ahead: int = Field(default=10, ge=0, le=50)


class EmergencyFundForm(CalculatorForm):
    monthly_expenses: float = Field(..., gt=0)
    months_of_coverage: float = Field(default=6, ge=1, le=12)
    current_savings: float = Field(default=0, ge=0)
    monthly_savings_capacity: float = Field(default=0, ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    inflation_percent: Optional[float] = Field(default=None, ge=-50, le=100)


class StudentLoanForm(CalculatorForm):
    principal: float = Field(..., ge=0)
    annual_rate_percent: Optional[float] = Field(default=None, ge=0, le=100)
    award_year: Optional[int] = Field(default=None, ge=1900, le=2100)
    term_years: int = Field(default=10, ge=1, le=30)
    repayment_plan: RepaymentPlan = "standard"
    idr_plan: Optional[IDRPlan] = None
    annual_income: float = Field(default=50000, ge=0)
    household_size: int = Field(default=1, ge=1, le=20)


class SalaryForm(CalculatorForm):
    salary: float = Field(..., ge=0)
    start_cpi: float = Field(..., gt=0)
    end_cpi: float = Field(..., gt=0)
    years: int = Field(..., gt=0, le=200)


class RetirementForm(CalculatorForm):
    current_age: int = Field(default=30, ge=0, le=120)
    retirement_age: int = Field(default=65, ge=0, le=120)
    current_salary: float = Field(default=75000, ge=0)
    current_savings: float = Field(default=25000, ge=0)
    monthly_contribution: float = Field(default=500, ge=0)
    employer_match_percent: float = Field(default=3, ge=0, le=100)
    expected_return_percent: float = Field(default=7, ge=-50, le=50)
    inflation_percent: float = Field(default=3, ge=-50, le=50)
    retirement_duration_years: int = Field(default=25, ge=0, le=60)
    desired_income_percent: float = Field(default=80, ge=0, le=200)
    gender: Gender = "male"
    generation: Optional[Generation] = None

    @model_validator(mode="after")
    def check_ages(self) -> "RetirementForm":
        if self.retirement_age < self.current_age:
            raise ValueError("Retirement age cannot be below current age")
        return self

    def to_input(self) -> RetirementInput:
        return RetirementInput(**self.model_dump())


class DeflationForm(CalculatorForm):
    amount: float = Field(..., gt=0)
    asset: str = Field(default="bitcoin", min_length=1, max_length=50)
    start_year: int = Field(..., ge=1900, le=2100)
    end_year: int = Field(..., ge=1900, le=2100)

    @model_validator(mode="after")
    def check_years(self) -> "DeflationForm":
        if self.end_year < self.start_year:
            raise ValueError("End year cannot be before start year")
        return self
