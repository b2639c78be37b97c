"""
Student loan repayment with inflation-adjusted "real burden".

Covers the standard fixed-payment plan and the federal income-driven
repayment (IDR) plans, then shows how the fixed nominal payment shrinks in
real terms and as a share of a growing income.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .amortization import monthly_payment
from .rate_tables import RateTables, get_rate_tables

IDRPlan = Literal["SAVE", "PAYE", "IBR", "ICR"]
RepaymentPlan = Literal["standard", "income_driven"]

DEFAULT_INFLATION_RATE = 0.03
DEFAULT_INCOME_GROWTH_RATE = 0.04
ICR_FIXED_TERM_YEARS = 12
ICR_FIXED_RATE_PERCENT = 5.0


class BurdenYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    nominal_payment: float
    real_payment: float
    percentage_of_income: float


class StudentLoanResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_payment: float
    total_paid: float
    total_interest: float
    inflation_adjusted_total_cost: float
    real_burden_over_time: List[BurdenYear]


def idr_payment(
    plan: IDRPlan, agi: float, poverty_guideline: float, loan_balance: float
) -> float:
    """
    Monthly payment under an income-driven repayment plan.

    SAVE, PAYE and IBR charge 10% of income above 150% of the poverty
    guideline. ICR charges the lesser of 20% of income above the guideline
    and a fixed 12-year payment at 5%.

    Raises:
        ValueError: If the plan is not recognised
    """
    if plan in ("SAVE", "PAYE", "IBR"):
        discretionary_income = max(0.0, agi - poverty_guideline * 1.5)
        return discretionary_income * 0.1 / 12

    if plan == "ICR":
        discretionary_income = max(0.0, agi - poverty_guideline)
        icr_payment = discretionary_income * 0.2 / 12
        fixed_payment = monthly_payment(
            loan_balance, ICR_FIXED_RATE_PERCENT, ICR_FIXED_TERM_YEARS * 12
        )
        return min(icr_payment, fixed_payment)

    raise ValueError(f"Unknown IDR plan: {plan}")


def real_burden(
    payment: float,
    term_years: int,
    inflation_rate: float,
    income_growth_rate: float,
    starting_income: float,
) -> List[BurdenYear]:
    """Yearly real value of a fixed payment and its share of income."""
    burden = []
    for year in range(term_years + 1):
        inflation_factor = (1 + inflation_rate) ** year
        income = starting_income * (1 + income_growth_rate) ** year
        burden.append(
            BurdenYear(
                year=year,
                nominal_payment=payment,
                real_payment=payment / inflation_factor,
                percentage_of_income=(
                    payment * 12 / income * 100 if income > 0 else 0.0
                ),
            )
        )
    return burden


def calculate_student_loan(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    repayment_plan: RepaymentPlan = "standard",
    idr_plan: Optional[IDRPlan] = None,
    annual_income: float = 50000.0,
    household_size: int = 1,
    inflation_rate: float = DEFAULT_INFLATION_RATE,
    income_growth_rate: float = DEFAULT_INCOME_GROWTH_RATE,
    rate_tables: Optional[RateTables] = None,
) -> StudentLoanResult:
    """
    Calculate a student loan's payment, cost and real burden.

    Income-driven plans look up the poverty guideline for the household size.
    """
    if repayment_plan == "income_driven" and idr_plan is not None:
        if rate_tables is None:
            rate_tables = get_rate_tables()
        guideline = rate_tables.poverty_guideline_for(household_size)
        payment = idr_payment(idr_plan, annual_income, guideline, principal)
    else:
        payment = monthly_payment(principal, annual_rate_percent, term_years * 12)

    total_paid = payment * term_years * 12
    burden = real_burden(
        payment, term_years, inflation_rate, income_growth_rate, annual_income
    )

    return StudentLoanResult(
        monthly_payment=payment,
        total_paid=total_paid,
        total_interest=total_paid - principal,
        inflation_adjusted_total_cost=sum(
            year.real_payment * 12 for year in burden[:term_years]
        ),
        real_burden_over_time=burden,
    )
