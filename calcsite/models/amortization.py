"""
Loan amortization calculations.

This module provides the fixed-rate annuity payment used by every loan
calculator on the site, the auto loan breakdown (taxes, fees, trade-in),
month-by-month amortization schedules, and the inflation-aware cost of
ownership analysis shown in the auto loan calculator's advanced mode.

Inputs are trusted: callers validate before invoking these functions.
"""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Assumed annual new-car price inflation for the price trajectory chart
CAR_PRICE_INFLATION_PERCENT = 4.0
CAR_PRICE_HISTORY_YEARS = 10


class AmortizationResult(BaseModel):
    """Fixed payment and totals for an amortizing loan."""

    model_config = ConfigDict(frozen=True)

    monthly_payment: float = Field(..., description="Fixed monthly payment")
    total_interest: float = Field(..., description="Interest paid over the term")
    total_cost: float = Field(..., description="Sum of all payments")


class LoanInput(BaseModel):
    """Auto loan inputs as entered on the calculator form."""

    model_config = ConfigDict(frozen=True)

    principal: float = Field(..., ge=0, description="Vehicle price")
    down_payment: float = Field(default=0, description="Cash down payment")
    trade_in_value: float = Field(default=0, description="Trade-in vehicle value")
    amount_owed: float = Field(default=0, description="Amount still owed on trade-in")
    annual_rate_percent: float = Field(..., ge=0, description="Annual interest rate (%)")
    term_months: int = Field(..., gt=0, description="Loan term in months")
    sales_tax_percent: float = Field(default=0, description="Sales tax rate (%)")
    other_fees: float = Field(default=0, description="Title, registration and dealer fees")

    @property
    def net_trade_in(self) -> float:
        return self.trade_in_value - self.amount_owed

    @property
    def sales_tax(self) -> float:
        """Sales tax on the price net of trade-in equity."""
        taxable_amount = self.principal - self.net_trade_in
        return taxable_amount * self.sales_tax_percent / 100

    @property
    def loan_amount(self) -> float:
        """Amount financed after taxes, fees, down payment and trade-in."""
        return (
            self.principal
            + self.sales_tax
            + self.other_fees
            - self.down_payment
            - self.net_trade_in
        )


class LoanResult(BaseModel):
    """Derived auto loan figures, recomputed wholesale on every input change."""

    model_config = ConfigDict(frozen=True)

    monthly_payment: float
    total_principal: float
    total_interest: float
    total_cost: float
    upfront_cash: float
    sales_tax: float


class PaymentBreakdown(BaseModel):
    """Breakdown of a single loan payment."""

    model_config = ConfigDict(frozen=True)

    payment_number: int = Field(..., ge=1, description="Payment number (1-based)")
    beginning_balance: float = Field(..., description="Balance at beginning of period")
    payment_amount: float = Field(..., description="Total payment amount")
    principal_payment: float = Field(..., description="Principal portion of payment")
    interest_payment: float = Field(..., description="Interest portion of payment")
    ending_balance: float = Field(..., description="Balance at end of period")
    cumulative_interest: float = Field(..., description="Cumulative interest paid")
    cumulative_principal: float = Field(..., description="Cumulative principal paid")


class YearlyGasCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    nominal: float
    inflation_adjusted: float


class CarPricePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    price: float


class OwnershipCosts(BaseModel):
    """Inflation-aware cost of owning the financed vehicle."""

    model_config = ConfigDict(frozen=True)

    inflation_adjusted_price: float = Field(
        ..., description="Vehicle price at the end of the loan term"
    )
    real_monthly_payment: float = Field(
        ..., description="Payment in today's money at the middle of the term"
    )
    gas_costs: List[YearlyGasCost]
    total_gas_cost: float
    total_ownership_cost: float
    car_price_inflation: List[CarPricePoint]


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate to the monthly periodic rate."""
    return annual_rate_percent / 100 / 12


def monthly_payment(
    principal: float, annual_rate_percent: float, term_months: int
) -> float:
    """
    Calculate the fixed monthly payment for an amortizing loan.

    Args:
        principal: Amount financed
        annual_rate_percent: Annual interest rate (e.g. 6 for 6%)
        term_months: Number of monthly payments

    Returns:
        Monthly payment amount
    """
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        # Straight-line repayment; the annuity formula divides by zero here
        return principal / term_months

    growth = (1 + r) ** term_months
    return principal * r * growth / (growth - 1)


def amortize(
    principal: float, annual_rate_percent: float, term_months: int
) -> AmortizationResult:
    """
    Compute the fixed payment and interest totals for a loan.

    Args:
        principal: Amount financed (>= 0)
        annual_rate_percent: Annual interest rate (e.g. 6 for 6%)
        term_months: Number of monthly payments (> 0)

    Returns:
        AmortizationResult with monthly payment, total interest and total cost
    """
    payment = monthly_payment(principal, annual_rate_percent, term_months)
    total_paid = payment * term_months
    return AmortizationResult(
        monthly_payment=payment,
        total_interest=total_paid - principal,
        total_cost=total_paid,
    )


def calculate_loan(loan: LoanInput) -> LoanResult:
    """
    Calculate the auto loan payment and ownership totals.

    A non-positive amount financed means the buyer prepays everything, so no
    payment or interest is computed.

    Args:
        loan: Auto loan inputs

    Returns:
        LoanResult for the loan
    """
    loan_amount = loan.loan_amount
    sales_tax = loan.sales_tax
    upfront_cash = loan.down_payment + loan.other_fees + sales_tax - loan.net_trade_in

    if loan_amount <= 0:
        payment = 0.0
        total_interest = 0.0
        total_principal = 0.0
    else:
        result = amortize(loan_amount, loan.annual_rate_percent, loan.term_months)
        payment = result.monthly_payment
        total_interest = result.total_interest
        total_principal = loan_amount

    return LoanResult(
        monthly_payment=payment,
        total_principal=total_principal,
        total_interest=total_interest,
        total_cost=loan.principal + sales_tax + loan.other_fees + total_interest,
        upfront_cash=upfront_cash,
        sales_tax=sales_tax,
    )


def amortization_schedule(
    principal: float, annual_rate_percent: float, term_months: int
) -> List[PaymentBreakdown]:
    """
    Generate a month-by-month amortization schedule.

    The final payment absorbs floating-point drift so the loan closes at
    exactly zero.

    Args:
        principal: Amount financed
        annual_rate_percent: Annual interest rate (e.g. 6 for 6%)
        term_months: Number of monthly payments

    Returns:
        List of payment breakdowns, one per month
    """
    if principal <= 0:
        return []

    r = monthly_rate(annual_rate_percent)
    payment = monthly_payment(principal, annual_rate_percent, term_months)

    payments = []
    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0

    for payment_number in range(1, term_months + 1):
        interest_payment = balance * r
        principal_payment = payment - interest_payment
        if payment_number == term_months:
            principal_payment = balance

        ending_balance = balance - principal_payment
        cumulative_interest += interest_payment
        cumulative_principal += principal_payment

        payments.append(
            PaymentBreakdown(
                payment_number=payment_number,
                beginning_balance=balance,
                payment_amount=interest_payment + principal_payment,
                principal_payment=principal_payment,
                interest_payment=interest_payment,
                ending_balance=ending_balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )
        balance = ending_balance

    return payments


def ownership_costs(
    loan: LoanInput,
    result: LoanResult,
    miles_per_year: float,
    mpg: float,
    gas_price: float,
    inflation_percent: float,
    car_price_inflation_percent: float = CAR_PRICE_INFLATION_PERCENT,
    current_year: Optional[int] = None,
) -> OwnershipCosts:
    """
    Project the inflation-adjusted cost of owning the vehicle.

    Args:
        loan: Auto loan inputs
        result: Result of calculate_loan for the same inputs
        miles_per_year: Annual miles driven
        mpg: Fuel economy in miles per gallon
        gas_price: Current price per gallon
        inflation_percent: Annual general inflation (%)
        car_price_inflation_percent: Annual new-car price inflation (%)
        current_year: Year used to label the price trajectory

    Returns:
        OwnershipCosts with price, gas and total cost projections
    """
    if current_year is None:
        current_year = datetime.now().year

    inflation = inflation_percent / 100
    loan_years = loan.term_months / 12

    future_price = loan.principal * (1 + inflation) ** loan_years
    real_monthly_payment = result.monthly_payment / (1 + inflation) ** (loan_years / 2)

    monthly_gas_cost = (miles_per_year / 12 / mpg) * gas_price if mpg > 0 else 0.0
    gas_costs = [
        YearlyGasCost(
            year=year,
            nominal=monthly_gas_cost * 12 * (1 + inflation) ** year,
            inflation_adjusted=monthly_gas_cost * 12,
        )
        for year in range(1, math.floor(loan_years) + 1)
    ]
    total_gas_cost = sum(cost.nominal for cost in gas_costs)

    car_inflation = 1 + car_price_inflation_percent / 100
    historical_base = loan.principal / car_inflation**CAR_PRICE_HISTORY_YEARS
    car_price_inflation = [
        CarPricePoint(
            year=current_year - CAR_PRICE_HISTORY_YEARS + i,
            price=round(historical_base * car_inflation**i),
        )
        for i in range(CAR_PRICE_HISTORY_YEARS + 1)
    ]

    return OwnershipCosts(
        inflation_adjusted_price=future_price,
        real_monthly_payment=real_monthly_payment,
        gas_costs=gas_costs,
        total_gas_cost=total_gas_cost,
        total_ownership_cost=result.total_cost + total_gas_cost,
        car_price_inflation=car_price_inflation,
    )
