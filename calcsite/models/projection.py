"""
Compound growth and inflation projections.

This module applies a growth (or erosion) rate across a number of periods and
returns the full year-by-year series. Callers need both the final figure and
the chart trajectory, so the series is the primary product; the final value is
simply the last point.
"""

from typing import List, Literal, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

CompoundingUnit = Literal["year", "month"]


class ProjectionInput(BaseModel):
    """Parameters for a compound projection."""

    model_config = ConfigDict(frozen=True)

    base_value: float = Field(..., gt=0, description="Value at period 0")
    annual_rate_percent: float = Field(
        ..., description="Annual growth rate (%), negative for erosion"
    )
    periods: int = Field(..., ge=0, le=1200, description="Number of periods")
    compounding_unit: CompoundingUnit = Field(
        default="year", description="Length of one period"
    )
    deflator_rate_percent: Optional[float] = Field(
        default=None, description="Annual deflator (%) used for real values"
    )


class ProjectionPoint(BaseModel):
    """One point of a projection series."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., ge=0, description="Period index")
    nominal_value: float = Field(..., description="Unadjusted value")
    real_value: Optional[float] = Field(
        default=None, description="Value deflated to period-0 purchasing power"
    )


class SalaryAdjustment(BaseModel):
    """Salary needed to keep purchasing power between two CPI readings."""

    model_config = ConfigDict(frozen=True)

    original_salary: float
    adjusted_salary: float
    cumulative_inflation_percent: float
    compound_annual_inflation_percent: float
    salary_increase_needed: float


def periodic_rate(annual_rate_percent: float, compounding_unit: CompoundingUnit) -> float:
    """Convert an annual percentage to the decimal rate of one period."""
    rate = annual_rate_percent / 100
    if compounding_unit == "month":
        return rate / 12
    return rate


def project(
    base_value: float,
    rate_percent: float,
    periods: int,
    deflator_rate_percent: Optional[float] = None,
    compounding_unit: CompoundingUnit = "year",
) -> List[ProjectionPoint]:
    """
    Project a value forward under compound growth.

    Args:
        base_value: Value at period 0
        rate_percent: Annual growth rate (%); may be negative
        periods: Number of periods to project
        deflator_rate_percent: Optional annual deflator (%) for real values
        compounding_unit: "year" or "month"

    Returns:
        periods + 1 points, index equal to period
    """
    steps = np.arange(periods + 1)
    growth = np.power(1 + periodic_rate(rate_percent, compounding_unit), steps)
    nominal = base_value * growth

    if deflator_rate_percent is None:
        return [
            ProjectionPoint(period=int(p), nominal_value=float(value))
            for p, value in zip(steps, nominal)
        ]

    deflator = np.power(1 + periodic_rate(deflator_rate_percent, compounding_unit), steps)
    real = nominal / deflator
    return [
        ProjectionPoint(
            period=int(p), nominal_value=float(value), real_value=float(real_value)
        )
        for p, value, real_value in zip(steps, nominal, real)
    ]


def project_input(projection: ProjectionInput) -> List[ProjectionPoint]:
    """Run project() for a ProjectionInput."""
    return project(
        projection.base_value,
        projection.annual_rate_percent,
        projection.periods,
        deflator_rate_percent=projection.deflator_rate_percent,
        compounding_unit=projection.compounding_unit,
    )


def final_value(points: Sequence[ProjectionPoint]) -> float:
    """Nominal value at the last period of a series."""
    return points[-1].nominal_value


def future_value(present: float, rate_percent: float, years: float) -> float:
    return present * (1 + rate_percent / 100) ** years


def present_value(future: float, rate_percent: float, years: float) -> float:
    """Discount a future amount back to today's money."""
    return future / (1 + rate_percent / 100) ** years


def cagr(start_value: float, end_value: float, years: float) -> float:
    """
    Compound annual growth rate as a decimal.

    Returns 0 when the period or starting value is not positive.
    """
    if years <= 0 or start_value <= 0:
        return 0.0
    return (end_value / start_value) ** (1 / years) - 1


def cumulative_inflation(start_index: float, end_index: float) -> float:
    """Total inflation (decimal) between two price index readings."""
    return (end_index - start_index) / start_index


def salary_adjustment(
    salary: float, start_cpi: float, end_cpi: float, years: int
) -> SalaryAdjustment:
    """
    Adjust a salary for inflation between two CPI readings.

    Args:
        salary: Salary in the starting year
        start_cpi: Price index in the starting year
        end_cpi: Price index in the ending year
        years: Years between the two readings

    Returns:
        SalaryAdjustment with the equivalent salary and inflation rates
    """
    inflation = cumulative_inflation(start_cpi, end_cpi)
    adjusted = salary * (1 + inflation)
    return SalaryAdjustment(
        original_salary=salary,
        adjusted_salary=adjusted,
        cumulative_inflation_percent=inflation * 100,
        compound_annual_inflation_percent=cagr(start_cpi, end_cpi, years) * 100,
        salary_increase_needed=adjusted - salary,
    )


def projection_is_finite(
    base_value: float,
    rate_percent: float,
    periods: int,
    deflator_rate_percent: Optional[float] = None,
    compounding_unit: CompoundingUnit = "year",
) -> bool:
    """
    Check that a projection stays within floating point range.

    Growth is monotonic in the period index, so only the first and last
    points need checking.
    """
    steps = np.array([0, periods])
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        nominal = base_value * np.power(
            1 + periodic_rate(rate_percent, compounding_unit), steps
        )
        values = [nominal]
        if deflator_rate_percent is not None:
            deflator = np.power(
                1 + periodic_rate(deflator_rate_percent, compounding_unit), steps
            )
            values.append(nominal / deflator)
    return bool(all(np.all(np.isfinite(v)) for v in values))


def future_value_of_series(payment: float, rate: float, periods: int) -> float:
    """
    Future value of equal payments made at the end of each period.

    Args:
        payment: Amount paid every period
        rate: Decimal rate per period
        periods: Number of payments

    Returns:
        Accumulated value after the last payment; payment * periods at a 0 rate
    """
    return payment * annuity_factor(rate, periods)


def annuity_factor(rate: float, periods: int) -> float:
    """Future value of one unit paid each period for ``periods`` periods."""
    if periods <= 0:
        return 0.0
    if rate == 0:
        return float(periods)
    return ((1 + rate) ** periods - 1) / rate
