"""
Return on investment analysis.

Compares an investment's nominal return against inflation, taxes and a
risk-free benchmark such as a Treasury yield.
"""

import math
from typing import List

from pydantic import BaseModel, ConfigDict

from .projection import cagr


class ROIYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    nominal_value: float
    real_value: float


class ROIAnalysis(BaseModel):
    """Nominal, real, after-tax and benchmark-relative returns."""

    model_config = ConfigDict(frozen=True)

    net_profit: float
    roi_percent: float
    annualized_return_percent: float
    inflation_adjusted_final: float
    inflation_adjusted_return: float
    real_roi_percent: float
    after_tax_profit: float
    after_tax_return_percent: float
    after_tax_real_return_percent: float
    benchmark_final_value: float
    opportunity_cost: float
    benchmark_comparison: float
    yearly_breakdown: List[ROIYear]


def analyze_roi(
    initial: float,
    final: float,
    years: float,
    tax_rate_percent: float = 0.0,
    inflation_percent: float = 0.0,
    benchmark_rate_percent: float = 0.0,
) -> ROIAnalysis:
    """
    Analyze an investment's return.

    Args:
        initial: Amount invested (> 0)
        final: Value at the end of the holding period
        years: Holding period in years (> 0)
        tax_rate_percent: Tax on the profit (%)
        inflation_percent: Annual inflation (%)
        benchmark_rate_percent: Annual risk-free benchmark yield (%)

    Returns:
        ROIAnalysis for the investment
    """
    tax = tax_rate_percent / 100
    deflator = (1 + inflation_percent / 100) ** years

    net_profit = final - initial
    inflation_adjusted_final = final / deflator
    inflation_adjusted_return = inflation_adjusted_final - initial

    after_tax_profit = net_profit * (1 - tax)
    after_tax_real_final = (initial + after_tax_profit) / deflator

    benchmark_final = initial * (1 + benchmark_rate_percent / 100) ** years
    opportunity_cost = benchmark_final - initial

    yearly_breakdown = []
    for year in range(math.floor(years) + 1):
        if year == 0:
            nominal = initial
        else:
            nominal = initial * (final / initial) ** (year / years)
        yearly_breakdown.append(
            ROIYear(
                year=year,
                nominal_value=nominal,
                real_value=nominal / (1 + inflation_percent / 100) ** year,
            )
        )

    return ROIAnalysis(
        net_profit=net_profit,
        roi_percent=net_profit / initial * 100,
        annualized_return_percent=cagr(initial, final, years) * 100,
        inflation_adjusted_final=inflation_adjusted_final,
        inflation_adjusted_return=inflation_adjusted_return,
        real_roi_percent=inflation_adjusted_return / initial * 100,
        after_tax_profit=after_tax_profit,
        after_tax_return_percent=after_tax_profit / initial * 100,
        after_tax_real_return_percent=(after_tax_real_final - initial) / initial * 100,
        benchmark_final_value=benchmark_final,
        opportunity_cost=opportunity_cost,
        benchmark_comparison=net_profit - opportunity_cost,
        yearly_breakdown=yearly_breakdown,
    )
