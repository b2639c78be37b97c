"""
Health insurance premium inflation projections.

A base premium is scaled by profile multipliers (age, family size, plan tier,
region, smoking) and then grown at the medical inflation rate of the chosen
currency.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

SMOKER_MULTIPLIER = 1.5
DEFAULT_GENERAL_INFLATION_PERCENT = 2.5

# Currencies whose premiums do not vary with smoking status
SMOKING_EXEMPT_CURRENCIES = frozenset({"JPY"})


class PremiumProfile(BaseModel):
    """Multipliers describing the insured household."""

    model_config = ConfigDict(frozen=True)

    age_multiplier: float = Field(default=1.0, gt=0)
    family_multiplier: float = Field(default=1.0, gt=0)
    plan_multiplier: float = Field(default=1.0, gt=0)
    region_multiplier: float = Field(default=1.0, gt=0)
    smoker: bool = Field(default=False)

    def combined_multiplier(self, currency: str = "USD") -> float:
        smoking = 1.0
        if self.smoker and currency.upper() not in SMOKING_EXEMPT_CURRENCIES:
            smoking = SMOKER_MULTIPLIER
        return (
            self.age_multiplier
            * self.family_multiplier
            * self.plan_multiplier
            * self.region_multiplier
            * smoking
        )


class PremiumPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    premium: float
    general_inflation: float = Field(
        ..., description="Cumulative general inflation (%), simple"
    )
    medical_inflation: float = Field(
        ..., description="Cumulative medical inflation (%), simple"
    )


class PremiumProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_premium: float
    base_premium: float = Field(..., description="Premium after profile multipliers")
    years_projected: int
    projected_premium: float
    total_increase: float
    percentage_increase: float
    medical_inflation_percent: float
    combined_multiplier: float
    series: List[PremiumPoint]


def project_premium(
    premium: float,
    profile: PremiumProfile,
    medical_inflation_percent: float,
    years: int,
    currency: str = "USD",
    general_inflation_percent: float = DEFAULT_GENERAL_INFLATION_PERCENT,
    start_year: Optional[int] = None,
) -> PremiumProjection:
    """
    Project a premium forward at the medical inflation rate.

    Args:
        premium: Current premium
        profile: Household multipliers
        medical_inflation_percent: Annual medical inflation (%)
        years: Years to project
        currency: Currency of the premium
        general_inflation_percent: Annual general inflation (%) for comparison
        start_year: Calendar year of the first point (defaults to this year)

    Returns:
        PremiumProjection with totals and a yearly series
    """
    if start_year is None:
        start_year = datetime.now().year

    multiplier = profile.combined_multiplier(currency)
    base = premium * multiplier
    rate = medical_inflation_percent / 100

    projected = base * (1 + rate) ** years
    total_increase = projected - base
    percentage_increase = total_increase / base * 100 if base > 0 else 0.0

    series = [
        PremiumPoint(
            year=start_year + year,
            premium=base * (1 + rate) ** year,
            general_inflation=year * general_inflation_percent,
            medical_inflation=year * medical_inflation_percent,
        )
        for year in range(years + 1)
    ]

    return PremiumProjection(
        current_premium=premium,
        base_premium=base,
        years_projected=years,
        projected_premium=projected,
        total_increase=total_increase,
        percentage_increase=percentage_increase,
        medical_inflation_percent=medical_inflation_percent,
        combined_multiplier=multiplier,
        series=series,
    )
