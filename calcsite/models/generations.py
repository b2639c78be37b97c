"""
Multi-generation wealth projection for legacy planning.

Wealth passed down through successive generations grows with the portfolio
return, loses purchasing power to general inflation, and is further eroded by
healthcare costs that rise faster than general prices. Each generation is
spaced a fixed number of years apart.

The healthcare erosion rate (2% of inflation-adjusted wealth per generation,
cumulative) and the healthcare multiplier (healthcare inflation running 81%
above general inflation) are tunable assumptions, not derived figures.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .rate_tables import PortfolioStrategy, RateTables, get_rate_tables

GENERATION_GAP_YEARS = 25
HEALTHCARE_EROSION_RATE = 0.02
HEALTHCARE_INFLATION_MULTIPLIER = 1.81

GENERATION_NAMES = (
    "Your Children",
    "Your Grandchildren",
    "Your Great-Grandchildren",
    "Your Great-Great-Grandchildren",
    "5th Generation Descendants",
)


class GenerationStep(BaseModel):
    """Projected inheritance for one generation."""

    model_config = ConfigDict(frozen=True)

    generation_index: int = Field(..., ge=1, description="Generation number (1-based)")
    generation_name: str = Field(..., description="Display name for the generation")
    years_elapsed: int = Field(..., ge=0, description="Years since today")
    nominal_value: float = Field(..., description="Value with portfolio growth only")
    inflation_adjusted_value: float = Field(
        ..., description="Value after general inflation"
    )
    inflation_loss: float = Field(..., description="Purchasing power lost to inflation")
    healthcare_loss: float = Field(..., description="Value lost to healthcare costs")
    total_loss: float = Field(..., description="Inflation plus healthcare losses")
    real_value_retained: float = Field(
        ..., ge=0, description="Purchasing power left after all erosion"
    )
    purchasing_power_retained_percent: float = Field(
        ..., description="Retained value as a percentage of the initial wealth"
    )


class LegacyPlan(BaseModel):
    """Legacy projection together with the rates it was computed from."""

    model_config = ConfigDict(frozen=True)

    currency: str
    portfolio_type: PortfolioStrategy
    portfolio_return: float
    general_inflation: float
    healthcare_inflation: float
    steps: List[GenerationStep]


def generation_name(index: int) -> str:
    if 1 <= index <= len(GENERATION_NAMES):
        return GENERATION_NAMES[index - 1]
    return f"Generation {index} Descendants"


def project_generations(
    initial_wealth: float,
    portfolio_return: float,
    general_inflation: float,
    healthcare_inflation_multiplier: float,
    generation_count: int,
    gap_years: int = GENERATION_GAP_YEARS,
    healthcare_erosion_rate: float = HEALTHCARE_EROSION_RATE,
) -> List[GenerationStep]:
    """
    Project inherited wealth across generations.

    Args:
        initial_wealth: Wealth today
        portfolio_return: Annual portfolio return as a decimal (0.075 = 7.5%)
        general_inflation: Annual general inflation as a decimal
        healthcare_inflation_multiplier: Healthcare inflation relative to general
        generation_count: Number of generations to project
        gap_years: Years between generations
        healthcare_erosion_rate: Share of wealth eroded per generation

    Returns:
        One GenerationStep per generation, in order
    """
    real_return = portfolio_return - general_inflation
    steps = []

    for g in range(1, generation_count + 1):
        years = g * gap_years
        nominal_value = initial_wealth * (1 + portfolio_return) ** years
        inflation_adjusted_value = initial_wealth * (1 + real_return) ** years

        erosion_factor = healthcare_erosion_rate * g
        healthcare_erosion = (
            inflation_adjusted_value * erosion_factor * healthcare_inflation_multiplier
        )
        real_value_retained = max(0.0, inflation_adjusted_value - healthcare_erosion)

        inflation_loss = nominal_value - inflation_adjusted_value
        if initial_wealth > 0:
            retained_percent = real_value_retained / initial_wealth * 100
        else:
            retained_percent = 0.0

        steps.append(
            GenerationStep(
                generation_index=g,
                generation_name=generation_name(g),
                years_elapsed=years,
                nominal_value=nominal_value,
                inflation_adjusted_value=inflation_adjusted_value,
                inflation_loss=inflation_loss,
                healthcare_loss=healthcare_erosion,
                total_loss=inflation_loss + healthcare_erosion,
                real_value_retained=real_value_retained,
                purchasing_power_retained_percent=retained_percent,
            )
        )

    return steps


def plan_legacy(
    initial_wealth: float,
    currency: str,
    portfolio_type: PortfolioStrategy,
    generation_count: int,
    rate_tables: Optional[RateTables] = None,
    gap_years: int = GENERATION_GAP_YEARS,
    healthcare_erosion_rate: float = HEALTHCARE_EROSION_RATE,
    healthcare_inflation_multiplier: float = HEALTHCARE_INFLATION_MULTIPLIER,
) -> LegacyPlan:
    """
    Project generations using the reference rates for a currency.

    Raises:
        RateTableLookupError: If the currency or portfolio type is unknown
    """
    if rate_tables is None:
        rate_tables = get_rate_tables()

    portfolio_return = rate_tables.portfolio_return_for(currency, portfolio_type)
    general_inflation = rate_tables.legacy_inflation_for(currency)

    steps = project_generations(
        initial_wealth,
        portfolio_return,
        general_inflation,
        healthcare_inflation_multiplier,
        generation_count,
        gap_years=gap_years,
        healthcare_erosion_rate=healthcare_erosion_rate,
    )

    return LegacyPlan(
        currency=currency.upper(),
        portfolio_type=portfolio_type,
        portfolio_return=portfolio_return,
        general_inflation=general_inflation,
        healthcare_inflation=general_inflation * healthcare_inflation_multiplier,
        steps=steps,
    )
