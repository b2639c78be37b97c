"""
Purchasing power of money held in hard assets.

An amount converted into an asset at one year's price and valued at a later
year's price shows how the asset kept, lost or multiplied its buying power
compared with holding cash.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .rate_tables import RateTables, get_rate_tables


class AssetPurchasingPower(BaseModel):
    """Value of an amount held in an asset between two prices."""

    model_config = ConfigDict(frozen=True)

    initial_amount: float = Field(..., description="Cash converted at the start price")
    final_value: float = Field(..., description="Holding valued at the end price")
    growth_percent: float = Field(..., description="Change in value (%)")
    units: float = Field(..., description="Asset units bought with the amount")
    start_price: float
    end_price: float


class AssetValuePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    price: float
    value: float


def asset_purchasing_power(
    amount: float, start_price: float, end_price: float
) -> AssetPurchasingPower:
    """
    Buy an asset with ``amount`` at ``start_price`` and value it at ``end_price``.

    Raises:
        ValueError: If the amount or either price is not positive
    """
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got {amount}")
    if start_price <= 0 or end_price <= 0:
        raise ValueError("Asset prices must be positive")

    units = amount / start_price
    final = units * end_price
    return AssetPurchasingPower(
        initial_amount=amount,
        final_value=final,
        growth_percent=(final - amount) / amount * 100,
        units=units,
        start_price=start_price,
        end_price=end_price,
    )


def asset_purchasing_power_between(
    amount: float,
    asset: str,
    start_year: int,
    end_year: int,
    rate_tables: Optional[RateTables] = None,
) -> AssetPurchasingPower:
    """
    Purchasing power of an amount held in an asset between two years.

    Args:
        amount: Cash converted into the asset in ``start_year``
        asset: Asset name, e.g. ``bitcoin`` or ``gold``
        start_year: Year of purchase
        end_year: Year of valuation
        rate_tables: Tables holding asset prices; the installed tables by default

    Raises:
        RateTableLookupError: If the asset or a year has no price
    """
    tables = rate_tables or get_rate_tables()
    return asset_purchasing_power(
        amount,
        tables.asset_price_for(asset, start_year),
        tables.asset_price_for(asset, end_year),
    )


def asset_value_history(
    amount: float,
    asset: str,
    start_year: int,
    end_year: int,
    rate_tables: Optional[RateTables] = None,
) -> List[AssetValuePoint]:
    """Value of the holding at every priced year from start to end, inclusive."""
    tables = rate_tables or get_rate_tables()
    units = amount / tables.asset_price_for(asset, start_year)
    tables.asset_price_for(asset, end_year)  # raises for an unpriced end year
    prices = tables.asset_prices[asset.lower()]
    return [
        AssetValuePoint(year=year, price=prices[year], value=units * prices[year])
        for year in sorted(prices)
        if start_year <= year <= end_year
    ]
