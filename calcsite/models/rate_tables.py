"""
Reference rate tables consumed by the calculators.

Rate tables are read-only inputs: inflation and medical inflation by currency,
portfolio returns by strategy, PPP conversion factors, poverty guidelines,
federal student loan rates, Treasury benchmark rates and yearly prices of
the hard assets used by the deflation calculator. The engine never
mutates them; calculators receive plain numbers looked up from here.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

PortfolioStrategy = Literal["stocks", "bonds", "mixed"]
TreasuryBenchmark = Literal[
    "bills_3m", "notes_10y", "bonds_30y", "high_yield_savings", "i_bonds"
]


class RateTableLookupError(KeyError):
    """Raised when a rate table has no entry for the requested key."""


class PortfolioReturns(BaseModel):
    """Expected annual returns (decimal) for each portfolio strategy."""

    model_config = ConfigDict(frozen=True)

    stocks: float = Field(..., ge=-1, le=1, description="Stock portfolio return")
    bonds: float = Field(..., ge=-1, le=1, description="Bond portfolio return")
    mixed: float = Field(..., ge=-1, le=1, description="Mixed portfolio return")


class RateTables(BaseModel):
    """Complete set of reference rate tables."""

    model_config = ConfigDict(frozen=True)

    general_inflation_percent: Dict[str, float] = Field(
        ..., description="Annual CPI inflation (%) by currency"
    )
    medical_inflation_percent: Dict[str, float] = Field(
        ..., description="Annual medical inflation (%) by currency"
    )
    legacy_inflation: Dict[str, float] = Field(
        ..., description="Long-run inflation (decimal) by currency for legacy planning"
    )
    portfolio_returns: Dict[str, PortfolioReturns] = Field(
        ..., description="Portfolio returns by currency and strategy"
    )
    ppp_factors: Dict[str, float] = Field(
        ..., description="PPP conversion factor by ISO alpha-3 country code"
    )
    poverty_guidelines: Dict[int, float] = Field(
        ..., description="Annual poverty guideline by household size"
    )
    poverty_guideline_increment: float = Field(
        ..., ge=0, description="Guideline increase per person above the table"
    )
    federal_student_loan_rates: Dict[int, float] = Field(
        ..., description="Undergraduate federal loan rate (%) by award year"
    )
    treasury_rates: Dict[str, float] = Field(
        ..., description="Treasury and savings benchmark rates (%)"
    )
    asset_prices: Dict[str, Dict[int, float]] = Field(
        ..., description="Average USD price of an asset by year"
    )

    @field_validator(
        "general_inflation_percent",
        "medical_inflation_percent",
        "legacy_inflation",
        "portfolio_returns",
        "ppp_factors",
    )
    @classmethod
    def normalize_codes(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return {code.upper(): value for code, value in v.items()}

    @field_validator("ppp_factors")
    @classmethod
    def validate_ppp_factors(cls, v: Dict[str, float]) -> Dict[str, float]:
        for code, factor in v.items():
            if factor <= 0:
                raise ValueError(f"PPP factor for {code} must be positive")
        return v

    @field_validator("asset_prices")
    @classmethod
    def validate_asset_prices(
        cls, v: Dict[str, Dict[int, float]]
    ) -> Dict[str, Dict[int, float]]:
        for asset, prices in v.items():
            if not prices:
                raise ValueError(f"Asset {asset} has no prices")
            if any(price <= 0 for price in prices.values()):
                raise ValueError(f"Prices for {asset} must be positive")
        return {asset.lower(): prices for asset, prices in v.items()}

    @staticmethod
    def _lookup(table: Dict[Any, Any], key: Any, table_name: str) -> Any:
        try:
            return table[key]
        except KeyError:
            raise RateTableLookupError(f"No {table_name} entry for {key!r}") from None

    def general_inflation_for(self, currency: str) -> float:
        """Annual general inflation (%) for a currency."""
        return self._lookup(
            self.general_inflation_percent, currency.upper(), "general inflation"
        )

    def medical_inflation_for(self, currency: str) -> float:
        """Annual medical inflation (%) for a currency."""
        return self._lookup(
            self.medical_inflation_percent, currency.upper(), "medical inflation"
        )

    def legacy_inflation_for(self, currency: str) -> float:
        return self._lookup(
            self.legacy_inflation, currency.upper(), "legacy inflation"
        )

    def portfolio_return_for(
        self, currency: str, strategy: PortfolioStrategy
    ) -> float:
        """Expected annual return (decimal) for a currency and strategy."""
        returns = self._lookup(
            self.portfolio_returns, currency.upper(), "portfolio return"
        )
        if strategy not in PortfolioReturns.model_fields:
            raise RateTableLookupError(f"Unknown portfolio strategy {strategy!r}")
        return getattr(returns, strategy)

    def ppp_factor_for(self, country: str) -> float:
        return self._lookup(self.ppp_factors, country.upper(), "PPP factor")

    def poverty_guideline_for(self, household_size: int) -> float:
        """
        Annual poverty guideline for a household.

        Households larger than the table add the per-person increment to the
        largest listed size.
        """
        if household_size < 1:
            raise RateTableLookupError(
                f"Household size must be at least 1, got {household_size}"
            )
        if household_size in self.poverty_guidelines:
            return self.poverty_guidelines[household_size]
        largest = max(self.poverty_guidelines)
        if household_size < largest:
            raise RateTableLookupError(
                f"No poverty guideline entry for household size {household_size}"
            )
        extra = household_size - largest
        return self.poverty_guidelines[largest] + extra * self.poverty_guideline_increment

    def student_loan_rate_for(self, award_year: int) -> float:
        return self._lookup(
            self.federal_student_loan_rates, award_year, "federal student loan rate"
        )

    def treasury_rate_for(self, benchmark: TreasuryBenchmark) -> float:
        return self._lookup(self.treasury_rates, benchmark, "treasury rate")

    def asset_price_for(self, asset: str, year: int) -> float:
        """Average USD price of an asset in a year."""
        prices = self._lookup(self.asset_prices, asset.lower(), "asset price")
        return self._lookup(prices, year, f"{asset.lower()} price")

    def asset_years(self, asset: str) -> Tuple[int, int]:
        """First and last year with a price for an asset."""
        prices = self._lookup(self.asset_prices, asset.lower(), "asset price")
        return min(prices), max(prices)

    def currencies(self) -> List[str]:
        """Currencies covered by every per-currency table."""
        covered = (
            set(self.general_inflation_percent)
            & set(self.medical_inflation_percent)
            & set(self.legacy_inflation)
            & set(self.portfolio_returns)
        )
        return sorted(covered)


DEFAULT_RATE_TABLES = RateTables(
    general_inflation_percent={
        "USD": 3.0,
        "GBP": 3.8,
        "EUR": 2.1,
        "CAD": 2.8,
        "AUD": 3.2,
        "CHF": 1.7,
        "JPY": 2.5,
        "NZD": 3.3,
    },
    medical_inflation_percent={
        "USD": 5.4,
        "GBP": 4.1,
        "CAD": 6.2,
        "AUD": 5.8,
        "CHF": 4.5,
        "EUR": 3.8,
        "JPY": 2.8,
        "NZD": 5.5,
    },
    legacy_inflation={
        "USD": 0.032,
        "GBP": 0.035,
        "EUR": 0.025,
        "CAD": 0.03,
        "AUD": 0.035,
        "CHF": 0.015,
        "JPY": 0.01,
        "NZD": 0.025,
    },
    portfolio_returns={
        "USD": PortfolioReturns(stocks=0.1, bonds=0.05, mixed=0.075),
        "GBP": PortfolioReturns(stocks=0.09, bonds=0.045, mixed=0.07),
        "EUR": PortfolioReturns(stocks=0.085, bonds=0.04, mixed=0.065),
        "CAD": PortfolioReturns(stocks=0.095, bonds=0.045, mixed=0.072),
        "AUD": PortfolioReturns(stocks=0.095, bonds=0.05, mixed=0.075),
        "CHF": PortfolioReturns(stocks=0.08, bonds=0.035, mixed=0.06),
        "JPY": PortfolioReturns(stocks=0.075, bonds=0.03, mixed=0.055),
        "NZD": PortfolioReturns(stocks=0.09, bonds=0.045, mixed=0.07),
    },
    ppp_factors={
        "USA": 1.0,
        "GBR": 0.72,
        "CHN": 3.51,
        "JPN": 102.52,
        "DEU": 0.77,
        "IND": 22.78,
        "CAN": 1.24,
        "AUS": 1.48,
        "FRA": 0.79,
        "BRA": 2.27,
    },
    # 2024 HHS guidelines, 48 contiguous states
    poverty_guidelines={
        1: 15060.0,
        2: 20440.0,
        3: 25820.0,
        4: 31200.0,
        5: 36580.0,
        6: 41960.0,
        7: 47340.0,
        8: 52720.0,
    },
    poverty_guideline_increment=5380.0,
    federal_student_loan_rates={
        2019: 4.53,
        2020: 2.75,
        2021: 3.73,
        2022: 4.99,
        2023: 5.50,
        2024: 6.53,
    },
    treasury_rates={
        "bills_3m": 4.35,
        "notes_10y": 4.25,
        "bonds_30y": 4.45,
        "high_yield_savings": 4.35,
        "i_bonds": 4.28,
    },
    asset_prices={
        "bitcoin": {
            2010: 0.08, 2011: 5, 2012: 13, 2013: 770, 2014: 320, 2015: 430,
            2016: 960, 2017: 13850, 2018: 3740, 2019: 7200, 2020: 29000,
            2021: 47000, 2022: 16500, 2023: 42000, 2024: 67000, 2025: 95000,
        },
        "ethereum": {
            2015: 0.75, 2016: 8, 2017: 730, 2018: 130, 2019: 130, 2020: 600,
            2021: 4000, 2022: 1200, 2023: 2300, 2024: 3500, 2025: 4200,
        },
        "gold": {
            1985: 280, 1990: 445, 1995: 1225, 2000: 250, 2005: 445, 2010: 1225,
            2015: 1060, 2016: 1250, 2017: 1257, 2018: 1268, 2019: 1393,
            2020: 1800, 2021: 1900, 2022: 1950, 2023: 2000, 2024: 2100,
            2025: 2150,
        },
        "silver": {
            1997: 5, 2000: 7, 2005: 20, 2010: 14, 2015: 17, 2016: 17, 2017: 15,
            2018: 16, 2019: 24, 2020: 26, 2021: 21, 2022: 25, 2023: 28,
            2024: 30, 2025: 32,
        },
        "oil": {
            1986: 28, 1990: 56, 1995: 80, 2000: 48, 2005: 43, 2010: 51,
            2015: 65, 2016: 57, 2017: 40, 2018: 70, 2019: 95, 2020: 75,
            2021: 85, 2022: 78, 2023: 80, 2024: 90, 2025: 92,
        },
    },
)


def merge_rate_tables(overrides: Dict[str, Any]) -> RateTables:
    """
    Build rate tables from the defaults with top-level tables replaced.

    Args:
        overrides: Mapping of table name to replacement table

    Returns:
        Validated RateTables instance
    """
    data = DEFAULT_RATE_TABLES.model_dump()
    data.update(overrides)
    return RateTables.model_validate(data)


def load_rate_tables(path: Optional[Union[str, Path]] = None) -> RateTables:
    """
    Load rate tables from a JSON file.

    Tables missing from the file keep their default values.

    Args:
        path: JSON file path; None returns the bundled defaults

    Returns:
        Validated RateTables instance
    """
    if path is None:
        return DEFAULT_RATE_TABLES

    with open(path, "r", encoding="utf-8") as f:
        overrides = json.load(f)

    if not isinstance(overrides, dict):
        raise ValueError(f"Rate tables file {path} must contain a JSON object")

    logger.info(f"Loaded rate table overrides from {path}: {sorted(overrides)}")
    return merge_rate_tables(overrides)


_rate_tables: Optional[RateTables] = None


def get_rate_tables() -> RateTables:
    """Get the process-wide rate tables, falling back to the defaults."""
    global _rate_tables
    if _rate_tables is None:
        _rate_tables = DEFAULT_RATE_TABLES
    return _rate_tables


def set_rate_tables(tables: RateTables) -> None:
    """Install the process-wide rate tables (done once at startup)."""
    global _rate_tables
    _rate_tables = tables


def reset_rate_tables() -> None:
    """Reset the process-wide rate tables (useful for testing)."""
    global _rate_tables
    _rate_tables = None
