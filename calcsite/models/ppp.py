"""Purchasing power parity conversions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .rate_tables import RateTableLookupError, RateTables, get_rate_tables


class PPPConversion(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    from_country: str
    to_country: str
    from_factor: float
    to_factor: float
    ratio: float
    converted_amount: float


def ppp_ratio(from_factor: float, to_factor: float) -> float:
    """Units of the target economy's money matching one unit of the source's."""
    return to_factor / from_factor


def convert_ppp(amount: float, from_factor: float, to_factor: float) -> float:
    """
    Convert an amount between economies using PPP conversion factors.

    Args:
        amount: Amount in the source currency
        from_factor: PPP factor of the source economy
        to_factor: PPP factor of the target economy

    Returns:
        Amount with the same purchasing power in the target economy
    """
    return amount * ppp_ratio(from_factor, to_factor)


def _factor_or_parity(rate_tables: RateTables, country: str) -> float:
    try:
        return rate_tables.ppp_factor_for(country)
    except RateTableLookupError:
        return 1.0


def convert_between_countries(
    amount: float,
    from_country: str,
    to_country: str,
    rate_tables: Optional[RateTables] = None,
) -> PPPConversion:
    """
    Convert an amount between two countries by ISO alpha-3 code.

    Countries missing from the PPP table are treated as at parity (factor 1).
    """
    if rate_tables is None:
        rate_tables = get_rate_tables()

    from_factor = _factor_or_parity(rate_tables, from_country)
    to_factor = _factor_or_parity(rate_tables, to_country)

    return PPPConversion(
        amount=amount,
        from_country=from_country.upper(),
        to_country=to_country.upper(),
        from_factor=from_factor,
        to_factor=to_factor,
        ratio=ppp_ratio(from_factor, to_factor),
        converted_amount=convert_ppp(amount, from_factor, to_factor),
    )
