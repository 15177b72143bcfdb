"""Display price and market availability for a battery."""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from ..config.rules import MARKETS, MISSING_PLACEHOLDER, PRICE_PREFERENCE
from .models import Battery


class PriceQuote(NamedTuple):
    amount: float
    currency: str


def resolve_price(battery: Battery) -> Optional[PriceQuote]:
    """US price in dollars, else NL price in euros, else None.

    The two amounts are alternative display choices; nothing is converted.
    """
    for column, currency in PRICE_PREFERENCE:
        amount = getattr(battery, column)
        if amount is not None:
            return PriceQuote(float(amount), currency)
    return None


def format_price(battery: Battery) -> str:
    quote = resolve_price(battery)
    if quote is None:
        return MISSING_PLACEHOLDER
    amount = quote.amount
    if amount.is_integer():
        return f"{quote.currency}{amount:,.0f}"
    return f"{quote.currency}{amount:,.2f}"


def availability_tags(battery: Battery) -> List[str]:
    return [tag for tag, column in MARKETS if getattr(battery, column)]
