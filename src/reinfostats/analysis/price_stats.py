"""Condominium price distribution statistics.

Pure functions that reduce raw trade records to median / quartile summaries.
Quantiles use linear interpolation between the bracketing order statistics
(the same definition as numpy's default "linear" method).
"""

import math
import re
from typing import Iterable, Optional, Sequence

from ..models.trade import PriceStats, TradeRecord

# Transaction type label for pre-owned condominiums
CONDO_TYPE = "中古マンション等"

QUARTILES = (0.25, 0.5, 0.75)

# Plain decimal with optional exponent; no digit separators
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def filter_condo_trades(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Keep only pre-owned condominium trades (exact label match)."""
    return [t for t in trades if t.type == CONDO_TYPE]


def parse_price(raw: str) -> Optional[float]:
    """Parse an API price string.

    Returns None for empty, non-numeric, non-finite or non-positive values.
    """
    text = (raw or "").strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    price = float(text)
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def parse_trade_prices(trades: Iterable[TradeRecord]) -> list[float]:
    """Convert trade prices to numbers, dropping invalid and zero prices."""
    prices = []
    for trade in trades:
        price = parse_price(trade.trade_price)
        if price is not None:
            prices.append(price)
    return prices


def quantile(sorted_values: Sequence[float], p: float) -> float:
    """Quantile of an ascending, non-empty sequence by linear interpolation.

    Args:
        sorted_values: Values sorted ascending
        p: Probability in [0, 1]

    Returns:
        Interpolated value at p
    """
    if len(sorted_values) == 1:
        return float(sorted_values[0])

    index = p * (len(sorted_values) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    fraction = index - lower
    low = float(sorted_values[lower])
    return low + fraction * (float(sorted_values[upper]) - low)


def calculate_price_stats(
    prices: Sequence[float], year: str
) -> Optional[PriceStats]:
    """Calculate median, Q25 and Q75 of a price list.

    Args:
        prices: Valid prices, in any order
        year: Year label carried into the result

    Returns:
        PriceStats, or None when prices is empty
    """
    if not prices:
        return None

    ordered = sorted(prices)
    q25, median, q75 = (quantile(ordered, p) for p in QUARTILES)

    return PriceStats(
        median=median,
        q25=q25,
        q75=q75,
        count=len(ordered),
        year=year,
    )
