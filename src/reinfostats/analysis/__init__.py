"""Price analysis modules.

This package reduces raw transaction records to price distribution
summaries and aggregates them across municipalities.
"""

from .pipeline import PriceDataBuilder, build_price_data
from .price_stats import (
    CONDO_TYPE,
    calculate_price_stats,
    filter_condo_trades,
    parse_trade_prices,
    quantile,
)

__all__ = [
    "CONDO_TYPE",
    "PriceDataBuilder",
    "build_price_data",
    "calculate_price_stats",
    "filter_condo_trades",
    "parse_trade_prices",
    "quantile",
]
