"""Data models for reinfostats."""

from reinfostats.models.trade import (
    CityRecord,
    PriceStats,
    TradeRecord,
)

__all__ = [
    "TradeRecord",
    "CityRecord",
    "PriceStats",
]
