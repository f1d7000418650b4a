"""Transaction data sources.

Main Components:
    - TradeSource: Abstract base class for transaction sources
    - ReinfolibClient: httpx client for the MLIT reinfolib API

Example usage:
    from reinfostats.collectors import ReinfolibClient

    async with ReinfolibClient() as client:
        trades = await client.fetch_trades(year="2024", city="13101")
"""

from .base import AuthenticationError, DataSourceError, TradeSource
from .reinfolib import ReinfolibClient

__all__ = [
    "TradeSource",
    "DataSourceError",
    "AuthenticationError",
    "ReinfolibClient",
]
