"""Storage modules for API response persistence.

This package provides a disk-backed TTL cache for raw API responses
to avoid redundant API calls across report runs.
"""

from .cache import ResponseCache, city_cache_key, trade_cache_key
from .fetch import fetch_cities_with_cache, fetch_trades_with_cache

__all__ = [
    "ResponseCache",
    "city_cache_key",
    "trade_cache_key",
    "fetch_cities_with_cache",
    "fetch_trades_with_cache",
]
