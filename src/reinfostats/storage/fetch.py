"""Cache-through fetch operations.

Each operation returns either the cached payload or the source's live
result, never a mixture. Source errors and cache write errors propagate.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..collectors.base import TradeSource
from ..models.trade import CityRecord, TradeRecord
from .cache import ResponseCache, city_cache_key, trade_cache_key

logger = logging.getLogger(__name__)


def _load_trades(payload: object) -> Optional[list[TradeRecord]]:
    if not isinstance(payload, list):
        return None
    try:
        return [TradeRecord.model_validate(item) for item in payload]
    except ValidationError:
        return None


def _load_cities(payload: object) -> Optional[list[CityRecord]]:
    if not isinstance(payload, list):
        return None
    try:
        return [CityRecord.model_validate(item) for item in payload]
    except ValidationError:
        return None


async def fetch_trades_with_cache(
    source: TradeSource,
    cache: ResponseCache,
    year: str,
    city: str,
    quarter: Optional[str] = None,
) -> list[TradeRecord]:
    """Fetch trades for a city, reading from the cache when fresh.

    Args:
        source: Remote transaction source
        cache: Response cache
        year: Four-digit year
        city: Municipality code
        quarter: Optional quarter "1"-"4"

    Returns:
        List of TradeRecord objects
    """
    key = trade_cache_key(city, year, quarter)
    cached = _load_trades(cache.get(key))
    if cached is not None:
        return cached

    trades = await source.fetch_trades(year=year, city=city, quarter=quarter)
    cache.put(key, [t.to_payload() for t in trades])
    return trades


async def fetch_cities_with_cache(
    source: TradeSource,
    cache: ResponseCache,
    area: str,
) -> list[CityRecord]:
    """Fetch the municipality list for an area, reading from the cache when fresh."""
    key = city_cache_key(area)
    cached = _load_cities(cache.get(key))
    if cached is not None:
        return cached

    cities = await source.fetch_cities(area)
    cache.put(key, [c.to_payload() for c in cities])
    return cities
