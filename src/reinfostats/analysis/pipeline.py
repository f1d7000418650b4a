"""Multi-city condominium price aggregation.

This module provides the PriceDataBuilder class which walks a list of
municipality codes one at a time, fetches each city's trades through the
response cache, and reduces them to PriceStats. A fixed delay is inserted
between cities to stay under the remote API's rate limit.
"""

import asyncio
import logging
from typing import Iterable, Optional

from ..collectors.base import TradeSource
from ..config import config
from ..models.trade import PriceStats
from ..storage.cache import ResponseCache
from ..storage.fetch import fetch_cities_with_cache, fetch_trades_with_cache
from .price_stats import calculate_price_stats, filter_condo_trades, parse_trade_prices

logger = logging.getLogger(__name__)


class PriceDataBuilder:
    """Builds per-city condominium price statistics.

    Cities are processed strictly in order and never concurrently. A failure
    for any city (source error or cache write error) aborts the whole run;
    there is no partial result.

    Example:
        async with ReinfolibClient() as client:
            builder = PriceDataBuilder(client, ResponseCache())
            stats = await builder.build(["13101", "13102"], year="2024")
            for code, s in stats.items():
                print(code, s.median)
    """

    def __init__(
        self,
        source: TradeSource,
        cache: Optional[ResponseCache] = None,
        inter_city_delay: Optional[float] = None,
    ):
        """Initialize the builder.

        Args:
            source: Remote transaction source
            cache: Response cache. Defaults to one built from settings.
            inter_city_delay: Seconds to wait between cities
                              (default from settings, 0.2)
        """
        self.source = source
        self.cache = cache or ResponseCache.from_settings(config)
        self.inter_city_delay = (
            config.inter_city_delay if inter_city_delay is None else inter_city_delay
        )

    async def _pace(self) -> None:
        """Wait the fixed inter-city interval."""
        await asyncio.sleep(self.inter_city_delay)

    async def city_stats(
        self, city: str, year: str, quarter: Optional[str] = None
    ) -> Optional[PriceStats]:
        """Fetch and reduce one city's trades.

        Returns:
            PriceStats, or None when no valid condominium prices exist
        """
        trades = await fetch_trades_with_cache(
            self.source, self.cache, year=year, city=city, quarter=quarter
        )
        prices = parse_trade_prices(filter_condo_trades(trades))
        return calculate_price_stats(prices, year)

    async def build(
        self,
        city_codes: Iterable[str],
        year: str,
        quarter: Optional[str] = None,
    ) -> dict[str, PriceStats]:
        """Build the price stats map for a list of cities.

        Args:
            city_codes: Municipality codes, processed in the given order
            year: Four-digit year
            quarter: Optional quarter "1"-"4"

        Returns:
            Dict of city code -> PriceStats in input order. Cities without
            valid condominium prices are omitted.
        """
        result: dict[str, PriceStats] = {}

        for i, code in enumerate(city_codes):
            if i > 0:
                await self._pace()

            stats = await self.city_stats(code, year, quarter)
            if stats is None:
                logger.info(f"{code}: no condominium trades for {year}")
                continue

            logger.info(f"{code}: {stats.count} trades, median {stats.median:,.0f}")
            result[code] = stats

        return result

    async def build_for_area(
        self,
        area: str,
        year: str,
        quarter: Optional[str] = None,
    ) -> dict[str, PriceStats]:
        """Build the price stats map for every municipality in a prefecture.

        Args:
            area: Two-digit prefecture code (e.g., "13")
            year: Four-digit year
            quarter: Optional quarter "1"-"4"
        """
        cities = await fetch_cities_with_cache(self.source, self.cache, area)
        logger.info(f"Area {area}: {len(cities)} municipalities")
        return await self.build([c.id for c in cities], year, quarter)


async def build_price_data(
    source: TradeSource,
    cache: ResponseCache,
    city_codes: Iterable[str],
    year: str,
    quarter: Optional[str] = None,
    inter_city_delay: Optional[float] = None,
) -> dict[str, PriceStats]:
    """Build per-city price stats with a fixed delay between cities.

    The delay defaults to the configured inter_city_delay (0.2s).
    """
    builder = PriceDataBuilder(source, cache, inter_city_delay=inter_city_delay)
    return await builder.build(city_codes, year, quarter)
