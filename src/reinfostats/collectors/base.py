"""Abstract base class for transaction data sources.

This module defines the TradeSource abstract base class that the remote
statistics API client implements. The cache layer and the aggregation
pipeline depend only on this interface, so tests and alternative backends
can be dropped in without touching them.

Example usage:
    class MySource(TradeSource):
        name = "my_source"

        async def fetch_trades(self, year, city, quarter=None):
            ...

        async def fetch_cities(self, area):
            ...
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.trade import CityRecord, TradeRecord


class TradeSource(ABC):
    """Abstract base class for real-estate transaction sources.

    Implementations must be idempotent enough that repeated identical calls
    return equivalent data; the response cache relies on this.

    Attributes:
        name: Identifier used in error messages and logs (e.g., "reinfolib")
    """

    name: str

    @abstractmethod
    async def fetch_trades(
        self,
        year: str,
        city: str,
        quarter: Optional[str] = None,
    ) -> list[TradeRecord]:
        """Fetch transaction records for one municipality and period.

        Args:
            year: Four-digit year (e.g., "2024")
            city: Five-digit municipality code (e.g., "13101")
            quarter: Quarter "1"-"4", or None for the whole year

        Returns:
            List of TradeRecord objects, possibly empty

        Raises:
            DataSourceError: If the source is unavailable or request fails
        """
        pass

    @abstractmethod
    async def fetch_cities(self, area: str) -> list[CityRecord]:
        """Fetch the municipalities of a prefecture.

        Args:
            area: Two-digit prefecture code (e.g., "13" for Tokyo)

        Returns:
            List of CityRecord objects

        Raises:
            DataSourceError: If the source is unavailable or request fails
        """
        pass


class DataSourceError(Exception):
    """Base exception for data source errors.

    Attributes:
        source: Name of the data source that raised the error
        message: Error description
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")


class AuthenticationError(DataSourceError):
    """Raised when the source requires credentials that are not configured."""

    def __init__(self, source: str):
        super().__init__(source, "API key is not configured")
