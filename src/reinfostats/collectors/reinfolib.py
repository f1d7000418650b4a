"""MLIT Real Estate Information Library (reinfolib) API client.

Fetches transaction price records (XIT001) and municipality lists (XIT002)
from the reinfolib external API. A subscription key is required and is sent
in the Ocp-Apim-Subscription-Key header.

Data source: https://www.reinfolib.mlit.go.jp/
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings, config
from ..models.trade import CityRecord, TradeRecord
from .base import AuthenticationError, DataSourceError, TradeSource

logger = logging.getLogger(__name__)

# Endpoint IDs
TRADES_ENDPOINT = "XIT001"
CITIES_ENDPOINT = "XIT002"


class ReinfolibClient(TradeSource):
    """Client for the reinfolib external API.

    Example:
        async with ReinfolibClient(api_key="...") as client:
            trades = await client.fetch_trades(year="2024", city="13101")
            cities = await client.fetch_cities(area="13")
    """

    name = "reinfolib"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Subscription key. Defaults to REINFO_API_KEY.
            base_url: API base URL. Defaults to the configured base URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used for testing).
        """
        self.api_key = api_key if api_key is not None else config.api_key
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.timeout = timeout or config.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReinfolibClient":
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ReinfolibClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_data(self, endpoint: str, params: dict[str, str]) -> list[dict]:
        """GET an endpoint and return the "data" list of its JSON body."""
        if not self.api_key:
            raise AuthenticationError(self.name)

        client = await self._get_client()
        url = f"{self.base_url}/{endpoint}"

        try:
            resp = await client.get(
                url,
                params=params,
                headers={"Ocp-Apim-Subscription-Key": self.api_key},
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DataSourceError(
                self.name, f"HTTP error {e.response.status_code} from {endpoint}"
            ) from e
        except httpx.RequestError as e:
            raise DataSourceError(self.name, f"Request to {endpoint} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise DataSourceError(self.name, f"Invalid JSON from {endpoint}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise DataSourceError(self.name, f"Missing data list in {endpoint} response")

        logger.debug(f"{endpoint} {params} returned {len(data)} records")
        return data

    async def fetch_trades(
        self,
        year: str,
        city: str,
        quarter: Optional[str] = None,
    ) -> list[TradeRecord]:
        """Fetch transaction records for a municipality (XIT001)."""
        params = {"year": str(year), "city": str(city)}
        if quarter:
            params["quarter"] = str(quarter)

        data = await self._get_data(TRADES_ENDPOINT, params)
        try:
            return [TradeRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise DataSourceError(self.name, f"Malformed trade record: {e}") from e

    async def fetch_cities(self, area: str) -> list[CityRecord]:
        """Fetch the municipality list for a prefecture (XIT002)."""
        data = await self._get_data(CITIES_ENDPOINT, {"area": str(area)})
        try:
            return [CityRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise DataSourceError(self.name, f"Malformed city record: {e}") from e
