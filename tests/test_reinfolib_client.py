"""Tests for ReinfolibClient."""

import httpx
import pytest

from reinfostats.collectors import AuthenticationError, DataSourceError, ReinfolibClient
from reinfostats.models.trade import CityRecord

BASE_URL = "https://reinfolib.test/ex-api/external"


def make_client(handler, api_key: str = "secret") -> ReinfolibClient:
    return ReinfolibClient(
        api_key=api_key,
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


class TestFetchTrades:
    """Test XIT001 requests."""

    @pytest.mark.asyncio
    async def test_request_and_parse(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "status": "OK",
                "data": [
                    {
                        "Type": "中古マンション等",
                        "TradePrice": "42000000",
                        "Municipality": "千代田区",
                        "Period": "2024年第1四半期",
                    },
                ],
            })

        async with make_client(handler) as client:
            trades = await client.fetch_trades(year="2024", city="13101")

        request = seen[0]
        assert request.url.path == "/ex-api/external/XIT001"
        assert dict(request.url.params) == {"year": "2024", "city": "13101"}
        assert request.headers["Ocp-Apim-Subscription-Key"] == "secret"

        assert len(trades) == 1
        assert trades[0].trade_price == "42000000"
        assert trades[0].municipality == "千代田区"
        assert trades[0].to_payload()["Period"] == "2024年第1四半期"

    @pytest.mark.asyncio
    async def test_quarter_param(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "OK", "data": []})

        async with make_client(handler) as client:
            assert await client.fetch_trades(year="2024", city="13101", quarter="2") == []

        assert seen[0].url.params["quarter"] == "2"

    @pytest.mark.asyncio
    async def test_empty_quarter_not_sent(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "OK", "data": []})

        async with make_client(handler) as client:
            await client.fetch_trades(year="2024", city="13101", quarter="")

        assert "quarter" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429)

        async with make_client(handler) as client:
            with pytest.raises(DataSourceError, match="429"):
                await client.fetch_trades(year="2024", city="13101")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(DataSourceError):
                await client.fetch_trades(year="2024", city="13101")

    @pytest.mark.asyncio
    async def test_missing_data_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "ERROR"})

        async with make_client(handler) as client:
            with pytest.raises(DataSourceError, match="data list"):
                await client.fetch_trades(year="2024", city="13101")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler, api_key="")
        with pytest.raises(AuthenticationError):
            await client.fetch_trades(year="2024", city="13101")
        await client.close()


class TestFetchCities:
    """Test XIT002 requests."""

    @pytest.mark.asyncio
    async def test_request_and_parse(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "status": "OK",
                "data": [{"id": "13101", "name": "千代田区"}],
            })

        async with make_client(handler) as client:
            cities = await client.fetch_cities("13")

        assert seen[0].url.path == "/ex-api/external/XIT002"
        assert seen[0].url.params["area"] == "13"
        assert cities == [CityRecord(id="13101", name="千代田区")]

    @pytest.mark.asyncio
    async def test_malformed_record(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "OK", "data": [{"id": "13101"}]})

        async with make_client(handler) as client:
            with pytest.raises(DataSourceError, match="Malformed"):
                await client.fetch_cities("13")
