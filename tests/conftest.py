"""Pytest fixtures and test utilities."""

from typing import Optional

import pytest

from reinfostats.analysis.price_stats import CONDO_TYPE
from reinfostats.collectors.base import DataSourceError, TradeSource
from reinfostats.models.trade import CityRecord, TradeRecord
from reinfostats.storage.cache import ResponseCache


def _make_trade(**overrides: str) -> TradeRecord:
    """Build a condominium trade record with sensible defaults."""
    data = {
        "Type": CONDO_TYPE,
        "TradePrice": "35000000",
        "Area": "70",
        "BuildingYear": "2010",
        "FloorPlan": "3LDK",
        "Prefecture": "東京都",
        "Municipality": "新宿区",
        "DistrictName": "西新宿",
    }
    data.update(overrides)
    return TradeRecord.model_validate(data)


class FakeSource(TradeSource):
    """In-memory TradeSource that records every call."""

    name = "fake"

    def __init__(
        self,
        trades: Optional[dict[str, list[TradeRecord]]] = None,
        cities: Optional[dict[str, list[CityRecord]]] = None,
        failing_cities: Optional[set[str]] = None,
    ):
        self.trades = trades or {}
        self.cities = cities or {}
        self.failing_cities = failing_cities or set()
        self.trade_calls: list[tuple[str, str, Optional[str]]] = []
        self.city_calls: list[str] = []

    async def fetch_trades(self, year, city, quarter=None):
        self.trade_calls.append((year, city, quarter))
        if city in self.failing_cities:
            raise DataSourceError(self.name, f"upstream failure for {city}")
        return list(self.trades.get(city, []))

    async def fetch_cities(self, area):
        self.city_calls.append(area)
        return list(self.cities.get(area, []))


@pytest.fixture
def cache(tmp_path) -> ResponseCache:
    """ResponseCache rooted in a temporary directory."""
    return ResponseCache(cache_dir=tmp_path / "reinfo", ttl_days=7)


@pytest.fixture
def condo_trades() -> list[TradeRecord]:
    """Five condominium trades plus records that must be filtered out."""
    return [
        _make_trade(TradePrice="20000000"),
        _make_trade(TradePrice="30000000"),
        _make_trade(TradePrice="35000000"),
        _make_trade(TradePrice="40000000"),
        _make_trade(TradePrice="50000000"),
        _make_trade(Type="宅地(土地と建物)", TradePrice="90000000"),
        _make_trade(TradePrice=""),
        _make_trade(TradePrice="0"),
    ]


@pytest.fixture
def tokyo_cities() -> list[CityRecord]:
    """Sample municipality list for area 13."""
    return [
        CityRecord(id="13101", name="千代田区"),
        CityRecord(id="13102", name="中央区"),
    ]


@pytest.fixture
def make_trade():
    """Factory for condominium trade records."""
    return _make_trade


@pytest.fixture
def source() -> FakeSource:
    """Empty in-memory source; tests fill in trades and cities."""
    return FakeSource()
