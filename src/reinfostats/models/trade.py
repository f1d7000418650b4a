"""Transaction, municipality and price summary data models."""

from pydantic import BaseModel, ConfigDict, Field


class TradeRecord(BaseModel):
    """A single real-estate transaction as returned by the XIT001 endpoint.

    Field names follow the API's PascalCase keys through aliases so a record
    can be dumped back to exactly the shape it was received in. Unknown keys
    are preserved.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    type: str = Field(..., alias="Type", description="Transaction classification")
    trade_price: str = Field(
        ..., alias="TradePrice", description="Price in JPY as text, may be empty"
    )
    area: str = Field(default="", alias="Area", description="Land/floor area in m2")
    building_year: str = Field(default="", alias="BuildingYear")
    floor_plan: str = Field(default="", alias="FloorPlan")
    prefecture: str = Field(default="", alias="Prefecture")
    municipality: str = Field(default="", alias="Municipality")
    district_name: str = Field(default="", alias="DistrictName")

    # Optional fields, absent on some transaction types
    price_per_unit: str | None = Field(default=None, alias="PricePerUnit")
    nearest_station: str | None = Field(default=None, alias="NearestStation")
    time_to_nearest_station: str | None = Field(
        default=None, alias="TimeToNearestStation"
    )
    total_floor_area: str | None = Field(default=None, alias="TotalFloorArea")
    city_code: str | None = Field(default=None, alias="CityCode")
    prefecture_code: str | None = Field(default=None, alias="PrefectureCode")

    def to_payload(self) -> dict:
        """Dump to the API's JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class CityRecord(BaseModel):
    """A municipality as returned by the XIT002 endpoint."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., description="Municipality code (e.g. 13101)")
    name: str = Field(..., description="Municipality name")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class PriceStats(BaseModel):
    """Price distribution summary for one city and period.

    All prices are in the same unit as the source trade prices (JPY).
    """

    model_config = ConfigDict(frozen=True)

    median: float = Field(..., description="50th percentile price")
    q25: float = Field(..., description="25th percentile price")
    q75: float = Field(..., description="75th percentile price")
    count: int = Field(..., ge=1, description="Number of contributing trades")
    year: str = Field(..., description="Year label the trades were queried for")
