"""Models for the metro fare service.

Field names are snake_case; aliases keep the names used by the station file,
the cache file and the remote ticket API.
"""

from pydantic import BaseModel, ConfigDict, Field


class Station(BaseModel):
    """A metro station from the static station list."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    identifier: str = Field(..., alias="StationSID")
    name: str = Field(..., alias="StationName")


class FareRecord(BaseModel):
    """Fare information for one origin/destination pair."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    origin_id: str = Field(..., alias="StartSID")
    destination_id: str = Field(..., alias="EndSID")
    origin_name: str = Field("", alias="StartStationName")
    destination_name: str = Field("", alias="EndStationName")
    fare_amount: str = Field(..., alias="DeductedFare", description="Fare as decimal digits")
    discount_rate_60: str = Field("", alias="Discount60")
    discount_rate_40: str = Field("", alias="Discount40")
    language: str = Field("", alias="Lang")

    @property
    def key(self) -> tuple:
        """Cache key for this record."""
        return (self.origin_id, self.destination_id)


class FareLineItem(BaseModel):
    """One planned trip in a fare calculation request."""
    model_config = ConfigDict(populate_by_name=True)

    origin_name: str = Field(..., alias="startStationName")
    destination_name: str = Field(..., alias="endStationName")
    round_trip: bool = Field(False, alias="isRoundTrip")
    repeat_count: int = Field(0, ge=0, alias="Trips", description="0 means a single trip")

    @property
    def effective_repeat_count(self) -> int:
        return max(self.repeat_count, 1)


class FareTotalResponse(BaseModel):
    """Response model for fare calculation."""
    total_fare: int = Field(..., alias="totalFare", description="Total fare for all line items")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    detail: str
    code: str
