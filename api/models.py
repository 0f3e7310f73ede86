"""
api/models.py
Pydantic request/response models.

Field names are snake_case; the camelCase names used by existing station-service
clients (startLatitude, carAutonomy, batteryUsage, ...) are accepted as
aliases and used on output.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from route_planner.models import PlanRequest, PlanResult
from station_catalogue.models import Station


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RoutePlanningRequest(_CamelModel):
    # Typed only: coordinate ranges and positivity are checked by the planner
    start_latitude:   float = Field(..., alias="startLatitude",  description="Start latitude (degrees)")
    start_longitude:  float = Field(..., alias="startLongitude", description="Start longitude (degrees)")
    dest_latitude:    float = Field(..., alias="destLatitude",   description="Destination latitude (degrees)")
    dest_longitude:   float = Field(..., alias="destLongitude",  description="Destination longitude (degrees)")
    battery_capacity: float = Field(..., alias="batteryCapacity", description="Battery capacity in kWh")
    car_autonomy:     float = Field(..., alias="carAutonomy",    description="Vehicle efficiency in km per kWh")

    def to_plan_request(self) -> PlanRequest:
        return PlanRequest(
            start_latitude=self.start_latitude,
            start_longitude=self.start_longitude,
            dest_latitude=self.dest_latitude,
            dest_longitude=self.dest_longitude,
            battery_capacity=self.battery_capacity,
            efficiency=self.car_autonomy,
        )


class StationOut(_CamelModel):
    id:              str
    name:            str
    address:         str
    city:            str
    country:         str
    latitude:        float
    longitude:       float
    status:          str
    is_operational:  bool            = Field(..., alias="isOperational")
    quantity_of_chargers: int        = Field(..., alias="quantityOfChargers")
    power:           float
    price:           Optional[float] = None
    external_id:     Optional[str]   = Field(default=None, alias="externalId")

    @classmethod
    def from_station(cls, s: Station) -> "StationOut":
        return cls(
            id=s.id,
            name=s.name,
            address=s.address,
            city=s.city,
            country=s.country,
            latitude=s.latitude,
            longitude=s.longitude,
            status=s.status,
            is_operational=s.operational,
            quantity_of_chargers=s.charger_count,
            power=s.power_kw,
            price=s.price_per_kwh,
            external_id=s.external_id,
        )


class RoutePlanningResponse(_CamelModel):
    stations:      list[StationOut]
    distance:      float
    battery_usage: float = Field(..., alias="batteryUsage")
    timestamp:     str   = Field(default_factory=lambda: datetime.utcnow().isoformat())

    @classmethod
    def from_result(cls, result: PlanResult) -> "RoutePlanningResponse":
        return cls(
            stations=[StationOut.from_station(s) for s in result.stations],
            distance=result.distance,
            battery_usage=result.battery_usage,
        )


class StationListResponse(BaseModel):
    count:    int
    stations: list[StationOut]


class ErrorResponse(BaseModel):
    success:    bool          = False
    error:      str
    detail:     Optional[str] = None
