"""
route_planner/models.py
Request, result and configuration types for the route planner.
"""
from dataclasses import dataclass, field

from route_planner.geo import LatLon
from station_catalogue.models import Station


@dataclass(frozen=True)
class PlanRequest:
    """
    Trip to plan.  Typed but not range-checked: the planner validates
    coordinates and energy values itself.
    """
    start_latitude: float
    start_longitude: float
    dest_latitude: float
    dest_longitude: float
    battery_capacity: float    # kWh
    efficiency: float          # km per kWh ("car autonomy")

    @property
    def start(self) -> LatLon:
        return (self.start_latitude, self.start_longitude)

    @property
    def dest(self) -> LatLon:
        return (self.dest_latitude, self.dest_longitude)


@dataclass
class PlanResult:
    """Up to three ranked stations; empty when the direct route suffices."""
    stations: list[Station] = field(default_factory=list)
    distance: float = 0.0          # km, direct great-circle
    battery_usage: float = 0.0     # kWh for the direct leg

    @property
    def is_direct(self) -> bool:
        return not self.stations


@dataclass(frozen=True)
class PlanningConfig:
    min_battery_percentage: float = 0.2
    max_battery_percentage: float = 0.8
    max_detour_distance: float = 20.0     # km
    requests_per_second: float = 10.0

    def __post_init__(self) -> None:
        for name in ("min_battery_percentage", "max_battery_percentage"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.min_battery_percentage > self.max_battery_percentage:
            raise ValueError("min_battery_percentage cannot exceed max_battery_percentage")
        if self.max_detour_distance < 0:
            raise ValueError("max_detour_distance cannot be negative")
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be greater than 0")

    @classmethod
    def from_settings(cls, settings) -> "PlanningConfig":
        return cls(
            min_battery_percentage=settings.min_battery_percentage,
            max_battery_percentage=settings.max_battery_percentage,
            max_detour_distance=settings.max_detour_distance,
            requests_per_second=settings.requests_per_second,
        )


@dataclass(frozen=True)
class TripContext:
    """Per-request values the station score depends on."""
    start: LatLon
    dest: LatLon
    direct_distance: float
    battery_capacity: float
    efficiency: float

    @classmethod
    def from_request(cls, request: PlanRequest, direct_distance: float) -> "TripContext":
        return cls(
            start=request.start,
            dest=request.dest,
            direct_distance=direct_distance,
            battery_capacity=request.battery_capacity,
            efficiency=request.efficiency,
        )
