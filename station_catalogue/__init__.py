"""station_catalogue package"""
from .models import AVAILABLE_STATUS, Station, StationFilter
from .stores import InMemoryStationStore, JSONStationStore, StationCatalogue
from .queries import StationNotFoundError, StationQueryService

__all__ = [
    "AVAILABLE_STATUS", "Station", "StationFilter",
    "InMemoryStationStore", "JSONStationStore", "StationCatalogue",
    "StationNotFoundError", "StationQueryService",
]
