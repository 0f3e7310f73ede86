"""
station_catalogue/queries.py
Read-only lookups over a station catalogue: nearby, text search and
multi-criteria filtering.  Results keep catalogue order and are capped at
`max_results`.
"""
from itertools import islice
from typing import Iterable, Optional

from config.settings import settings
from monitoring import get_logger
from route_planner.geo import haversine_km
from station_catalogue.models import Station, StationFilter
from station_catalogue.stores import StationCatalogue

log = get_logger(__name__)


class StationNotFoundError(LookupError):
    kind = "StationNotFound"
    status_code = 404

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StationQueryService:

    def __init__(
        self,
        catalogue: StationCatalogue,
        max_results: int = settings.max_search_results,
        max_radius_km: float = settings.max_nearby_radius_km,
    ) -> None:
        self._catalogue = catalogue
        self._max_results = max_results
        self._max_radius_km = max_radius_km

    def count(self) -> int:
        return len(self._catalogue.all_stations())

    def get(self, station_id: str) -> Station:
        for s in self._catalogue.all_stations():
            if s.id == str(station_id):
                return s
        raise StationNotFoundError(f"Station not found with id: {station_id}")

    def by_external_id(self, external_id: str) -> Station:
        """Lookup by the id assigned by an upstream provider (e.g. OpenChargeMap)."""
        for s in self._catalogue.all_stations():
            if s.external_id == external_id:
                return s
        raise StationNotFoundError(f"Station not found with external id: {external_id}")

    def nearby(self, latitude: float, longitude: float, radius_km: float) -> list[Station]:
        """Stations within `radius_km` (great-circle) of the given point."""
        if not -90 <= latitude <= 90:
            raise ValueError("Latitude must be between -90 and 90 degrees")
        if not -180 <= longitude <= 180:
            raise ValueError("Longitude must be between -180 and 180 degrees")
        if radius_km <= 0:
            raise ValueError("Radius must be greater than 0 km")
        if radius_km > self._max_radius_km:
            raise ValueError(f"Radius cannot be greater than {self._max_radius_km:g} km")

        matches = (
            s for s in self._catalogue.all_stations()
            if haversine_km(latitude, longitude, s.latitude, s.longitude) <= radius_km
        )
        result = self._limit(matches)
        log.debug("Nearby lookup", lat=latitude, lon=longitude, radius=radius_km, found=len(result))
        return result

    def search(
        self,
        name: Optional[str] = None,
        city: Optional[str] = None,
        country: Optional[str] = None,
        min_chargers: Optional[int] = None,
    ) -> list[Station]:
        """Case-insensitive substring match on each text field that is given."""
        def keep(s: Station) -> bool:
            if not _contains(s.name, name):
                return False
            if not _contains(s.city, city):
                return False
            if not _contains(s.country, country):
                return False
            if min_chargers is not None and min_chargers > 0 and s.charger_count < min_chargers:
                return False
            return True

        return self._limit(s for s in self._catalogue.all_stations() if keep(s))

    def filter(self, criteria: StationFilter) -> list[Station]:
        if criteria.radius_km is not None and criteria.radius_km < 0:
            raise ValueError("Radius must be positive")

        def keep(s: Station) -> bool:
            if criteria.min_power is not None and s.power_kw < criteria.min_power:
                return False
            if criteria.max_power is not None and s.power_kw > criteria.max_power:
                return False
            if criteria.operational is not None and s.operational != criteria.operational:
                return False
            if criteria.status and s.status.lower() != criteria.status.lower():
                return False
            if not _contains(s.city, criteria.city) or not _contains(s.country, criteria.country):
                return False
            if criteria.min_price is not None and (s.price_per_kwh is None or s.price_per_kwh < criteria.min_price):
                return False
            if criteria.max_price is not None and (s.price_per_kwh is None or s.price_per_kwh > criteria.max_price):
                return False
            if criteria.has_location:
                d = haversine_km(criteria.latitude, criteria.longitude, s.latitude, s.longitude)
                if d > criteria.radius_km:
                    return False
            return True

        return self._limit(s for s in self._catalogue.all_stations() if keep(s))

    def _limit(self, stations: Iterable[Station]) -> list[Station]:
        return list(islice(stations, self._max_results))


def _contains(value: str, needle: Optional[str]) -> bool:
    if needle is None or not needle.strip():
        return True
    return needle.strip().lower() in (value or "").lower()
