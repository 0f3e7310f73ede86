"""
route_planner/planner.py
Decides whether a trip can be driven without stopping and, if not, picks up
to three charging stations along the way.
"""
from typing import Optional

from monitoring import PLAN_CANDIDATES, PLAN_REQUESTS, get_logger, timed
from route_planner.errors import (
    InvalidInputError,
    NoStationsAvailableError,
    NoSuitableStationError,
    PlanningError,
    RateLimitedError,
)
from route_planner.geo import detour_km, distance_km
from route_planner.models import PlanningConfig, PlanRequest, PlanResult, TripContext
from route_planner.rate_limiter import RateLimiter, TokenBucketRateLimiter
from route_planner.scoring import DEFAULT_WEIGHTS, ScoringWeights, score_station
from station_catalogue.models import Station
from station_catalogue.stores import StationCatalogue

log = get_logger(__name__)

MAX_STOPS = 3


class RoutePlanner:
    """
    Stateless across requests apart from the injected rate limiter.

    Pipeline per call:
      1. admission control (non-blocking rate limiter)
      2. input validation
      3. candidate pool (operational + "Available")
      4. direct-route feasibility against max_battery_percentage
      5. detour filter against max_detour_distance
      6. score, stable sort, keep the best three
    """

    def __init__(
        self,
        catalogue: StationCatalogue,
        config: Optional[PlanningConfig] = None,
        rate_limiter: Optional[RateLimiter] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self._catalogue = catalogue
        self._config = config or PlanningConfig()
        self._rate_limiter = rate_limiter or TokenBucketRateLimiter(self._config.requests_per_second)
        self._weights = weights

    @property
    def config(self) -> PlanningConfig:
        return self._config

    @timed("plan_route")
    def plan_route(self, request: PlanRequest) -> PlanResult:
        try:
            result = self._plan(request)
        except PlanningError as exc:
            PLAN_REQUESTS.labels(outcome=exc.kind).inc()
            log.warning("Route planning rejected", kind=exc.kind, reason=exc.message)
            raise

        PLAN_REQUESTS.labels(outcome="direct" if result.is_direct else "with_stops").inc()
        log.info(
            "Route planned",
            distance_km=round(result.distance, 3),
            battery_kwh=round(result.battery_usage, 3),
            stops=[s.id for s in result.stations],
        )
        return result

    def _plan(self, request: PlanRequest) -> PlanResult:
        if not self._rate_limiter.try_acquire():
            raise RateLimitedError()

        self._validate(request)

        candidates = [s for s in self._catalogue.all_stations() if s.is_available]
        if not candidates:
            raise NoStationsAvailableError()

        distance = distance_km(request.start, request.dest)
        battery_usage = distance / request.efficiency
        battery_fraction = battery_usage / request.battery_capacity

        # Only the upper bound is checked for the direct leg.
        if battery_fraction <= self._config.max_battery_percentage:
            return PlanResult(stations=[], distance=distance, battery_usage=battery_usage)

        reachable = self._within_detour(candidates, request)
        PLAN_CANDIDATES.observe(len(reachable))
        if not reachable:
            raise NoSuitableStationError()

        trip = TripContext.from_request(request, distance)
        ranked = sorted(
            reachable,
            key=lambda s: score_station(s, trip, self._config, self._weights),
        )
        return PlanResult(
            stations=ranked[:MAX_STOPS],
            distance=distance,
            battery_usage=battery_usage,
        )

    def _within_detour(self, stations: list[Station], request: PlanRequest) -> list[Station]:
        limit = self._config.max_detour_distance
        return [
            s for s in stations
            if detour_km(request.start, request.dest, (s.latitude, s.longitude)) <= limit
        ]

    @staticmethod
    def _validate(request: PlanRequest) -> None:
        _validate_point(request.start_latitude, request.start_longitude, "start")
        _validate_point(request.dest_latitude, request.dest_longitude, "destination")
        if not request.battery_capacity > 0:
            raise InvalidInputError("Battery capacity must be greater than 0")
        if not request.efficiency > 0:
            raise InvalidInputError("Car autonomy must be greater than 0")


def _validate_point(latitude: float, longitude: float, point: str) -> None:
    # written as a range test so NaN is rejected too
    if not (-90.0 <= latitude <= 90.0):
        raise InvalidInputError(f"Invalid {point} latitude")
    if not (-180.0 <= longitude <= 180.0):
        raise InvalidInputError(f"Invalid {point} longitude")
