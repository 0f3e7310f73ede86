"""
api/routes.py
REST endpoints.
"""
import time
import uuid
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from api.models import (
    ErrorResponse,
    RoutePlanningRequest,
    RoutePlanningResponse,
    StationListResponse,
    StationOut,
)
from config.settings import settings
from route_planner.errors import InvalidInputError, PlanningError
from route_planner.models import PlanningConfig
from route_planner.planner import RoutePlanner
from route_planner.rate_limiter import TokenBucketRateLimiter
from station_catalogue.models import StationFilter
from station_catalogue.queries import StationQueryService
from station_catalogue.stores import JSONStationStore

router = APIRouter()

_config    = PlanningConfig.from_settings(settings)
_catalogue = JSONStationStore()
_planner   = RoutePlanner(
    catalogue=_catalogue,
    config=_config,
    rate_limiter=TokenBucketRateLimiter(_config.requests_per_second),
)
_queries   = StationQueryService(_catalogue)

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input or no suitable station"},
    404: {"model": ErrorResponse, "description": "Station not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    503: {"model": ErrorResponse, "description": "No charging stations available"},
}


def _errors(*codes: int) -> dict:
    return {code: _ERRORS[code] for code in codes}


def _log():
    from monitoring import get_logger
    return get_logger(__name__)


def _station_list(stations) -> StationListResponse:
    return StationListResponse(
        count=len(stations),
        stations=[StationOut.from_station(s) for s in stations],
    )


#POST /stations/plan-route

@router.post(
    "/stations/plan-route",
    response_model=RoutePlanningResponse,
    responses=_errors(400, 429, 503),
    summary="Plan charging stops for a trip",
    description="""
Decide whether a trip can be driven on the current battery and, if not,
suggest up to three charging stations close to the straight-line route.

```json
{ "startLatitude": 41.1579, "startLongitude": -8.6291,
  "destLatitude": 38.7223, "destLongitude": -9.1393,
  "batteryCapacity": 50, "carAutonomy": 5 }
```

An empty `stations` list means no stop is needed.
""",
)
async def plan_route(request: RoutePlanningRequest) -> RoutePlanningResponse:
    log = _log()
    request_id = str(uuid.uuid4())[:8]
    t0 = time.perf_counter()

    log.info(
        "Route planning request",
        request_id=request_id,
        start=(request.start_latitude, request.start_longitude),
        dest=(request.dest_latitude, request.dest_longitude),
    )

    try:
        result = await run_in_threadpool(_planner.plan_route, request.to_plan_request())
    except PlanningError:
        raise
    except Exception as exc:
        log.error("Route planning failed", error=str(exc), request_id=request_id)
        raise HTTPException(status_code=500, detail=str(exc))

    log.info(
        "Route planning complete",
        request_id=request_id,
        elapsed_ms=round((time.perf_counter() - t0) * 1000),
        stops=len(result.stations),
    )
    return RoutePlanningResponse.from_result(result)


#GET /stations

@router.get("/stations", response_model=StationListResponse, summary="Search stations")
async def search_stations(
    name: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
    min_chargers: Optional[int] = Query(default=None, alias="minChargers"),
) -> StationListResponse:
    stations = await run_in_threadpool(_queries.search, name, city, country, min_chargers)
    return _station_list(stations)


#GET /stations/nearby

@router.get(
    "/stations/nearby",
    response_model=StationListResponse,
    responses=_errors(400),
    summary="Stations within a radius",
)
async def nearby_stations(
    latitude: float,
    longitude: float,
    radius: float = Query(..., description="Search radius in km"),
) -> StationListResponse:
    try:
        stations = await run_in_threadpool(_queries.nearby, latitude, longitude, radius)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc
    return _station_list(stations)


#GET /stations/filter

@router.get(
    "/stations/filter",
    response_model=StationListResponse,
    responses=_errors(400),
    summary="Filter stations",
)
async def filter_stations(
    min_power: Optional[float] = Query(default=None, alias="minPower"),
    max_power: Optional[float] = Query(default=None, alias="maxPower"),
    is_operational: Optional[bool] = Query(default=None, alias="isOperational"),
    status: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
    min_price: Optional[float] = Query(default=None, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, alias="maxPrice"),
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    radius: Optional[float] = None,
) -> StationListResponse:
    criteria = StationFilter(
        min_power=min_power, max_power=max_power, operational=is_operational,
        status=status, city=city, country=country,
        min_price=min_price, max_price=max_price,
        latitude=latitude, longitude=longitude, radius_km=radius,
    )
    try:
        stations = await run_in_threadpool(_queries.filter, criteria)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc
    return _station_list(stations)


#GET /stations/count

@router.get("/stations/count", summary="Total number of stations")
async def station_count() -> dict:
    return {"count": await run_in_threadpool(_queries.count)}


#GET /stations/external/{external_id}, /stations/{station_id}

@router.get(
    "/stations/external/{external_id}",
    response_model=StationOut,
    responses=_errors(404),
    summary="Station by upstream provider id",
)
async def station_by_external_id(external_id: str) -> StationOut:
    station = await run_in_threadpool(_queries.by_external_id, external_id)
    return StationOut.from_station(station)


@router.get(
    "/stations/{station_id}",
    response_model=StationOut,
    responses=_errors(404),
    summary="Station by id",
)
async def station_by_id(station_id: str) -> StationOut:
    station = await run_in_threadpool(_queries.get, station_id)
    return StationOut.from_station(station)


#GET /health

@router.get("/health", summary="Health check")
async def health() -> dict:
    stations = await run_in_threadpool(_catalogue.all_stations)
    return {
        "status": "healthy",
        "catalogue": {
            "loaded":    len(stations) > 0,
            "stations":  len(stations),
            "available": sum(1 for s in stations if s.is_available),
        },
        "route_planning": {
            "min_battery_percentage": _config.min_battery_percentage,
            "max_battery_percentage": _config.max_battery_percentage,
            "max_detour_distance_km": _config.max_detour_distance,
            "requests_per_second":    _config.requests_per_second,
        },
    }
