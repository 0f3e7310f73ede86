"""route_planner package"""
from .errors import (
    PlanningError, InvalidInputError, RateLimitedError,
    NoStationsAvailableError, NoSuitableStationError,
)
from .geo import haversine_km, detour_km
from .models import PlanRequest, PlanResult, PlanningConfig, TripContext
from .rate_limiter import RateLimiter, TokenBucketRateLimiter
from .scoring import ScoringWeights, DEFAULT_WEIGHTS, score_station
from .planner import RoutePlanner
__all__ = [
    "PlanningError","InvalidInputError","RateLimitedError",
    "NoStationsAvailableError","NoSuitableStationError",
    "haversine_km","detour_km",
    "PlanRequest","PlanResult","PlanningConfig","TripContext",
    "RateLimiter","TokenBucketRateLimiter",
    "ScoringWeights","DEFAULT_WEIGHTS","score_station",
    "RoutePlanner",
]
