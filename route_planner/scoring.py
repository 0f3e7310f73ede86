"""
route_planner/scoring.py
Charging-stop heuristic.  Lower score is better.

  score = detour_ratio × 100
        − power_kw × 0.1
        + 1000  if the car would arrive below the minimum state of charge
        + 500   if it would still be above the maximum (stop is too early)
        − charger_count × 10
"""
from dataclasses import dataclass

from route_planner.geo import distance_km, via_distance_km
from route_planner.models import PlanningConfig, TripContext
from station_catalogue.models import Station


@dataclass(frozen=True)
class ScoringWeights:
    detour_ratio_weight: float = 100.0
    power_weight: float = 0.1
    charger_weight: float = 10.0
    low_battery_penalty: float = 1000.0
    high_battery_penalty: float = 500.0


DEFAULT_WEIGHTS = ScoringWeights()


def battery_at_station(station: Station, trip: TripContext) -> float:
    """kWh left on arrival, assuming the trip started on a full battery."""
    leg = distance_km(trip.start, (station.latitude, station.longitude))
    return trip.battery_capacity - leg / trip.efficiency


def score_station(
    station: Station,
    trip: TripContext,
    config: PlanningConfig,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    via = via_distance_km(trip.start, trip.dest, (station.latitude, station.longitude))

    # direct_distance is 0 only for trips the planner answers before scoring
    ratio = via / trip.direct_distance if trip.direct_distance > 0 else 1.0
    score = ratio * weights.detour_ratio_weight

    score -= station.power_kw * weights.power_weight

    remaining = battery_at_station(station, trip)
    if remaining < config.min_battery_percentage * trip.battery_capacity:
        score += weights.low_battery_penalty
    elif remaining > config.max_battery_percentage * trip.battery_capacity:
        score += weights.high_battery_penalty

    score -= station.charger_count * weights.charger_weight
    return score
