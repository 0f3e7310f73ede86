"""
tests/test_geo_and_scoring.py
Unit tests for the Haversine helpers and the charging-stop score.
Run with: pytest tests/ -v
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from route_planner.geo import detour_km, distance_km, haversine_km, via_distance_km
from route_planner.models import PlanningConfig, TripContext
from route_planner.scoring import ScoringWeights, battery_at_station, score_station
from station_catalogue.models import Station

PORTO  = (41.1579, -8.6291)
LISBON = (38.7223, -9.1393)
MADRID = (40.4168, -3.7038)

# Trip along the -8° meridian: 2° of latitude ≈ 222.4 km
SOUTH = (40.0, -8.0)
NORTH = (42.0, -8.0)
ON_ROUTE = (41.0, -8.0)


def _station(lat: float, lon: float, **kw) -> Station:
    kw.setdefault("id", f"S-{lat}-{lon}")
    return Station(latitude=lat, longitude=lon, **kw)


def _trip(capacity: float, efficiency: float) -> TripContext:
    return TripContext(
        start=SOUTH,
        dest=NORTH,
        direct_distance=distance_km(SOUTH, NORTH),
        battery_capacity=capacity,
        efficiency=efficiency,
    )


#Haversine

class TestHaversine:

    def test_porto_lisbon(self):
        d = distance_km(PORTO, LISBON)
        assert 270 < d < 280

    def test_short_hop_in_porto(self):
        d = haversine_km(41.1579, -8.6291, 41.1479, -8.6191)
        assert 1.2 < d < 1.5

    def test_one_degree_of_latitude(self):
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.195, abs=0.01)

    @pytest.mark.parametrize("a,b", [(PORTO, LISBON), (LISBON, MADRID), ((-33.9, 18.4), (51.5, -0.1))])
    def test_symmetric(self, a, b):
        assert distance_km(a, b) == pytest.approx(distance_km(b, a), rel=1e-12)

    @pytest.mark.parametrize("p", [PORTO, (0.0, 0.0), (90.0, 180.0), (-45.5, -120.25)])
    def test_zero_distance(self, p):
        assert distance_km(p, p) == 0

    def test_antipodes_half_circumference(self):
        assert haversine_km(0, 0, 0, 180) == pytest.approx(20015.09, abs=0.1)


#Detour

class TestDetour:

    def test_point_on_route_has_no_detour(self):
        assert detour_km(SOUTH, NORTH, ON_ROUTE) == pytest.approx(0, abs=1e-6)

    def test_endpoints_have_no_detour(self):
        assert detour_km(PORTO, LISBON, PORTO) == pytest.approx(0, abs=1e-9)
        assert detour_km(PORTO, LISBON, LISBON) == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize("via", [MADRID, (41.0, -7.82), (0.0, 0.0), (-60.0, 100.0), ON_ROUTE])
    def test_never_negative(self, via):
        assert detour_km(SOUTH, NORTH, via) >= -1e-9

    def test_grows_with_lateral_offset(self):
        near = detour_km(SOUTH, NORTH, (41.0, -7.82))
        far  = detour_km(SOUTH, NORTH, (41.0, -7.06))
        assert 1.0 < near < 3.0
        assert far > 40.0


#Scoring

class TestScoring:

    def test_in_band_station_scores_detour_ratio_only(self):
        """≈111 km at 5 km/kWh from a 50 kWh battery leaves ≈27.8 kWh: inside [10, 40]."""
        trip = _trip(capacity=50, efficiency=5)
        s = _station(*ON_ROUTE)
        assert 10 < battery_at_station(s, trip) < 40
        assert score_station(s, trip, PlanningConfig()) == pytest.approx(100.0, abs=1e-6)

    def test_low_battery_penalty(self):
        trip = _trip(capacity=10, efficiency=1)
        s = _station(*ON_ROUTE)
        assert battery_at_station(s, trip) < 0.2 * 10
        assert score_station(s, trip, PlanningConfig()) == pytest.approx(1100.0, abs=1e-6)

    def test_high_battery_penalty(self):
        trip = _trip(capacity=1000, efficiency=5)
        s = _station(*ON_ROUTE)
        assert battery_at_station(s, trip) > 0.8 * 1000
        assert score_station(s, trip, PlanningConfig()) == pytest.approx(600.0, abs=1e-6)

    def test_power_rewarded(self):
        trip = _trip(capacity=50, efficiency=5)
        slow = score_station(_station(*ON_ROUTE, power_kw=0), trip, PlanningConfig())
        fast = score_station(_station(*ON_ROUTE, power_kw=150), trip, PlanningConfig())
        assert fast - slow == pytest.approx(-15.0)

    def test_chargers_rewarded(self):
        trip = _trip(capacity=50, efficiency=5)
        one  = score_station(_station(*ON_ROUTE, charger_count=1), trip, PlanningConfig())
        four = score_station(_station(*ON_ROUTE, charger_count=4), trip, PlanningConfig())
        assert four - one == pytest.approx(-30.0)

    def test_off_route_costs_more(self):
        trip = _trip(capacity=50, efficiency=5)
        on  = score_station(_station(*ON_ROUTE), trip, PlanningConfig())
        off = score_station(_station(41.0, -7.72), trip, PlanningConfig())
        assert off > on

    def test_detour_term_is_via_distance_over_direct(self):
        trip = _trip(capacity=50, efficiency=5)
        off_route = (41.0, -7.72)
        expected = 100 * via_distance_km(SOUTH, NORTH, off_route) / distance_km(SOUTH, NORTH)
        assert score_station(_station(*off_route), trip, PlanningConfig()) == pytest.approx(expected)

    def test_band_follows_config(self):
        trip = _trip(capacity=50, efficiency=5)
        s = _station(*ON_ROUTE)
        strict = PlanningConfig(min_battery_percentage=0.6, max_battery_percentage=0.9)
        assert score_station(s, trip, strict) == pytest.approx(1100.0, abs=1e-6)

    def test_custom_weights(self):
        trip = _trip(capacity=10, efficiency=1)
        s = _station(*ON_ROUTE, power_kw=100, charger_count=2)
        weights = ScoringWeights(detour_ratio_weight=0, power_weight=1, charger_weight=0, low_battery_penalty=0)
        assert score_station(s, trip, PlanningConfig(), weights) == pytest.approx(-100.0)

    def test_zero_direct_distance_does_not_divide(self):
        trip = TripContext(start=PORTO, dest=PORTO, direct_distance=0.0, battery_capacity=50, efficiency=5)
        assert score_station(_station(*PORTO), trip, PlanningConfig()) == pytest.approx(100.0 + 500.0)


#Config

class TestPlanningConfig:

    def test_defaults(self):
        cfg = PlanningConfig()
        assert (cfg.min_battery_percentage, cfg.max_battery_percentage) == (0.2, 0.8)
        assert cfg.max_detour_distance == 20.0
        assert cfg.requests_per_second == 10.0

    @pytest.mark.parametrize("kwargs", [
        {"min_battery_percentage": -0.1},
        {"max_battery_percentage": 1.5},
        {"min_battery_percentage": 0.9, "max_battery_percentage": 0.5},
        {"max_detour_distance": -1},
        {"requests_per_second": 0},
    ])
    def test_rejects_nonsense(self, kwargs):
        with pytest.raises(ValueError):
            PlanningConfig(**kwargs)
