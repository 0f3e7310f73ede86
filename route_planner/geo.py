"""
route_planner/geo.py
Great-circle distance helpers (Haversine, spherical Earth).
"""
import math

EARTH_RADIUS_KM = 6371.0

LatLon = tuple[float, float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(a: LatLon, b: LatLon) -> float:
    return haversine_km(a[0], a[1], b[0], b[1])


def via_distance_km(start: LatLon, dest: LatLon, via: LatLon) -> float:
    """Length of start -> via -> dest."""
    return distance_km(start, via) + distance_km(via, dest)


def detour_km(start: LatLon, dest: LatLon, via: LatLon) -> float:
    """
    Extra distance incurred by passing through `via` instead of going direct.
    Never meaningfully negative (triangle inequality), apart from float noise.
    """
    return via_distance_km(start, dest, via) - distance_km(start, dest)
