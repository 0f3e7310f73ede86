"""
station_catalogue/models.py
Station record shared by the catalogue stores, the query service and the
route planner.  Kept in a separate module to avoid circular imports.
"""
from dataclasses import dataclass, asdict
from typing import Any, Optional

AVAILABLE_STATUS = "Available"


def _as_bool(value: Any) -> bool:
    """Real booleans, or the strings "true"/"false" in any case."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"Expected a boolean, got {value!r}")


def _as_optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _as_optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Station:
    """A charging station as known to the catalogue. Read-only for the planner."""
    id: str
    latitude: float
    longitude: float
    operational: bool = True
    status: str = AVAILABLE_STATUS
    charger_count: int = 0
    power_kw: float = 0.0

    # Descriptive fields
    external_id: Optional[str] = None
    name: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    price_per_kwh: Optional[float] = None

    @property
    def is_available(self) -> bool:
        return self.operational and self.status == AVAILABLE_STATUS

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Station":
        """
        Build a Station from a catalogue record.
        Accepts snake_case keys as well as the camelCase keys used by the
        upstream station service (quantityOfChargers, isOperational, ...).
        """
        def pick(*keys, default=None):
            for k in keys:
                if raw.get(k) is not None:
                    return raw[k]
            return default

        return cls(
            id=str(pick("id", "station_id", "stationId", default="")),
            latitude=float(pick("latitude", "lat")),
            longitude=float(pick("longitude", "lon", "lng")),
            operational=_as_bool(pick("operational", "is_operational", "isOperational", default=False)),
            status=str(pick("status", default="")),
            charger_count=int(pick("charger_count", "quantity_of_chargers", "quantityOfChargers", default=0)),
            power_kw=float(pick("power_kw", "power", default=0.0)),
            external_id=_as_optional_str(pick("external_id", "externalId")),
            name=pick("name", default="") or "",
            address=pick("address", default="") or "",
            city=pick("city", default="") or "",
            country=pick("country", default="") or "",
            price_per_kwh=_as_optional_float(pick("price_per_kwh", "price")),
        )


@dataclass
class StationFilter:
    """Optional criteria for StationQueryService.filter; None means 'any'."""
    min_power: Optional[float] = None
    max_power: Optional[float] = None
    operational: Optional[bool] = None
    status: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return None not in (self.latitude, self.longitude, self.radius_km)
