"""
station_catalogue/stores.py
Station catalogue backends.  The planner depends only on the
StationCatalogue protocol: `all_stations()` returns every known station,
unfiltered, possibly empty.
"""
import json
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol

from config.settings import settings
from monitoring import CATALOGUE_SIZE, get_logger
from station_catalogue.models import Station

log = get_logger(__name__)


class StationCatalogue(Protocol):
    def all_stations(self) -> list[Station]: ...


class InMemoryStationStore:
    """List-backed catalogue. Used by tests, the demo and for seeding."""

    def __init__(self, stations: Optional[Iterable[Station]] = None) -> None:
        self._stations: list[Station] = list(stations or [])

    def all_stations(self) -> list[Station]:
        return list(self._stations)

    def add(self, station: Station) -> None:
        self._stations.append(station)

    def count(self) -> int:
        return len(self._stations)


class JSONStationStore:
    """
    Read-optimised catalogue loaded from a JSON file.
    Lazy-loads on first access and caches in memory.

    Accepted layouts:
      {"stations": [ {...}, ... ]}
      [ {...}, ... ]
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = Path(path or settings.station_catalogue_path)
        self._stations: Optional[list[Station]] = None

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    def all_stations(self) -> list[Station]:
        if self._stations is None:
            self._stations = self._load()
        return list(self._stations)

    def reload(self) -> None:
        """Drop the cache; the file is re-read on next access."""
        self._stations = None
        log.info("Station catalogue cache cleared, will reload on next access")

    def count(self) -> int:
        return len(self.all_stations())

    # ── Private ───────────────────────────────────────────────────────────────

    def _load(self) -> list[Station]:
        if not self._path.exists():
            log.warning(
                "Station catalogue not found, using empty catalogue.",
                path=str(self._path),
            )
            CATALOGUE_SIZE.set(0)
            return []
        with open(self._path) as f:
            data: Any = json.load(f)

        records = (data.get("stations") or []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            log.warning(
                "Station catalogue has no station list, using empty catalogue.",
                path=str(self._path),
                found=type(records).__name__,
            )
            records = []

        stations: list[Station] = []
        for i, raw in enumerate(records):
            try:
                stations.append(Station.from_dict(raw))
            except (TypeError, ValueError, AttributeError) as exc:
                log.warning("Skipping malformed station record", index=i, error=str(exc))

        CATALOGUE_SIZE.set(len(stations))
        log.info("Station catalogue loaded", stations=len(stations), path=str(self._path))
        return stations
