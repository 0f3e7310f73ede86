"""
config/settings.py
Central configuration: reads from environment variables and .env file.
"""
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings:

    def __init__(self):
        self._load()

    def _load(self):
        import os
        env_file = BASE_DIR / ".env"
        if env_file.exists():
            for line in env_file.read_text().splitlines():
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, _, val = line.partition("=")
                    os.environ.setdefault(key.strip(), val.strip())

        # Route planning thresholds
        self.min_battery_percentage = float(
            os.environ.get("ROUTE_PLANNING_MIN_BATTERY_PERCENTAGE", "0.2")
        )
        self.max_battery_percentage = float(
            os.environ.get("ROUTE_PLANNING_MAX_BATTERY_PERCENTAGE", "0.8")
        )
        self.max_detour_distance = float(
            os.environ.get("ROUTE_PLANNING_MAX_DETOUR_DISTANCE", "20.0")
        )
        self.requests_per_second = float(
            os.environ.get("ROUTE_PLANNING_REQUESTS_PER_SECOND", "10.0")
        )

        self.station_catalogue_path = os.environ.get(
            "STATION_CATALOGUE_PATH", str(BASE_DIR / "data" / "stations.json")
        )
        self.max_search_results   = 500
        self.max_nearby_radius_km = 600.0

        self.api_host    = os.environ.get("API_HOST", "0.0.0.0")
        self.api_port    = int(os.environ.get("API_PORT", "8000"))
        self.api_title   = "EV Charge Route Planner API"
        self.api_version = "1.0.0"

        self.metrics_port = int(os.environ.get("METRICS_PORT", "9090"))
        self.log_level    = os.environ.get("LOG_LEVEL", "INFO")


settings = Settings()
