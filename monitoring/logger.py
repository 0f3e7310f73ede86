"""
monitoring/logger.py
Structured logging, Prometheus metrics, timing decorator.
"""
import functools
import logging
import time
from typing import Any, Callable, Optional


def get_logger(name: str):
    """Return a structlog logger. Imports structlog on first call only."""
    import structlog
    return structlog.get_logger(name)


def _ensure_configured():
    """Configure structlog once. Called lazily."""
    import structlog
    if structlog.is_configured():
        return
    from config.settings import settings
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )


_ensure_configured()


# ── Prometheus Metrics (registered on first sample) ───────────────────────────

class _LazyMetric:
    """Holds a metric spec; the prometheus_client object is built on first use."""
    def __init__(self, kind: str, name: str, desc: str, labels=(), **kwargs):
        self.kind = kind
        self.name = name
        self._spec = (desc, list(labels))
        self._kwargs = kwargs
        self._metric = None

    def _get(self):
        if self._metric is None:
            import prometheus_client
            factory = getattr(prometheus_client, self.kind)
            desc, labels = self._spec
            self._metric = factory(self.name, desc, labels, **self._kwargs)
        return self._metric

    def labels(self, **kw):
        return self._get().labels(**kw)

    def observe(self, v):
        self._get().observe(v)

    def set(self, v):
        self._get().set(v)


_LATENCY_BUCKETS   = [0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
_CANDIDATE_BUCKETS = [0, 1, 3, 10, 50, 100, 500]

# outcome: direct | with_stops | InvalidInput | RateLimited | NoStationsAvailable | NoSuitableStation
PLAN_REQUESTS   = _LazyMetric("Counter", "ev_route_planning_requests_total", "Route planning requests by outcome", ["outcome"])
PLAN_LATENCY    = _LazyMetric("Histogram", "ev_route_planning_duration_seconds", "Planning latency", ["operation"], buckets=_LATENCY_BUCKETS)
PLAN_CANDIDATES = _LazyMetric("Histogram", "ev_route_planning_candidates", "Stations within the detour bound", buckets=_CANDIDATE_BUCKETS)
CATALOGUE_SIZE  = _LazyMetric("Gauge", "ev_station_catalogue_size", "Stations in the loaded catalogue")


def start_metrics_server(port: Optional[int] = None) -> None:
    """Expose /metrics on a side port; failure to bind is logged, not raised."""
    from config.settings import settings
    port = port or settings.metrics_port
    log = get_logger("monitoring")
    try:
        from prometheus_client import start_http_server
        start_http_server(port)
        log.info("Prometheus metrics server started", port=port)
    except OSError as exc:
        log.warning("Could not start metrics server", port=port, error=str(exc))


def timed(operation: str) -> Callable:
    """Record wall-clock time of each call in PLAN_LATENCY under ``operation``."""
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                PLAN_LATENCY.labels(operation=operation).observe(time.perf_counter() - started)
        return wrapper
    return decorator
