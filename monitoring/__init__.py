"""monitoring package"""
from .logger import (
    timed,
    start_metrics_server,
    get_logger,
    PLAN_REQUESTS,
    PLAN_LATENCY,
    PLAN_CANDIDATES,
    CATALOGUE_SIZE,
)

__all__ = [
    "timed", "start_metrics_server", "get_logger",
    "PLAN_REQUESTS", "PLAN_LATENCY", "PLAN_CANDIDATES", "CATALOGUE_SIZE",
]
