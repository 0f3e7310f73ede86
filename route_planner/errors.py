"""
route_planner/errors.py
Terminal planning failures.  Each carries the error kind and the HTTP status
the API layer answers with.
"""


class PlanningError(Exception):
    kind: str = "PlanningError"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(PlanningError):
    kind = "InvalidInput"
    status_code = 400


class RateLimitedError(PlanningError):
    kind = "RateLimited"
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message)


class NoStationsAvailableError(PlanningError):
    kind = "NoStationsAvailable"
    status_code = 503

    def __init__(self, message: str = "No charging stations available in the system") -> None:
        super().__init__(message)


class NoSuitableStationError(PlanningError):
    kind = "NoSuitableStation"
    status_code = 400

    def __init__(self, message: str = "No suitable charging stations found for the given route") -> None:
        super().__init__(message)
