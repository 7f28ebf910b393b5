# Error types raised by the route generator. All of them propagate to the caller.


class BlucapError(Exception):
    """Base class for every error raised by this library."""


class ConfigurationError(BlucapError, ValueError):
    """Raised at construction time when the configuration is unusable."""


class RouteValidationError(BlucapError, ValueError):
    """Raised before any network call when caller input breaks a constraint."""

    def __init__(self, message: str, constraint: str):
        super().__init__(message)
        self.constraint = constraint


class ServiceError(BlucapError):
    """The routing service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, payload: dict):
        self.status_code = status_code
        self.payload = payload
        message = payload.get('message') if isinstance(payload, dict) else None
        super().__init__(f"GraphHopper API Error: {status_code} - {message}")


class NetworkError(BlucapError):
    """The routing service could not be reached at all."""

    def __init__(self, message: str = "Network Error: Unable to reach GraphHopper API"):
        super().__init__(message)


class RequestError(BlucapError):
    """Any other failure while building or executing a route request."""

    def __init__(self, original: str):
        self.original = original
        super().__init__(f"Request Error: {original}")
