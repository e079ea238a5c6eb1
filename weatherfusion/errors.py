# ABOUTME: Exception taxonomy for location resolution and weather/astronomy fetching.
# ABOUTME: Transport and parse failures are wrapped here so callers never see raw httpx errors.


class WeatherFusionError(Exception):
    """Base class for all failures raised by the aggregator."""


class ResolutionFailed(WeatherFusionError):
    """The location search request failed or returned an unusable body."""


class LocationNotFound(WeatherFusionError):
    """The conditions endpoint answered with an error payload for the query."""

    def __init__(self, query: str, code: int | None = None, message: str | None = None):
        self.query = query
        self.code = code
        self.message = message
        super().__init__(f"No matching location for {query!r}: {message or 'unknown error'} (code {code})")


class FetchFailed(WeatherFusionError):
    """A conditions or sunrise/sunset request failed or returned an unusable body."""
