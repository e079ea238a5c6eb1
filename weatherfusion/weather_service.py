# ABOUTME: Service layer for weatherapi.com and sunrise-sunset.org calls and response parsing.
# ABOUTME: Handles location search, current conditions, and sunrise/sunset retrieval.

import logging

import httpx

from weatherfusion.config import Settings
from weatherfusion.errors import FetchFailed, LocationNotFound, ResolutionFailed
from weatherfusion.models import Candidate, Condition, CurrentConditions, SunTimes, UnitReadings

logger = logging.getLogger(__name__)

SEARCH_METHOD = "search.json"
CURRENT_METHOD = "current.json"
SUN_METHOD = "json"

SUN_STATUS_OK = "OK"


async def resolve_locations(client: httpx.AsyncClient, settings: Settings, query: str) -> list[Candidate]:
    """Resolve a free-text query to candidate locations, in provider order.

    An empty list is a valid result. Callers must never pass an empty query.
    """
    if not query:
        raise ValueError("Location search requires a non-empty query")

    url = f"{settings.weatherapi_base_url}/{SEARCH_METHOD}"
    logger.debug("Searching locations at %s for %r", url, query)
    try:
        resp = await client.get(url, params={"q": query, "key": settings.weatherapi_key})
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise ResolutionFailed(f"Location search failed for {query!r}: {e}") from e

    if not isinstance(data, list):
        raise ResolutionFailed(f"Location search for {query!r} returned {type(data).__name__}, expected a list")

    try:
        return [parse_candidate(r) for r in data]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ResolutionFailed(f"Malformed location search result for {query!r}: {e}") from e


async def fetch_conditions(client: httpx.AsyncClient, settings: Settings, query: str) -> CurrentConditions:
    """Fetch current conditions; the provider re-resolves the query itself."""
    url = f"{settings.weatherapi_base_url}/{CURRENT_METHOD}"
    logger.debug("Fetching current conditions at %s for %r", url, query)
    try:
        resp = await client.get(url, params={"q": query, "key": settings.weatherapi_key})
    except httpx.HTTPError as e:
        raise FetchFailed(f"Current conditions request failed for {query!r}: {e}") from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    # weatherapi sends the error payload with a 4xx status, so check the body first
    if isinstance(data, dict) and "error" in data:
        err = data["error"] if isinstance(data["error"], dict) else {}
        raise LocationNotFound(query, code=err.get("code"), message=err.get("message"))

    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchFailed(f"Current conditions request failed for {query!r}: {e}") from e
    if data is None:
        raise FetchFailed(f"Current conditions response for {query!r} is not JSON")

    try:
        return parse_conditions(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise FetchFailed(f"Malformed current conditions for {query!r}: {e}") from e


async def fetch_sun_times(
    client: httpx.AsyncClient,
    settings: Settings,
    latitude: float,
    longitude: float,
    time_zone_id: str,
) -> SunTimes:
    """Fetch sunrise and sunset, formatted in the given timezone. No credential required."""
    url = f"{settings.sunapi_base_url}/{SUN_METHOD}"
    logger.debug("Fetching sun times at %s for (%s, %s, %s)", url, latitude, longitude, time_zone_id)
    try:
        resp = await client.get(url, params={"lat": latitude, "lng": longitude, "tzid": time_zone_id})
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise FetchFailed(f"Sun times request failed for ({latitude}, {longitude}): {e}") from e

    try:
        status = data.get("status", SUN_STATUS_OK)
        if status != SUN_STATUS_OK:
            raise FetchFailed(f"Sun times provider returned status {status!r} for ({latitude}, {longitude})")
        return parse_sun_times(data["results"], latitude, longitude, time_zone_id)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise FetchFailed(f"Malformed sun times for ({latitude}, {longitude}): {e}") from e


async def fetch_all(client: httpx.AsyncClient, settings: Settings, query: str) -> tuple[CurrentConditions, SunTimes]:
    """Fetch conditions, then sun times for the coordinates the conditions response reported.

    The two calls are strictly sequenced: the sun times request needs the location block.
    """
    conditions = await fetch_conditions(client, settings, query)
    loc = conditions.location
    sun_times = await fetch_sun_times(client, settings, loc.latitude, loc.longitude, loc.time_zone_id)
    return conditions, sun_times


def parse_candidate(raw: dict) -> Candidate:
    """Parse one weatherapi location object (search result or conditions location block)."""
    return Candidate(
        name=raw["name"],
        region=raw["region"],
        country=raw["country"],
        latitude=raw["lat"],
        longitude=raw["lon"],
        time_zone_id=raw.get("tz_id"),
        local_time=raw.get("localtime"),
    )


def parse_conditions(data: dict) -> CurrentConditions:
    """Split a weatherapi current.json body into location, condition, and per-unit readings."""
    location = data["location"]
    current = data["current"]
    # Optional in search results, required here: sun times need tz_id, fusion needs localtime
    for key in ("tz_id", "localtime"):
        if not location.get(key):
            raise KeyError(key)

    return CurrentConditions(
        location=parse_candidate(location),
        condition=Condition(text=current["condition"]["text"], icon=current["condition"]["icon"]),
        metric=UnitReadings(
            temperature=current["temp_c"],
            feels_like=current["feelslike_c"],
            wind_speed=current["wind_kph"],
            precipitation=current["precip_mm"],
        ),
        imperial=UnitReadings(
            temperature=current["temp_f"],
            feels_like=current["feelslike_f"],
            wind_speed=current["wind_mph"],
            precipitation=current["precip_in"],
        ),
        wind_degree=current["wind_degree"],
        observed_at=current.get("last_updated"),
    )


def parse_sun_times(results: dict, latitude: float, longitude: float, time_zone_id: str) -> SunTimes:
    """Parse the `results` block of a sunrise-sunset.org response."""
    return SunTimes(
        latitude=latitude,
        longitude=longitude,
        time_zone_id=time_zone_id,
        sunrise=results["sunrise"],
        sunset=results["sunset"],
        day_length=results.get("day_length"),
    )
