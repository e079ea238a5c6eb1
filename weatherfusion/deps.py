# ABOUTME: Dependency container for the aggregator using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and Settings shared by the resolver and fetcher.

import httpx
from pydantic import BaseModel, ConfigDict

from weatherfusion.config import Settings


class WeatherDeps(BaseModel):
    """Dependencies handed to the session and service layer."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings


def create_http_client() -> httpx.AsyncClient:
    """Create the shared httpx client.

    Every upstream call is a single attempt, so no retrying transport is installed.
    """
    return httpx.AsyncClient(headers={"Accept": "application/json"})
