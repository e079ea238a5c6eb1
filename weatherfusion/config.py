# ABOUTME: Runtime configuration and unit-system constants for the weather aggregator.
# ABOUTME: Reads API base URLs and the weatherapi credential from the environment (.env supported).

import logging
import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

DEFAULT_WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_SUNAPI_BASE_URL = "https://api.sunrise-sunset.org"


class Unit(str, Enum):
    METRIC = "metric"  # °C, kph, mm
    IMPERIAL = "imperial"  # °F, mph, in


# Display suffixes per unit system
UNIT_LABELS = {
    Unit.METRIC: {
        "temperature": "°C",
        "wind_speed": "kph",
        "precipitation": "mm",
    },
    Unit.IMPERIAL: {
        "temperature": "°F",
        "wind_speed": "mph",
        "precipitation": "in",
    },
}


class Settings(BaseModel):
    """Externally supplied configuration for the upstream APIs."""

    weatherapi_base_url: str = DEFAULT_WEATHERAPI_BASE_URL
    weatherapi_key: str = ""
    sunapi_base_url: str = DEFAULT_SUNAPI_BASE_URL
    log_level: str = "INFO"

    @field_validator("weatherapi_base_url", "sunapi_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, loading a .env file first if present."""
        load_dotenv()
        settings = cls(
            weatherapi_base_url=os.environ.get("WEATHERAPI_BASE_URL", DEFAULT_WEATHERAPI_BASE_URL),
            weatherapi_key=os.environ.get("WEATHERAPI_KEY", ""),
            sunapi_base_url=os.environ.get("SUNAPI_BASE_URL", DEFAULT_SUNAPI_BASE_URL),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )
        if not settings.weatherapi_key:
            logger.warning("WEATHERAPI_KEY is not set, weatherapi requests will be rejected")
        return settings
