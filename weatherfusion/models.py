# ABOUTME: Pydantic BaseModels for resolved locations, current conditions, and sun times.
# ABOUTME: Also defines FusedResult, the immutable display-ready record built by fusion.

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from weatherfusion.config import Unit


class Candidate(BaseModel):
    """One resolved location from the search or conditions endpoint."""

    name: str
    region: str
    country: str
    latitude: float
    longitude: float
    time_zone_id: str | None = None
    local_time: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.region}, {self.country}"


class Condition(BaseModel):
    """Textual weather condition and its protocol-relative icon reference."""

    text: str
    icon: str


class UnitReadings(BaseModel):
    """The unit-dependent readings of a conditions snapshot, in one unit system."""

    temperature: float
    feels_like: float
    wind_speed: float
    precipitation: float


class CurrentConditions(BaseModel):
    """Current conditions for a location, carrying both unit systems side by side."""

    location: Candidate
    condition: Condition
    metric: UnitReadings
    imperial: UnitReadings
    wind_degree: int
    observed_at: str | None = None

    @field_validator("wind_degree")
    @classmethod
    def normalize_degree(cls, v: int) -> int:
        return v % 360

    def readings(self, unit: Unit) -> UnitReadings:
        """Return the reading branch for the given unit system."""
        return self.metric if unit is Unit.METRIC else self.imperial


class SunTimes(BaseModel):
    """Sunrise and sunset as formatted by the provider, for one coordinate/timezone triple."""

    latitude: float
    longitude: float
    time_zone_id: str
    sunrise: str
    sunset: str
    day_length: str | None = None


class FusedResult(BaseModel):
    """Display-ready record for one location under exactly one unit system."""

    model_config = ConfigDict(frozen=True)

    unit: Unit
    name: str
    time: str
    condition_text: str
    condition_icon: str
    temperature: str
    feels_like: str
    wind_speed: str
    wind_angle: str
    precipitation: str
    sunrise: str
    sunset: str
    day_length: str | None = None

    @computed_field
    @property
    def icon_url(self) -> str:
        if self.condition_icon.startswith("//"):
            return f"https:{self.condition_icon}"
        return self.condition_icon
