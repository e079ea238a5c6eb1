# ABOUTME: Unit-aware fusion of a location, its current conditions, and its sun times.
# ABOUTME: Pure formatting helpers; builds one immutable FusedResult per unit selection.

from datetime import datetime

from weatherfusion.config import UNIT_LABELS, Unit
from weatherfusion.models import Candidate, CurrentConditions, FusedResult, SunTimes

# weatherapi reports local time as e.g. "2024-04-28 21:07" (hour may be unpadded)
LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M"


def fuse(location: Candidate, conditions: CurrentConditions, sun_times: SunTimes, unit: Unit) -> FusedResult:
    """Combine one location's conditions and sun times into a display record.

    Only the readings of `unit` are materialized. No I/O, inputs are left untouched,
    and identical inputs always produce an identical result.
    """
    readings = conditions.readings(unit)
    labels = UNIT_LABELS[unit]

    return FusedResult(
        unit=unit,
        name=location.display_name,
        time=_display_time(location.local_time),
        condition_text=conditions.condition.text,
        condition_icon=conditions.condition.icon,
        temperature=format_quantity(readings.temperature, labels["temperature"]),
        feels_like=format_quantity(readings.feels_like, labels["temperature"]),
        wind_speed=format_quantity(readings.wind_speed, labels["wind_speed"]),
        wind_angle=f"{conditions.wind_degree}°",
        precipitation=format_quantity(readings.precipitation, labels["precipitation"]),
        sunrise=sun_times.sunrise,
        sunset=sun_times.sunset,
        day_length=sun_times.day_length,
    )


def format_number(value: float) -> str:
    """Render a reading without a trailing `.0` for whole values (11.0 -> "11", 51.8 -> "51.8")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_quantity(value: float, label: str) -> str:
    return f"{format_number(value)} {label}"


def format_local_time(local_time: str) -> str:
    """Convert a provider local timestamp into long en-US form.

    "2024-04-28 21:07" -> "Sunday, April 28, 9:07 PM"
    """
    dt = datetime.strptime(local_time.strip(), LOCAL_TIME_FORMAT)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%A}, {dt:%B} {dt.day}, {hour}:{dt:%M} {meridiem}"


def _display_time(local_time: str | None) -> str:
    if not local_time:
        return ""
    try:
        return format_local_time(local_time)
    except ValueError:
        # Unrecognized provider format: show it as reported
        return local_time
