"""
Helper functions for API responses.

Provides parsing of raw feed payloads into models.
"""

import math
from typing import Dict, Any, List, Optional, Tuple

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import Place, CurrentConditions, HourlySeries


def _to_coordinate(value: Any, name: str, limit: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}")
    if not math.isfinite(number) or not -limit <= number <= limit:
        raise ValueError(f"{name} out of range: {value!r}")
    return number


def parse_place(result: Dict[str, Any]) -> Place:
    """
    Build a Place from an Open-Meteo geocoding result.

    Expected format:
    {"name": "Madrid", "country": "Spain", "latitude": 40.41, "longitude": -3.70, ...}

    Raises:
        ValueError: If name or coordinates are missing or out of range
    """
    if not isinstance(result, dict):
        raise ValueError(f"Geocoding result is not an object: {result!r}")

    name = result.get("name")
    if not name:
        raise ValueError("Geocoding result has no name")

    return Place(
        name=str(name),
        country=str(result.get("country") or ""),
        latitude=_to_coordinate(result.get("latitude"), "latitude", 90.0),
        longitude=_to_coordinate(result.get("longitude"), "longitude", 180.0),
    )


def extract_place_label(payload: Dict[str, Any]) -> str:
    """
    Pick a settlement name from a Nominatim reverse lookup.

    Falls through city, town, village and municipality, in that order.
    """
    address = payload.get("address") or {}
    for key in ("city", "town", "village", "municipality"):
        if address.get(key):
            return str(address[key])
    return constants.UNKNOWN_LOCATION_LABEL


def _to_finite(value: Any, name: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite {name}: {value!r}")
    return number


def _to_optional_float(value: Any, name: str = "value") -> Optional[float]:
    if value is None:
        return None
    return _to_finite(value, name)


def parse_current(current: Dict[str, Any]) -> CurrentConditions:
    """
    Build CurrentConditions from the forecast 'current' block.

    Raises:
        ValueError: If a required field is missing or malformed
    """
    missing = [f for f in constants.CURRENT_FIELDS if current.get(f) is None]
    if missing:
        raise ValueError(f"Current conditions missing fields: {', '.join(missing)}")

    return CurrentConditions(
        temperature=_to_finite(current["temperature_2m"], "temperature_2m"),
        wind_speed=_to_finite(current["wind_speed_10m"], "wind_speed_10m"),
        weather_code=int(_to_finite(current["weather_code"], "weather_code")),
        is_day=bool(current["is_day"]),
    )


def parse_hourly(hourly: Dict[str, Any], timezone: Optional[str] = None) -> HourlySeries:
    """
    Build an HourlySeries from the forecast 'hourly' block.

    Requested fields the feed omitted are left out of the series instead of
    being zero-filled.

    Raises:
        ValueError: If timestamps are missing/unparseable or a metric is not
                    index-aligned with them
    """
    times = hourly.get("time")
    if not isinstance(times, list):
        raise ValueError("Hourly block has no time array")

    timestamps = [DateUtils.parse_local_timestamp(t) for t in times]

    metrics: Dict[str, List[Optional[float]]] = {}
    for field_name, metric_name in constants.HOURLY_FIELD_METRICS.items():
        values = hourly.get(field_name)
        if values is None:
            continue
        if not isinstance(values, list):
            raise ValueError(f"Hourly field {field_name!r} is not an array")
        metrics[metric_name] = [_to_optional_float(v, field_name) for v in values]

    return HourlySeries(timestamps=timestamps, metrics=metrics, timezone=timezone)


def parse_forecast(payload: Dict[str, Any]) -> Tuple[CurrentConditions, HourlySeries]:
    """
    Split a forecast response into current conditions and the hourly series.

    Raises:
        ValueError: If either block is missing or malformed
    """
    current = payload.get("current")
    hourly = payload.get("hourly")
    if not isinstance(current, dict):
        raise ValueError("Forecast response has no current block")
    if not isinstance(hourly, dict):
        raise ValueError("Forecast response has no hourly block")

    return parse_current(current), parse_hourly(hourly, payload.get("timezone"))
