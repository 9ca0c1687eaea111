"""
Application-wide constants for the rain dashboard.

Defaults for configurable values live here as well; the configuration layer
falls back to them when a key is not set.
"""

# Default endpoints
DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_REVERSE_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"

DEFAULT_GEOCODING_LANGUAGE = "es"
DEFAULT_USER_AGENT = "rain-dashboard/0.1.0"

# Forecast request shape
# One past day plus today and tomorrow. DailyAggregator depends on this:
# hours 24..47 of the series are "today".
FORECAST_PAST_DAYS = 1
FORECAST_DAYS = 2
CURRENT_FIELDS = ["temperature_2m", "is_day", "weather_code", "wind_speed_10m"]
HOURLY_FIELDS = ["temperature_2m", "rain", "precipitation_probability", "wind_speed_10m"]

# Metric names used inside HourlySeries, keyed by upstream field
PRECIPITATION = "precipitation"
PRECIPITATION_PROBABILITY = "precipitation_probability"
TEMPERATURE = "temperature"
WIND_SPEED = "wind_speed"

HOURLY_FIELD_METRICS = {
    "rain": PRECIPITATION,
    "precipitation_probability": PRECIPITATION_PROBABILITY,
    "temperature_2m": TEMPERATURE,
    "wind_speed_10m": WIND_SPEED,
}

# Window alignment
DEFAULT_WINDOW_RADIUS = 12  # hours either side of now

# Daily aggregation slice (absolute indices, half-open)
TODAY_START_INDEX = 24
TODAY_END_INDEX = 48

# Dashboard
DEFAULT_CITY = "Madrigal de la Vera"
DEFAULT_REFRESH_INTERVAL = 3600  # seconds
ERROR_LABEL = "Error"
CURRENT_LOCATION_LABEL = "Current location"
UNKNOWN_LOCATION_LABEL = "Unknown location"

# Chart types and the metrics each one plots
CHART_RAIN = "rain"
CHART_TEMPERATURE = "temp"
CHART_WIND = "wind"
CHART_METRICS = {
    CHART_RAIN: [PRECIPITATION, PRECIPITATION_PROBABILITY],
    CHART_TEMPERATURE: [TEMPERATURE],
    CHART_WIND: [WIND_SPEED],
}
