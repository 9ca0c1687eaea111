"""
Services for the rain dashboard.

Services orchestrate API operations and provide higher-level functionality.
"""

from .location_resolver import LocationResolver
from .forecast_fetcher import ForecastFetcher

__all__ = [
    "LocationResolver",
    "ForecastFetcher",
]
