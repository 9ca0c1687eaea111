"""
API layer for the public weather feeds.

Provides low-level clients for Open-Meteo geocoding and forecast, and for
Nominatim reverse geocoding.
"""

import logging
from typing import Optional, TYPE_CHECKING

from .client import APIClient
from .geocoding import GeocodingAPI
from .forecast import ForecastAPI
from .reverse_geocoding import ReverseGeocodingAPI
from . import helpers

if TYPE_CHECKING:
    from ..core.config import Config


class WeatherAPI:
    """
    Bundle of the three feed clients sharing one configuration.
    """

    def __init__(
        self,
        geocoding: GeocodingAPI,
        forecast: ForecastAPI,
        reverse_geocoding: ReverseGeocodingAPI
    ):
        self.geocoding = geocoding
        self.forecast = forecast
        self.reverse_geocoding = reverse_geocoding

    @classmethod
    def from_config(cls, config: "Config", logger: Optional[logging.Logger] = None) -> "WeatherAPI":
        """
        Create all clients from configuration.

        Args:
            config: Configuration object
            logger: Logger instance

        Returns:
            WeatherAPI instance
        """
        common = dict(
            timeout=config.api_timeout,
            max_retries=config.api_max_retries,
            verify_ssl=config.api_verify_ssl,
            user_agent=config.api_user_agent,
            logger=logger,
        )
        return cls(
            geocoding=GeocodingAPI(config.geocoding_url, **common),
            forecast=ForecastAPI(config.forecast_url, **common),
            reverse_geocoding=ReverseGeocodingAPI(config.reverse_geocoding_url, **common),
        )

    def close(self) -> None:
        self.geocoding.close()
        self.forecast.close()
        self.reverse_geocoding.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = [
    "APIClient",
    "GeocodingAPI",
    "ForecastAPI",
    "ReverseGeocodingAPI",
    "WeatherAPI",
    "helpers",
]
