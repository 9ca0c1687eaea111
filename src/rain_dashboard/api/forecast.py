"""
Open-Meteo forecast operations.
"""

from typing import Dict, Any

from .client import APIClient
from ..core import constants
from ..core.exceptions import FetchError


class ForecastAPI(APIClient):
    """Client for the Open-Meteo forecast endpoint."""

    def get_forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Fetch current conditions plus the hourly block for a coordinate.

        The hourly block always spans one past day, today and tomorrow in the
        location's own timezone.

        Args:
            latitude: Decimal latitude
            longitude: Decimal longitude

        Returns:
            Raw forecast response
        """
        self.logger.info(f"Fetching forecast for ({latitude}, {longitude})")
        result = self.get(params={
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(constants.CURRENT_FIELDS),
            "hourly": ",".join(constants.HOURLY_FIELDS),
            "timezone": "auto",
            "past_days": constants.FORECAST_PAST_DAYS,
            "forecast_days": constants.FORECAST_DAYS,
        })

        if not isinstance(result, dict):
            raise FetchError("Unexpected forecast response shape")
        return result
