"""
Forecast fetching service.

Fetches the forecast feed and turns it into current conditions plus an
hourly series.
"""

import logging
from typing import Optional, Tuple, TYPE_CHECKING

from ..api import helpers
from ..core.exceptions import FetchError
from ..models import CurrentConditions, HourlySeries

if TYPE_CHECKING:
    from ..api import ForecastAPI


class ForecastFetcher:
    """Fetch and decode forecasts. Performs no retries."""

    def __init__(
        self,
        forecast_api: "ForecastAPI",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize forecast fetcher.

        Args:
            forecast_api: Forecast client
            logger: Logger instance
        """
        self.forecast_api = forecast_api
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self, latitude: float, longitude: float) -> Tuple[CurrentConditions, HourlySeries]:
        """
        Fetch the forecast for a coordinate.

        Args:
            latitude: Decimal latitude
            longitude: Decimal longitude

        Returns:
            Tuple of (current conditions, hourly series) from the same response

        Raises:
            FetchError: On transport failure or a malformed response
        """
        payload = self.forecast_api.get_forecast(latitude, longitude)

        try:
            current, series = helpers.parse_forecast(payload)
        except (ValueError, TypeError) as e:
            self.logger.error(f"Could not decode forecast for ({latitude}, {longitude}): {e}")
            raise FetchError(f"Malformed forecast response: {e}") from e

        self.logger.info(
            f"Fetched {len(series)} hourly points with metrics "
            f"{sorted(series.metrics)} (timezone {series.timezone})"
        )
        return current, series
