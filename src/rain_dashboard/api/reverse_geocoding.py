"""
Nominatim reverse geocoding operations.
"""

from typing import Dict, Any

from .client import APIClient
from ..core.exceptions import FetchError


class ReverseGeocodingAPI(APIClient):
    """Client for the Nominatim reverse lookup endpoint."""

    def reverse(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Look up the address of a coordinate.

        Returns:
            Raw reverse geocoding response
        """
        self.logger.info(f"Reverse geocoding ({latitude}, {longitude})")
        result = self.get(params={
            "format": "json",
            "lat": latitude,
            "lon": longitude,
        })

        if not isinstance(result, dict):
            raise FetchError("Unexpected reverse geocoding response shape")
        return result
