"""
Open-Meteo geocoding operations.

Handles forward lookup of place names.
"""

from typing import List, Dict, Any

from .client import APIClient
from ..core.exceptions import FetchError


class GeocodingAPI(APIClient):
    """Client for the Open-Meteo geocoding search endpoint."""

    def search(self, name: str, language: str = "es", count: int = 1) -> List[Dict[str, Any]]:
        """
        Search places by name.

        Args:
            name: Free-text place name (URL-escaped by requests)
            language: Language of returned names
            count: Maximum number of results

        Returns:
            List of raw result objects, empty when nothing matched
        """
        self.logger.info(f"Geocoding {name!r}")
        result = self.get(params={
            "name": name,
            "count": count,
            "language": language,
            "format": "json",
        })

        if not isinstance(result, dict):
            raise FetchError("Unexpected geocoding response shape")

        # The endpoint omits "results" entirely when nothing matched
        results = result.get("results") or []
        if not isinstance(results, list):
            raise FetchError("Unexpected geocoding results shape")
        return results
