"""
Location resolution service.

Turns a place name into a Place, and a device coordinate into a display label.
"""

import logging
from typing import Optional, TYPE_CHECKING

from ..api import helpers
from ..core import constants
from ..core.exceptions import FetchError, NotFoundError
from ..models import Place

if TYPE_CHECKING:
    from ..api import GeocodingAPI, ReverseGeocodingAPI


class LocationResolver:
    """
    Resolve places by name (fatal on failure) and by coordinate (never fatal).
    """

    def __init__(
        self,
        geocoding_api: "GeocodingAPI",
        reverse_geocoding_api: "ReverseGeocodingAPI",
        language: str = constants.DEFAULT_GEOCODING_LANGUAGE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize location resolver.

        Args:
            geocoding_api: Forward geocoding client
            reverse_geocoding_api: Reverse geocoding client
            language: Language of returned place names
            logger: Logger instance
        """
        self.geocoding_api = geocoding_api
        self.reverse_geocoding_api = reverse_geocoding_api
        self.language = language
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, query: str) -> Place:
        """
        Resolve a place name to its first geocoding match.

        Args:
            query: Place name, non-blank

        Returns:
            Place with in-range coordinates

        Raises:
            ValueError: If query is blank
            NotFoundError: If nothing matched
            FetchError: On transport failure or a malformed match
        """
        query = (query or "").strip()
        if not query:
            raise ValueError("Empty place query")

        results = self.geocoding_api.search(query, language=self.language, count=1)
        if not results:
            self.logger.warning(f"No geocoding match for {query!r}")
            raise NotFoundError(query)

        try:
            place = helpers.parse_place(results[0])
        except ValueError as e:
            raise FetchError(f"Malformed geocoding result for {query!r}: {e}") from e

        self.logger.info(
            f"Resolved {query!r} to {place.label} ({place.latitude}, {place.longitude})"
        )
        return place

    def resolve_from_coordinates(self, latitude: float, longitude: float) -> str:
        """
        Best-effort label for a coordinate.

        Any failure degrades to a fixed label so that "use my location" keeps
        working without name resolution.

        Returns:
            Settlement name, or the fallback label
        """
        try:
            payload = self.reverse_geocoding_api.reverse(latitude, longitude)
            return helpers.extract_place_label(payload)
        except Exception as e:
            self.logger.warning(f"Reverse geocoding failed for ({latitude}, {longitude}): {e}")
            return constants.CURRENT_LOCATION_LABEL
