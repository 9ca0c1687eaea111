"""
Place data models.

Contains DTOs for geocoded places.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Place:
    """A geocoded place."""

    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        """Display label, e.g. 'Madrid, Spain'."""
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name
