"""
Forecast data models.

Contains DTOs for the current-conditions snapshot and the hourly series
returned by one forecast fetch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class CurrentConditions:
    """Current weather snapshot."""

    temperature: float  # °C
    wind_speed: float  # km/h
    weather_code: int  # WMO code
    is_day: bool


@dataclass
class HourlySeries:
    """
    Index-aligned hourly measurements.

    ``metrics[name][i]`` describes ``timestamps[i]`` for every metric present.
    A metric the feed did not deliver is absent from ``metrics`` rather than
    filled with zeros.
    """

    timestamps: List[datetime]
    metrics: Dict[str, List[Optional[float]]] = field(default_factory=dict)
    timezone: Optional[str] = None

    def __post_init__(self):
        expected = len(self.timestamps)
        for name, values in self.metrics.items():
            if len(values) != expected:
                raise ValueError(
                    f"Metric {name!r} has {len(values)} values, expected {expected}"
                )

    def __len__(self) -> int:
        return len(self.timestamps)

    def has_metric(self, name: str) -> bool:
        return name in self.metrics

    def metric(self, name: str) -> Optional[List[Optional[float]]]:
        """Get a metric's values, or None when the feed did not provide it."""
        return self.metrics.get(name)
