"""
Dashboard data models.

Contains the derived, per-render structures handed to the presentation layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from .place import Place
from .forecast import CurrentConditions, HourlySeries


@dataclass
class Window:
    """
    Clipped slice of an hourly series around the current hour.

    ``now_index`` is relative to ``start_index``. When the current hour could
    not be located it is reported as for a genuine first position, and
    ``now_located`` is False.
    """

    start_index: int
    end_index: int
    now_index: int
    labels: List[str] = field(default_factory=list)
    series: Dict[str, List[Optional[float]]] = field(default_factory=dict)
    now_located: bool = True

    def __len__(self) -> int:
        return self.end_index - self.start_index


@dataclass
class ComparisonEstimate:
    """Rain estimate attributed to one provider."""

    provider_name: str
    rain_amount: float  # mm, rounded to one decimal
    note: str

    @property
    def formatted_amount(self) -> str:
        return f"{self.rain_amount:.1f}"


@dataclass(frozen=True)
class WeatherCondition:
    """Human-readable weather condition."""

    description: str
    icon_category: str


@dataclass
class DashboardSnapshot:
    """Everything the presentation layer needs for one render."""

    location_label: str
    conditions: CurrentConditions
    condition: WeatherCondition
    current_rain: float  # mm in the current hour
    window: Window
    chart_type: str
    chart_series: Dict[str, List[Optional[float]]]
    daily_total: Optional[float]
    comparisons: List[ComparisonEstimate]
    updated_at: datetime


@dataclass
class SessionState:
    """
    Mutable state owned by the dashboard controller.

    Only ``city`` (or ``coordinates`` for device locations) is meant to
    outlive a fetch cycle; the rest is replaced on every successful update.
    """

    city: str
    coordinates: Optional[tuple] = None
    place: Optional[Place] = None
    location_label: str = ""
    conditions: Optional[CurrentConditions] = None
    series: Optional[HourlySeries] = None
    chart_type: str = "rain"
    snapshot: Optional[DashboardSnapshot] = None
    generation: int = 0
    last_error: Optional[str] = None
