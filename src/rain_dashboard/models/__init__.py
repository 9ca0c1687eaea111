"""
Data models for the rain dashboard.

Contains DTOs for places, forecasts and derived dashboard data.
"""

from .place import Place
from .forecast import CurrentConditions, HourlySeries
from .dashboard import (
    Window,
    ComparisonEstimate,
    WeatherCondition,
    DashboardSnapshot,
    SessionState,
)

__all__ = [
    "Place",
    "CurrentConditions",
    "HourlySeries",
    "Window",
    "ComparisonEstimate",
    "WeatherCondition",
    "DashboardSnapshot",
    "SessionState",
]
