"""
Rain Dashboard

This package geocodes a place, fetches the Open-Meteo forecast and derives a
rolling window of precipitation, temperature and wind around the current hour,
together with a daily rain total and a simulated provider comparison.
"""

__version__ = "0.1.0"
__description__ = "Rolling rain window and provider comparison for a weather dashboard"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "RainDashboardApp":
        from .main import RainDashboardApp
        return RainDashboardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RainDashboardApp",
]
