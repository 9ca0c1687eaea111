"""
Exception hierarchy for the rain dashboard.

Forward-path failures (geocoding, forecast fetch) raise these and abort the
current update cycle. Degraded paths never raise.
"""


class DashboardError(Exception):
    """Base class for errors that abort a dashboard update cycle."""


class NotFoundError(DashboardError):
    """Raised when geocoding returns no match for a place name."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"Place not found: {query}")


class FetchError(DashboardError):
    """Raised on transport or decoding failures talking to a remote feed."""
