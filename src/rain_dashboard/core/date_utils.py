"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
"""

import logging
from datetime import datetime
from typing import Optional
import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Madrid', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def now_in_timezone(
        self,
        timezone_str: Optional[str],
        reference_time: Optional[datetime] = None
    ) -> datetime:
        """
        Get the current wall-clock time of a place.

        The forecast feed reports hourly timestamps as naive local times of
        the forecast location, so "now" has to be expressed in the same
        timezone before it can be matched against them.

        Args:
            timezone_str: Timezone reported by the feed. None or unknown
                          timezones fall back to the machine's local time.
            reference_time: Reference time (defaults to now in UTC)

        Returns:
            Naive datetime holding the local wall-clock time
        """
        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        elif reference_time.tzinfo is None:
            # Assume UTC if no timezone
            reference_time = pytz.UTC.localize(reference_time)

        if not timezone_str:
            return reference_time.astimezone().replace(tzinfo=None)

        try:
            tz = self.parse_timezone(timezone_str)
        except ValueError:
            self.logger.warning(f"Unknown timezone {timezone_str!r}, using machine local time")
            return reference_time.astimezone().replace(tzinfo=None)

        local_time = reference_time.astimezone(tz)
        self.logger.debug(
            f"Reference time: {reference_time.isoformat()} -> "
            f"Local time: {local_time.isoformat()}"
        )
        return local_time.replace(tzinfo=None)

    @staticmethod
    def parse_local_timestamp(value: str) -> datetime:
        """
        Parse a feed timestamp such as '2024-01-15T10:00'.

        Raises:
            ValueError: If the string is not an ISO-8601 timestamp
        """
        return datetime.fromisoformat(value)

    @staticmethod
    def hour_label(dt: datetime) -> str:
        """Format the hour of a timestamp as a chart label, e.g. '7:00'."""
        return f"{dt.hour}:00"

    @staticmethod
    def same_hour(a: datetime, b: datetime) -> bool:
        """Check whether two datetimes fall on the same calendar day and hour."""
        return a.date() == b.date() and a.hour == b.hour
