"""
Daily aggregation module.

Approximates "rain expected today" from the hourly series.
"""

import logging
from typing import Optional

from ..core import constants
from ..models import HourlySeries


class DailyAggregator:
    """Sum today's precipitation."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize daily aggregator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def daily_total(self, series: HourlySeries) -> Optional[float]:
        """
        Sum precipitation over absolute indices [24, 48).

        This is not calendar-aware. It relies on the forecast request shape
        (one past day first), which puts today at hours 24..47. Missing values
        and indices beyond the end of the series count as 0.

        Args:
            series: Hourly series

        Returns:
            Total in mm, or None when the series has no precipitation metric
        """
        values = series.metric(constants.PRECIPITATION)
        if values is None:
            self.logger.warning("No precipitation metric; daily total unavailable")
            return None

        today = values[constants.TODAY_START_INDEX:constants.TODAY_END_INDEX]
        total = sum(v for v in today if v is not None)

        self.logger.debug(f"Daily precipitation total: {total:.2f} mm over {len(today)} hours")
        return float(total)
