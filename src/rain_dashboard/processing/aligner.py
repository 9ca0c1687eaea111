"""
Window alignment module.

Locates the current hour inside an hourly series and clips a symmetric
window of every metric around it.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import HourlySeries, Window


class WindowAligner:
    """Derive the ±radius hour window around now."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize window aligner.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def locate_now(series: HourlySeries, now: datetime) -> Optional[int]:
        """
        Find the first index on the same calendar day and hour as now.

        Timestamps are compared on their wall-clock fields as delivered by
        the feed; no timezone conversion happens here.

        Returns:
            Absolute index, or None when no timestamp matches
        """
        for i, ts in enumerate(series.timestamps):
            if DateUtils.same_hour(ts, now):
                return i
        return None

    def align(
        self,
        series: HourlySeries,
        now: datetime,
        radius: int = constants.DEFAULT_WINDOW_RADIUS
    ) -> Window:
        """
        Build the window around now.

        The window holds at most 2 * radius points and is clipped at both ends
        of the series. Precipitation after the now-index is blanked so that
        forecast rain is never drawn as observed rain; other metrics pass
        through unchanged.

        When now cannot be located the window is built around index 0 and
        ``now_located`` is False; ``now_index`` is reported exactly as it
        would be for a genuine index 0.

        Args:
            series: Hourly series
            now: Current wall-clock time in the series' timezone
            radius: Hours either side of now

        Returns:
            Window (never raises for a well-formed series)
        """
        if not isinstance(radius, int) or radius <= 0:
            raise ValueError(f"radius must be a positive integer, got {radius!r}")

        located = self.locate_now(series, now)
        if located is None:
            self.logger.warning(
                f"Could not locate {now.isoformat()} in hourly series of {len(series)} points"
            )
            now_index = 0
        else:
            now_index = located

        start = max(0, now_index - radius)
        end = min(len(series), now_index + radius)

        labels = [DateUtils.hour_label(ts) for ts in series.timestamps[start:end]]

        windowed: Dict[str, List[Optional[float]]] = {}
        for name, values in series.metrics.items():
            clipped = list(values[start:end])
            if name == constants.PRECIPITATION:
                clipped = [
                    None if start + j > now_index else value
                    for j, value in enumerate(clipped)
                ]
            windowed[name] = clipped

        self.logger.debug(
            f"Window [{start}, {end}) around index {now_index} "
            f"(located={located is not None})"
        )

        return Window(
            start_index=start,
            end_index=end,
            now_index=now_index - start,
            labels=labels,
            series=windowed,
            now_located=located is not None,
        )

    def current_value(
        self,
        series: HourlySeries,
        now: datetime,
        metric: str = constants.PRECIPITATION
    ) -> float:
        """
        Value of a metric at the current hour.

        Returns 0.0 when now is not in the series or the value is missing.
        """
        values = series.metric(metric)
        index = self.locate_now(series, now)
        if values is None or index is None or values[index] is None:
            return 0.0
        return values[index]
