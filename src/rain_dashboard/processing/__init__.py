"""
Data processing module for the rain dashboard.

Provides window alignment, daily aggregation, provider comparison and
condition classification.
"""

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional, Union

from .aligner import WindowAligner
from .aggregator import DailyAggregator
from .comparison import ComparisonSynthesizer, round_amount
from .classifier import ConditionClassifier
from ..core import constants
from ..models import HourlySeries, Window, ComparisonEstimate, WeatherCondition


class DashboardProcessor:
    """
    Unified processor combining alignment, aggregation, comparison and
    classification.

    This class provides a convenient interface to all processing operations.
    """

    def __init__(
        self,
        rng: Optional[Union[random.Random, int]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize dashboard processor.

        Args:
            rng: Random source (or seed) for the comparison synthesizer
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.aligner = WindowAligner(logger)
        self.aggregator = DailyAggregator(logger)
        self.synthesizer = ComparisonSynthesizer(rng, logger)
        self.classifier = ConditionClassifier()

    def align(
        self,
        series: HourlySeries,
        now: datetime,
        radius: int = constants.DEFAULT_WINDOW_RADIUS
    ) -> Window:
        return self.aligner.align(series, now, radius)

    def current_rain(self, series: HourlySeries, now: datetime) -> float:
        return self.aligner.current_value(series, now, constants.PRECIPITATION)

    def daily_total(self, series: HourlySeries) -> Optional[float]:
        return self.aggregator.daily_total(series)

    def compare_providers(self, daily_total: Optional[float]) -> List[ComparisonEstimate]:
        """
        Build provider estimates; empty when the daily total is unavailable.
        """
        if daily_total is None:
            return []
        return self.synthesizer.synthesize(daily_total)

    def classify(self, code: int) -> WeatherCondition:
        return self.classifier.classify(code)

    @staticmethod
    def chart_series(window: Window, chart_type: str) -> Dict[str, List[Optional[float]]]:
        """
        Select the windowed metrics plotted by a chart type.

        Metrics missing from the window are left out.

        Raises:
            ValueError: If chart_type is unknown
        """
        if chart_type not in constants.CHART_METRICS:
            raise ValueError(
                f"Unknown chart type {chart_type!r}, expected one of "
                f"{', '.join(constants.CHART_METRICS)}"
            )
        return {
            name: window.series[name]
            for name in constants.CHART_METRICS[chart_type]
            if name in window.series
        }


__all__ = [
    "WindowAligner",
    "DailyAggregator",
    "ComparisonSynthesizer",
    "ConditionClassifier",
    "DashboardProcessor",
    "round_amount",
]
