"""
Provider comparison module.

Simulates disagreement between forecast providers by jittering the one real
daily total. The AEMET and Google figures are synthesized, not fetched.
"""

import logging
import random
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Union

from ..models import ComparisonEstimate


# (provider, low factor, high factor, note)
PROVIDERS = [
    ("Open-Meteo", 1.0, 1.0, "high"),
    ("AEMET", 0.9, 1.2, "moderate variation"),
    ("Google", 0.8, 1.2, "satellite data"),
]


def round_amount(value: float) -> float:
    """Round to one decimal, halves away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ComparisonSynthesizer:
    """Derive per-provider rain estimates from a daily total."""

    def __init__(
        self,
        rng: Optional[Union[random.Random, int]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize comparison synthesizer.

        Args:
            rng: Random source, or a seed for a new one. None uses an unseeded source.
            logger: Logger instance
        """
        if isinstance(rng, random.Random):
            self.rng = rng
        else:
            self.rng = random.Random(rng)
        self.logger = logger or logging.getLogger(__name__)

    def synthesize(self, daily_total: float) -> List[ComparisonEstimate]:
        """
        Build the three provider estimates.

        The first provider is the real feed and reports the total unchanged;
        the others scale it by a uniform factor from their interval.

        Args:
            daily_total: Today's precipitation in mm

        Returns:
            Exactly three estimates, amounts rounded to one decimal
        """
        estimates = []
        for name, low, high, note in PROVIDERS:
            factor = 1.0 if low == high else self.rng.uniform(low, high)
            estimates.append(ComparisonEstimate(
                provider_name=name,
                rain_amount=round_amount(daily_total * factor),
                note=note,
            ))

        self.logger.debug(
            "Comparison: " + ", ".join(f"{e.provider_name}={e.formatted_amount}" for e in estimates)
        )
        return estimates
