"""
Weather condition classification.

Maps WMO weather codes to a description and an icon category.
"""

from ..models import WeatherCondition


CLEAR = WeatherCondition("Clear", "sun")
PARTLY_CLOUDY = WeatherCondition("Partly cloudy", "cloud-sun")
FOG = WeatherCondition("Fog", "cloud-fog")
DRIZZLE = WeatherCondition("Drizzle", "cloud-drizzle")
RAIN = WeatherCondition("Rain", "cloud-rain")
SHOWERS = WeatherCondition("Showers", "cloud-rain")
THUNDERSTORM = WeatherCondition("Thunderstorm", "cloud-lightning")
CLOUDY = WeatherCondition("Cloudy", "cloud")


class ConditionClassifier:
    """Total mapping from weather code to condition; unknown codes are cloudy."""

    def classify(self, code: int) -> WeatherCondition:
        if code == 0:
            return CLEAR
        if 1 <= code <= 3:
            return PARTLY_CLOUDY
        if code in (45, 48):
            return FOG
        if 51 <= code <= 55:
            return DRIZZLE
        if 61 <= code <= 65:
            return RAIN
        if 80 <= code <= 82:
            return SHOWERS
        if code >= 95:
            return THUNDERSTORM
        return CLOUDY
