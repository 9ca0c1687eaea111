"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.rain_dashboard.models import HourlySeries  # noqa: E402


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_payload(fixtures_dir):
    """
    Load a forecast response: 72 hourly points from 2024-03-09T00:00
    (Europe/Madrid), rain 0.0 yesterday, 0.5 today and 1.0 tomorrow,
    probability equal to the index.
    """
    with open(fixtures_dir / "forecast_response.json") as f:
        return json.load(f)


@pytest.fixture
def series_factory():
    """Build hourly series starting at midnight of 2024-03-09."""
    def make(length=72, start=datetime(2024, 3, 9), **metrics):
        timestamps = [start + timedelta(hours=i) for i in range(length)]
        return HourlySeries(timestamps=timestamps, metrics=metrics, timezone="Europe/Madrid")
    return make


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
