"""
Core utilities for the rain dashboard.

Provides configuration management, logging, errors and date helpers.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from .exceptions import DashboardError, NotFoundError, FetchError
from . import constants
from .date_utils import DateUtils

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "DashboardError",
    "NotFoundError",
    "FetchError",
    "constants",
    "DateUtils",
]
