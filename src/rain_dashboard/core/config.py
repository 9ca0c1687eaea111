"""
Configuration module for the rain dashboard.

Loads configuration from an optional JSON file and environment variables,
on top of built-in defaults.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "timeout": 30,
        "max_retries": 0,
        "verify_ssl": True,
        "user_agent": constants.DEFAULT_USER_AGENT,
    },
    "endpoints": {
        "geocoding_url": constants.DEFAULT_GEOCODING_URL,
        "forecast_url": constants.DEFAULT_FORECAST_URL,
        "reverse_geocoding_url": constants.DEFAULT_REVERSE_GEOCODING_URL,
    },
    "geocoding": {
        "language": constants.DEFAULT_GEOCODING_LANGUAGE,
    },
    "dashboard": {
        "default_city": constants.DEFAULT_CITY,
        "window_radius": constants.DEFAULT_WINDOW_RADIUS,
        "refresh_interval": constants.DEFAULT_REFRESH_INTERVAL,
        "random_seed": None,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base (in place) and return base."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or 'config.json'. Only an explicitly requested file has to exist.
        """
        self._explicit_file = config_file is not None or bool(os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit_file:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {self.config_file}")

        _merge(self.config, loaded)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("GEOCODING_URL"):
            self.config["endpoints"]["geocoding_url"] = os.getenv("GEOCODING_URL")

        if os.getenv("FORECAST_URL"):
            self.config["endpoints"]["forecast_url"] = os.getenv("FORECAST_URL")

        if os.getenv("REVERSE_GEOCODING_URL"):
            self.config["endpoints"]["reverse_geocoding_url"] = os.getenv("REVERSE_GEOCODING_URL")

        if os.getenv("DASHBOARD_CITY"):
            self.config["dashboard"]["default_city"] = os.getenv("DASHBOARD_CITY")

        refresh_interval = os.getenv("DASHBOARD_REFRESH_INTERVAL")
        if refresh_interval:
            try:
                self.config["dashboard"]["refresh_interval"] = int(refresh_interval)
            except ValueError:
                raise ValueError(
                    f"DASHBOARD_REFRESH_INTERVAL must be an integer, got {refresh_interval!r}"
                )

        if os.getenv("LOG_LEVEL"):
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE"):
            self.config["logging"]["file"] = os.getenv("LOG_FILE")

    def _validate_config(self) -> None:
        """Validate configuration values."""
        errors = []

        for key in ("geocoding_url", "forecast_url", "reverse_geocoding_url"):
            if not self.get(f"endpoints.{key}"):
                errors.append(f"endpoints.{key} must not be empty")

        radius = self.get("dashboard.window_radius")
        if not isinstance(radius, int) or isinstance(radius, bool) or radius <= 0:
            errors.append(f"dashboard.window_radius must be a positive integer, got {radius!r}")

        interval = self.get("dashboard.refresh_interval")
        if not isinstance(interval, (int, float)) or isinstance(interval, bool) or interval <= 0:
            errors.append(f"dashboard.refresh_interval must be positive, got {interval!r}")

        retries = self.get("api.max_retries")
        if not isinstance(retries, int) or isinstance(retries, bool) or retries < 0:
            errors.append(f"api.max_retries must be a non-negative integer, got {retries!r}")

        if not str(self.get("dashboard.default_city", "")).strip():
            errors.append("dashboard.default_city must not be empty")

        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.timeout')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", 0)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def api_user_agent(self) -> str:
        return self.get("api.user_agent", constants.DEFAULT_USER_AGENT)

    @property
    def geocoding_url(self) -> str:
        return self.get("endpoints.geocoding_url", constants.DEFAULT_GEOCODING_URL)

    @property
    def forecast_url(self) -> str:
        return self.get("endpoints.forecast_url", constants.DEFAULT_FORECAST_URL)

    @property
    def reverse_geocoding_url(self) -> str:
        return self.get("endpoints.reverse_geocoding_url", constants.DEFAULT_REVERSE_GEOCODING_URL)

    @property
    def geocoding_language(self) -> str:
        """Get language used for geocoding result names."""
        return self.get("geocoding.language", constants.DEFAULT_GEOCODING_LANGUAGE)

    @property
    def default_city(self) -> str:
        """Get city loaded on start-up."""
        return self.get("dashboard.default_city", constants.DEFAULT_CITY)

    @property
    def window_radius(self) -> int:
        """Get number of hours shown either side of now."""
        return self.get("dashboard.window_radius", constants.DEFAULT_WINDOW_RADIUS)

    @property
    def refresh_interval(self) -> float:
        """Get auto-refresh interval in seconds."""
        return self.get("dashboard.refresh_interval", constants.DEFAULT_REFRESH_INTERVAL)

    @property
    def random_seed(self) -> Optional[int]:
        """Get seed for the comparison synthesizer (None means unseeded)."""
        return self.get("dashboard.random_seed")

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, city={self.default_city})"
