"""
Main entry point for the rain dashboard.

Orchestrates update cycles (search, device location, refresh) and owns the
session state handed to the presentation layer.
"""

import dataclasses
import logging
import sys
import threading
from datetime import datetime
from typing import Callable, Optional, Tuple

import pytz

from .api import WeatherAPI
from .core import Config, DateUtils, LoggerContext, setup_logger, constants
from .core.exceptions import DashboardError
from .models import CurrentConditions, DashboardSnapshot, HourlySeries, SessionState
from .processing import DashboardProcessor, round_amount
from .services import ForecastFetcher, LocationResolver


class AutoRefresher:
    """Call a function on a fixed interval from a daemon thread."""

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize auto refresher.

        Args:
            callback: Function run on every tick
            interval: Seconds between ticks
            logger: Logger instance
        """
        self.callback = callback
        self.interval = interval
        self.logger = logger or logging.getLogger(__name__)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="auto-refresh", daemon=True)
        self._thread.start()
        self.logger.info(f"Auto-refresh every {self.interval}s")

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.callback()
            except DashboardError as e:
                # A failed refresh leaves the previous data on screen
                self.logger.error(f"Auto-refresh failed: {e}")
            except Exception as e:
                # Keep the loop alive; the next tick gets a fresh attempt
                self.logger.error(f"Unexpected error during auto-refresh: {e}", exc_info=True)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)


class RainDashboardApp:
    """
    Dashboard controller.

    Every update cycle takes a generation number. Results are committed to
    the session only if no newer cycle started in the meantime, so a slow
    stale response can never overwrite fresher data.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        api: Optional[WeatherAPI] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize application.

        Args:
            config: Configuration (loaded from default locations if None)
            api: Feed clients (built from config if None)
            clock: Returns the current time; defaults to now in UTC
            logger: Logger instance
        """
        self.config = config or Config()
        self.logger = logger or logging.getLogger("rain_dashboard")
        self.api = api or WeatherAPI.from_config(self.config, self.logger)
        self.clock = clock or (lambda: datetime.now(pytz.UTC))

        self.resolver = LocationResolver(
            geocoding_api=self.api.geocoding,
            reverse_geocoding_api=self.api.reverse_geocoding,
            language=self.config.geocoding_language,
            logger=self.logger
        )
        self.fetcher = ForecastFetcher(self.api.forecast, logger=self.logger)
        self.processor = DashboardProcessor(rng=self.config.random_seed, logger=self.logger)
        self.date_utils = DateUtils(self.logger)

        self.state = SessionState(city=self.config.default_city)
        self._lock = threading.Lock()
        self._refresher: Optional[AutoRefresher] = None

    # Update cycles

    def search(self, query: str) -> Optional[DashboardSnapshot]:
        """
        Handle a user search. Blank queries are ignored without any lookup.

        Returns:
            New snapshot, or None if the query was blank or the cycle was superseded
        """
        query = (query or "").strip()
        if not query:
            self.logger.debug("Ignoring blank search")
            return None
        return self.update_weather(query)

    def update_weather(self, city: str) -> Optional[DashboardSnapshot]:
        """
        Run an update cycle for a place name.

        Raises:
            NotFoundError: If the place is unknown
            FetchError: If geocoding or the forecast fetch failed
        """
        generation = self._begin_cycle()
        try:
            with LoggerContext(self.logger, f"update for {city!r}"):
                place = self.resolver.resolve(city)
                current, series = self.fetcher.fetch(place.latitude, place.longitude)
        except DashboardError as e:
            self._fail(generation, e)
            raise

        return self._commit(
            generation, place.label, current, series,
            city=city, coordinates=None, place=place
        )

    def update_by_coordinates(self, latitude: float, longitude: float) -> Optional[DashboardSnapshot]:
        """
        Run an update cycle for a device-reported coordinate.

        The forecast is fetched first; naming the place afterwards can only
        degrade to a fallback label, never fail the cycle.

        Raises:
            FetchError: If the forecast fetch failed
        """
        generation = self._begin_cycle()
        try:
            with LoggerContext(self.logger, f"update for ({latitude}, {longitude})"):
                current, series = self.fetcher.fetch(latitude, longitude)
        except DashboardError as e:
            self._fail(generation, e)
            raise

        label = self.resolver.resolve_from_coordinates(latitude, longitude)
        return self._commit(
            generation, label, current, series,
            coordinates=(latitude, longitude), place=None
        )

    def refresh(self) -> Optional[DashboardSnapshot]:
        """Repeat the last update for the current city or coordinates."""
        with self._lock:
            coordinates = self.state.coordinates
            city = self.state.city

        if coordinates is not None:
            self.logger.info(f"Refreshing weather for {coordinates}")
            return self.update_by_coordinates(*coordinates)

        self.logger.info(f"Refreshing weather for {city!r}")
        return self.update_weather(city)

    def set_chart_type(self, chart_type: str) -> Optional[DashboardSnapshot]:
        """
        Switch the plotted metrics and re-derive the window from the last
        fetched series. No network access.

        Raises:
            ValueError: If chart_type is unknown
        """
        if chart_type not in constants.CHART_METRICS:
            raise ValueError(f"Unknown chart type {chart_type!r}")

        with self._lock:
            self.state.chart_type = chart_type
            snapshot = self.state.snapshot
            series = self.state.series
            if snapshot is None or series is None:
                return None

            window = self._align(series)
            snapshot = dataclasses.replace(
                snapshot,
                window=window,
                chart_type=chart_type,
                chart_series=self.processor.chart_series(window, chart_type),
            )
            self.state.snapshot = snapshot
            return snapshot

    # Auto refresh

    def start_auto_refresh(self, on_update: Optional[Callable[[DashboardSnapshot], None]] = None) -> AutoRefresher:
        """
        Refresh periodically in the background.

        Args:
            on_update: Called with every committed snapshot
        """
        def tick() -> None:
            snapshot = self.refresh()
            if snapshot is not None and on_update is not None:
                on_update(snapshot)

        if self._refresher is None:
            self._refresher = AutoRefresher(tick, self.config.refresh_interval, self.logger)
        self._refresher.start()
        return self._refresher

    def stop_auto_refresh(self) -> None:
        if self._refresher is not None:
            self._refresher.stop()

    def close(self) -> None:
        self.stop_auto_refresh()
        self.api.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Internals

    def _begin_cycle(self) -> int:
        with self._lock:
            self.state.generation += 1
            return self.state.generation

    def _fail(self, generation: int, error: Exception) -> None:
        """
        Mark a failed cycle. Previously displayed data stays in place; only
        the location label turns into the error label.
        """
        self.logger.error(f"Update failed: {error}")
        with self._lock:
            if generation != self.state.generation:
                return
            self.state.location_label = constants.ERROR_LABEL
            self.state.last_error = str(error)
            if self.state.snapshot is not None:
                self.state.snapshot = dataclasses.replace(
                    self.state.snapshot, location_label=constants.ERROR_LABEL
                )

    def _align(self, series: HourlySeries):
        now = self.date_utils.now_in_timezone(series.timezone, self.clock())
        return self.processor.align(series, now, self.config.window_radius)

    def _commit(
        self,
        generation: int,
        label: str,
        current: CurrentConditions,
        series: HourlySeries,
        **state_updates
    ) -> Optional[DashboardSnapshot]:
        with self._lock:
            if generation != self.state.generation:
                self.logger.info(
                    f"Discarding result of superseded update {generation} "
                    f"(latest is {self.state.generation})"
                )
                return None

            snapshot = self._build_snapshot(label, current, series, self.state.chart_type)

            for key, value in state_updates.items():
                setattr(self.state, key, value)
            self.state.location_label = label
            self.state.conditions = current
            self.state.series = series
            self.state.snapshot = snapshot
            self.state.last_error = None
            return snapshot

    def _build_snapshot(
        self,
        label: str,
        current: CurrentConditions,
        series: HourlySeries,
        chart_type: str
    ) -> DashboardSnapshot:
        now = self.date_utils.now_in_timezone(series.timezone, self.clock())
        window = self.processor.align(series, now, self.config.window_radius)
        daily_total = self.processor.daily_total(series)

        return DashboardSnapshot(
            location_label=label,
            conditions=current,
            condition=self.processor.classify(current.weather_code),
            current_rain=self.processor.current_rain(series, now),
            window=window,
            chart_type=chart_type,
            chart_series=self.processor.chart_series(window, chart_type),
            daily_total=daily_total,
            comparisons=self.processor.compare_providers(daily_total),
            updated_at=self.clock(),
        )


def format_snapshot(snapshot: DashboardSnapshot) -> str:
    """Render a snapshot as plain text."""
    conditions = snapshot.conditions
    lines = [
        snapshot.location_label,
        f"  {round(conditions.temperature)}°C  {snapshot.condition.description}"
        f"  wind {conditions.wind_speed} km/h  rain (1h) {snapshot.current_rain} mm",
    ]

    if snapshot.daily_total is not None:
        lines.append(f"  Rain today: {round_amount(snapshot.daily_total):.1f} mm")
        for estimate in snapshot.comparisons:
            lines.append(
                f"    {estimate.provider_name:<12} {estimate.formatted_amount:>6} mm  ({estimate.note})"
            )

    window = snapshot.window
    lines.append(f"  Chart ({snapshot.chart_type}):")
    for j, label in enumerate(window.labels):
        marker = "*" if j == window.now_index else " "
        values = ", ".join(
            f"{name}={'-' if values[j] is None else values[j]}"
            for name, values in snapshot.chart_series.items()
        )
        lines.append(f"   {marker}{label:>6}  {values}")

    local_time = snapshot.updated_at.astimezone()
    lines.append(f"  Updated {local_time.strftime('%H:%M')}")
    return "\n".join(lines)


def _parse_coordinates(args) -> Optional[Tuple[float, float]]:
    if args.lat is None and args.lon is None:
        return None
    if args.lat is None or args.lon is None:
        raise ValueError("--lat and --lon must be given together")
    return args.lat, args.lon


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Rolling rain, temperature and wind dashboard"
    )
    parser.add_argument("--config", type=str, default=None, help="Path to configuration file")
    parser.add_argument("--city", type=str, default=None, help="Place name. Default: configured city")
    parser.add_argument("--lat", type=float, default=None, help="Latitude (use with --lon)")
    parser.add_argument("--lon", type=float, default=None, help="Longitude (use with --lat)")
    parser.add_argument(
        "--chart",
        choices=sorted(constants.CHART_METRICS),
        default=constants.CHART_RAIN,
        help="Metrics to plot"
    )
    parser.add_argument("--watch", action="store_true", help="Keep refreshing on the configured interval")

    args = parser.parse_args(argv)

    try:
        config = Config(args.config)
        coordinates = _parse_coordinates(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    logger = setup_logger(log_file=config.log_file, log_level=config.log_level)

    app = RainDashboardApp(config=config, logger=logger)
    try:
        app.state.chart_type = args.chart
        if coordinates is not None:
            snapshot = app.update_by_coordinates(*coordinates)
        else:
            snapshot = app.update_weather(args.city or config.default_city)

        if snapshot is not None:
            print(format_snapshot(snapshot))

        if args.watch:
            refresher = app.start_auto_refresh(
                on_update=lambda s: print("\n" + format_snapshot(s))
            )
            try:
                while refresher.is_running():
                    refresher.join(1.0)
            except KeyboardInterrupt:
                logger.info("Stopping")
    except DashboardError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        app.close()


if __name__ == "__main__":
    main()
