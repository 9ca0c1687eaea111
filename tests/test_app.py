"""
Application controller tests.

Exercises full update cycles with mocked feeds and a fixed clock:
2024-03-09 23:15 UTC is 00:15 on 2024-03-10 in Madrid, index 24 of the
fixture series.
"""

import json
import threading
from datetime import datetime
from unittest.mock import Mock, patch

import pytest  # type: ignore
import pytz

from src.rain_dashboard.main import RainDashboardApp, AutoRefresher, format_snapshot, main
from src.rain_dashboard.core import Config, FetchError, NotFoundError, constants


MADRIGAL = {
    "name": "Madrigal de la Vera",
    "country": "Spain",
    "latitude": 40.14,
    "longitude": -5.37,
}


def fixed_clock():
    return datetime(2024, 3, 9, 23, 15, tzinfo=pytz.UTC)


@pytest.fixture
def config(tmp_path, monkeypatch):
    for var in ("CONFIG_FILE", "DASHBOARD_CITY", "DASHBOARD_REFRESH_INTERVAL", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "dashboard": {"random_seed": 42, "refresh_interval": 3600},
        "logging": {"file": str(tmp_path / "logs" / "test.log")},
    }))
    return Config(str(config_file))


@pytest.fixture
def api(forecast_payload):
    api = Mock()
    api.geocoding.search.return_value = [MADRIGAL]
    api.forecast.get_forecast.return_value = forecast_payload
    api.reverse_geocoding.reverse.return_value = {"address": {"village": "Villanueva de la Vera"}}
    return api


@pytest.fixture
def app(config, api):
    return RainDashboardApp(config=config, api=api, clock=fixed_clock, logger=Mock())


class TestUpdateCycle:
    """Search and refresh by place name."""

    def test_update_weather(self, app, api):
        snapshot = app.update_weather("Madrigal de la Vera")

        api.forecast.get_forecast.assert_called_once_with(40.14, -5.37)
        assert snapshot.location_label == "Madrigal de la Vera, Spain"
        assert snapshot.condition.description == "Rain"
        assert snapshot.current_rain == 0.5
        assert snapshot.window.start_index == 12
        assert snapshot.window.end_index == 36
        assert snapshot.window.now_index == 12
        assert snapshot.window.now_located
        assert snapshot.daily_total == pytest.approx(12.0)
        assert [e.provider_name for e in snapshot.comparisons] == ["Open-Meteo", "AEMET", "Google"]
        assert snapshot.comparisons[0].rain_amount == 12.0
        assert snapshot.updated_at == fixed_clock()

    def test_state_after_update(self, app):
        snapshot = app.update_weather("Madrigal de la Vera")

        assert app.state.city == "Madrigal de la Vera"
        assert app.state.place.name == "Madrigal de la Vera"
        assert app.state.snapshot is snapshot
        assert app.state.location_label == "Madrigal de la Vera, Spain"
        assert app.state.last_error is None

    def test_rain_chart_by_default(self, app):
        snapshot = app.update_weather("Madrigal de la Vera")

        assert snapshot.chart_type == constants.CHART_RAIN
        assert list(snapshot.chart_series) == [
            constants.PRECIPITATION, constants.PRECIPITATION_PROBABILITY
        ]
        assert snapshot.chart_series[constants.PRECIPITATION][13:] == [None] * 11

    def test_blank_search_never_resolves(self, app, api):
        assert app.search("   ") is None
        assert app.search("") is None
        api.geocoding.search.assert_not_called()

    def test_search_strips_query(self, app, api):
        app.search("  Madrid  ")
        api.geocoding.search.assert_called_once_with("Madrid", language="es", count=1)
        assert app.state.city == "Madrid"

    def test_not_found_keeps_previous_data(self, app, api):
        previous = app.update_weather("Madrigal de la Vera")
        api.geocoding.search.return_value = []

        with pytest.raises(NotFoundError):
            app.search("Nowhere")

        assert app.state.location_label == constants.ERROR_LABEL
        assert app.state.snapshot.location_label == constants.ERROR_LABEL
        assert app.state.snapshot.window == previous.window
        assert app.state.snapshot.daily_total == previous.daily_total
        assert app.state.snapshot.comparisons == previous.comparisons
        assert app.state.city == "Madrigal de la Vera"
        assert "Nowhere" in app.state.last_error

    def test_fetch_error_marks_label(self, app, api):
        api.forecast.get_forecast.side_effect = FetchError("503")

        with pytest.raises(FetchError):
            app.update_weather("Madrigal de la Vera")

        assert app.state.location_label == constants.ERROR_LABEL
        assert app.state.snapshot is None

    def test_malformed_geocoding_result_marks_label(self, app, api):
        previous = app.update_weather("Madrigal de la Vera")
        api.geocoding.search.return_value = ["Madrid"]

        with pytest.raises(FetchError):
            app.search("Madrid")

        assert app.state.location_label == constants.ERROR_LABEL
        assert app.state.snapshot.location_label == constants.ERROR_LABEL
        assert app.state.snapshot.conditions == previous.conditions

    def test_refresh_uses_current_city(self, app, api):
        app.update_weather("Madrigal de la Vera")
        api.geocoding.search.reset_mock()

        app.refresh()

        api.geocoding.search.assert_called_once_with("Madrigal de la Vera", language="es", count=1)

    def test_missing_precipitation_hides_comparison(self, app, forecast_payload):
        del forecast_payload["hourly"]["rain"]

        snapshot = app.update_weather("Madrigal de la Vera")

        assert snapshot.daily_total is None
        assert snapshot.comparisons == []
        assert constants.PRECIPITATION not in snapshot.chart_series


class TestCoordinates:
    """Update cycles for device locations."""

    def test_update_by_coordinates(self, app, api):
        snapshot = app.update_by_coordinates(40.1, -5.6)

        api.forecast.get_forecast.assert_called_once_with(40.1, -5.6)
        api.geocoding.search.assert_not_called()
        assert snapshot.location_label == "Villanueva de la Vera"
        assert app.state.coordinates == (40.1, -5.6)

    def test_reverse_failure_is_not_fatal(self, app, api):
        api.reverse_geocoding.reverse.side_effect = FetchError("429 Too Many Requests")

        snapshot = app.update_by_coordinates(40.1, -5.6)

        assert snapshot.location_label == constants.CURRENT_LOCATION_LABEL
        assert app.state.last_error is None

    def test_refresh_reuses_coordinates(self, app, api):
        app.update_by_coordinates(40.1, -5.6)
        api.forecast.get_forecast.reset_mock()

        app.refresh()

        api.forecast.get_forecast.assert_called_once_with(40.1, -5.6)
        api.geocoding.search.assert_not_called()

    def test_search_after_coordinates_clears_them(self, app, api):
        app.update_by_coordinates(40.1, -5.6)
        app.search("Madrigal de la Vera")

        assert app.state.coordinates is None


class TestChartType:
    """Switching the plotted metrics."""

    def test_switch_without_refetch(self, app, api):
        app.update_weather("Madrigal de la Vera")

        snapshot = app.set_chart_type(constants.CHART_TEMPERATURE)

        assert api.forecast.get_forecast.call_count == 1
        assert snapshot.chart_type == constants.CHART_TEMPERATURE
        assert list(snapshot.chart_series) == [constants.TEMPERATURE]
        assert app.state.snapshot is snapshot

    def test_switch_keeps_comparisons(self, app):
        before = app.update_weather("Madrigal de la Vera")

        after = app.set_chart_type(constants.CHART_WIND)

        assert after.comparisons == before.comparisons
        assert after.chart_series == {constants.WIND_SPEED: [5.0] * 24}

    def test_switch_before_first_update(self, app):
        assert app.set_chart_type(constants.CHART_WIND) is None
        assert app.state.chart_type == constants.CHART_WIND

    def test_unknown_chart_type(self, app):
        with pytest.raises(ValueError):
            app.set_chart_type("pressure")


class TestSupersededCycles:
    """Results of an older cycle never overwrite a newer one."""

    def test_stale_result_discarded(self, app, api, forecast_payload):
        newer = {}
        calls = []

        def slow_forecast(lat, lon):
            calls.append((lat, lon))
            if len(calls) == 1:
                # A second update starts and finishes while the first is in flight
                api.geocoding.search.return_value = [dict(MADRIGAL, name="Jarandilla")]
                newer["snapshot"] = app.update_weather("Jarandilla")
            return forecast_payload

        api.forecast.get_forecast.side_effect = slow_forecast

        stale = app.update_weather("Madrigal de la Vera")

        assert stale is None
        assert app.state.city == "Jarandilla"
        assert app.state.snapshot is newer["snapshot"]
        assert app.state.location_label == "Jarandilla, Spain"

    def test_stale_failure_does_not_mark_error(self, app, api, forecast_payload):
        def failing_forecast(lat, lon):
            api.forecast.get_forecast.side_effect = None
            api.forecast.get_forecast.return_value = forecast_payload
            app.update_weather("Jarandilla")
            raise FetchError("late failure")

        api.forecast.get_forecast.side_effect = failing_forecast

        with pytest.raises(FetchError):
            app.update_weather("Madrigal de la Vera")

        assert app.state.location_label == "Madrigal de la Vera, Spain"
        assert app.state.last_error is None


class TestAutoRefresher:
    """Background refresh loop."""

    def test_calls_back_until_stopped(self):
        ticked = threading.Event()
        refresher = AutoRefresher(ticked.set, interval=0.01, logger=Mock())

        refresher.start()
        try:
            assert ticked.wait(2.0)
            assert refresher.is_running()
        finally:
            refresher.stop()
        assert not refresher.is_running()

    def test_survives_failed_refresh(self):
        calls = []
        done = threading.Event()

        def callback():
            calls.append(1)
            if len(calls) == 1:
                raise FetchError("offline")
            done.set()

        refresher = AutoRefresher(callback, interval=0.01, logger=Mock())
        refresher.start()
        try:
            assert done.wait(2.0)
        finally:
            refresher.stop()
        assert len(calls) >= 2

    def test_survives_unexpected_error(self):
        calls = []
        done = threading.Event()
        logger = Mock()

        def callback():
            calls.append(1)
            if len(calls) == 1:
                raise AttributeError("'str' object has no attribute 'get'")
            done.set()

        refresher = AutoRefresher(callback, interval=0.01, logger=logger)
        refresher.start()
        try:
            assert done.wait(2.0)
            assert refresher.is_running()
        finally:
            refresher.stop()
        assert len(calls) >= 2
        assert logger.error.call_args_list[0][1]["exc_info"] is True

    def test_app_auto_refresh_reports_snapshots(self, app):
        app.config.config["dashboard"]["refresh_interval"] = 0.01
        app.update_weather("Madrigal de la Vera")
        received = []
        done = threading.Event()

        def on_update(snapshot):
            received.append(snapshot)
            done.set()

        app.start_auto_refresh(on_update=on_update)
        try:
            assert done.wait(2.0)
        finally:
            app.stop_auto_refresh()
        assert received[0].location_label == "Madrigal de la Vera, Spain"


class TestOutput:
    """Plain-text rendering and the command line."""

    def test_format_snapshot(self, app):
        text = format_snapshot(app.update_weather("Madrigal de la Vera"))

        assert text.startswith("Madrigal de la Vera, Spain")
        assert "12°C  Rain" in text
        assert "Rain today: 12.0 mm" in text
        assert "Open-Meteo" in text
        assert "*  0:00" in text

    def test_main(self, config, api, capsys):
        with patch("src.rain_dashboard.main.WeatherAPI") as weather_api:
            weather_api.from_config.return_value = api
            main(["--config", config.config_file, "--city", "Madrigal de la Vera"])

        out = capsys.readouterr().out
        assert "Madrigal de la Vera, Spain" in out
        api.close.assert_called_once()

    def test_main_not_found_exits(self, config, api, capsys):
        api.geocoding.search.return_value = []
        with patch("src.rain_dashboard.main.WeatherAPI") as weather_api:
            weather_api.from_config.return_value = api
            with pytest.raises(SystemExit) as exc:
                main(["--config", config.config_file, "--city", "Nowhere"])

        assert exc.value.code == 1
        assert "Place not found: Nowhere" in capsys.readouterr().out

    def test_main_requires_both_coordinates(self, config):
        with pytest.raises(SystemExit) as exc:
            main(["--config", config.config_file, "--lat", "40.1"])
        assert exc.value.code == 1
