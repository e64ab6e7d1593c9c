"""
Tests for weather conditions, drink recommendations and the per-location cache.
"""

import httpx
import pytest

from test_fixtures import API, client, install_mock_transport
from app.config import settings
from services.weather_service import (
    WeatherService,
    build_conditions,
    describe,
    drink_recommendations,
)


def open_meteo(temperature, code, calls=None):
    """Mock transport handler answering /forecast with fixed conditions"""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        assert request.url.path.endswith("/forecast")
        return httpx.Response(
            200,
            json={"current": {"temperature_2m": temperature, "weather_code": code}},
        )

    return handler


@pytest.mark.parametrize(
    "code,expected",
    [
        (0, "clear sky"),
        (2, "partly cloudy"),
        (45, "foggy"),
        (53, "drizzle"),
        (63, "rain"),
        (75, "snow"),
        (81, "rain showers"),
        (85, "snow showers"),
        (95, "thunderstorm"),
    ],
)
def test_describe_wmo_codes(code, expected):
    assert describe(code) == expected


def test_hot_weather_suggests_cold_drinks():
    rec = drink_recommendations(build_conditions(88, 0))
    assert rec["categories"] == ["smoothie", "juice", "iced"]
    assert "88°F" in rec["description"]


def test_rain_suggests_warm_drinks_even_when_mild():
    weather = build_conditions(65, 63)
    assert weather["is_raining"] is True
    rec = drink_recommendations(weather)
    assert rec["categories"] == ["coffee", "tea", "hot chocolate", "warm"]
    assert "rainy" in rec["description"]


def test_cold_and_mild_weather():
    assert "warm" in drink_recommendations(build_conditions(41, 1))["categories"]
    mild = drink_recommendations(build_conditions(70, 1))
    assert mild["categories"] == ["smoothie", "juice", "protein shake"]


def test_thresholds_are_strict():
    assert build_conditions(50, 0)["is_cold"] is False
    assert build_conditions(80, 0)["is_hot"] is False


def test_current_weather_endpoint_queries_open_meteo():
    calls = []
    install_mock_transport(open_meteo(72.4, 3, calls))

    r = client.get(f"{API}/weather/current", params={"lat": 45.52, "lon": -122.68})

    assert r.status_code == 200
    assert r.json()["description"] == "partly cloudy"
    params = dict(calls[0].url.params)
    assert params["latitude"] == "45.52"
    assert params["temperature_unit"] == "fahrenheit"


def test_cache_is_shared_until_ttl_expires(monkeypatch):
    calls = []
    install_mock_transport(open_meteo(30, 71, calls))
    now = [1000.0]
    monkeypatch.setattr(WeatherService, "clock", lambda: now[0])

    WeatherService.current(45.521, -122.681)
    WeatherService.current(45.519, -122.679)
    assert len(calls) == 1

    now[0] += settings.weather_cache_ttl_sec + 1
    weather = WeatherService.current(45.52, -122.68)
    assert len(calls) == 2
    assert weather["description"] == "snow"


def test_cache_drops_expired_and_oldest_entries(monkeypatch):
    install_mock_transport(open_meteo(65, 1))
    now = [1000.0]
    monkeypatch.setattr(WeatherService, "clock", lambda: now[0])
    monkeypatch.setattr(settings, "weather_cache_max_entries", 2)

    WeatherService.current(10, 10)
    now[0] += settings.weather_cache_ttl_sec
    WeatherService.current(20, 20)
    assert list(WeatherService._cache) == [(20, 20)]

    WeatherService.current(30, 30)
    WeatherService.current(40, 40)
    assert list(WeatherService._cache) == [(30, 30), (40, 40)]


def test_default_location_is_used_without_coordinates():
    calls = []
    install_mock_transport(open_meteo(60, 0, calls))

    body = client.get(f"{API}/weather/drink-suggestions").json()

    assert body["weather"]["temperature"] == 60
    assert float(dict(calls[0].url.params)["latitude"]) == settings.default_latitude


def test_upstream_failure_is_weather_unavailable():
    install_mock_transport(lambda request: httpx.Response(500))
    r = client.get(f"{API}/weather/current")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "WEATHER_UNAVAILABLE"


def test_incomplete_payload_is_weather_unavailable():
    install_mock_transport(lambda request: httpx.Response(200, json={"current": {}}))
    r = client.get(f"{API}/weather/current", params={"lat": 10, "lon": 10})
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "WEATHER_UNAVAILABLE"


def test_out_of_range_coordinates_are_rejected():
    assert client.get(f"{API}/weather/current", params={"lat": 91}).status_code == 400
