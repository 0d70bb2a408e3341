from __future__ import annotations

import httpx
import pytest

from hydrowatch.application.use_cases.feature_encoder import FeatureEncoder
from hydrowatch.domain.entities.errors import WeatherLookupError
from hydrowatch.infrastructure.gateways.nws_weather_gateway import NwsWeatherGateway

POINTS_URL = "https://nws/points/40.1011,-87.5976"
FORECAST_URL = "https://nws/gridpoints/ILX/95,71/forecast"


class _StubResponse:
    def __init__(self, status_code: int, json_data=None):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", POINTS_URL)
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, routes: dict):
        self._routes = routes
        self.calls = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, headers=None, **kwargs):
        self.calls.append((url, headers))
        outcome = self._routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _install(monkeypatch, routes: dict) -> _StubAsyncClient:
    client = _StubAsyncClient(routes)
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)
    return client


def _forecast(temperature) -> _StubResponse:
    return _StubResponse(
        200,
        {
            "properties": {
                "periods": [
                    {
                        "temperature": temperature,
                        "temperatureUnit": "F",
                        "windSpeed": "10 mph",
                        "windDirection": "SW",
                    },
                    {"temperature": 50},
                ]
            }
        },
    )


@pytest.mark.asyncio
async def test_fetch_weather_reads_first_period(monkeypatch) -> None:
    client = _install(
        monkeypatch,
        {
            POINTS_URL: _StubResponse(200, {"properties": {"forecast": FORECAST_URL}}),
            FORECAST_URL: _forecast(70.6),
        },
    )
    gateway = NwsWeatherGateway("https://nws/", user_agent="hydrowatch-tests")

    reading = await gateway.fetch_weather(40.1010833, -87.5976111)

    assert reading.temperature == 71
    assert reading.unit == "F"
    assert reading.wind_direction == "SW"
    assert [url for url, _ in client.calls] == [POINTS_URL, FORECAST_URL]
    assert client.calls[0][1]["User-Agent"] == "hydrowatch-tests"


@pytest.mark.asyncio
async def test_missing_forecast_url_raises(monkeypatch) -> None:
    _install(monkeypatch, {POINTS_URL: _StubResponse(200, {"properties": {}})})

    with pytest.raises(WeatherLookupError):
        await NwsWeatherGateway("https://nws").fetch_weather(40.1010833, -87.5976111)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "points",
    [_StubResponse(404), _StubResponse(200), httpx.ReadTimeout("slow")],
)
async def test_points_failures_raise(monkeypatch, points) -> None:
    _install(monkeypatch, {POINTS_URL: points})

    with pytest.raises(WeatherLookupError):
        await NwsWeatherGateway("https://nws").fetch_weather(40.1010833, -87.5976111)


@pytest.mark.asyncio
async def test_forecast_without_temperature_raises(monkeypatch) -> None:
    _install(
        monkeypatch,
        {
            POINTS_URL: _StubResponse(200, {"properties": {"forecast": FORECAST_URL}}),
            FORECAST_URL: _forecast(None),
        },
    )

    with pytest.raises(WeatherLookupError):
        await NwsWeatherGateway("https://nws").fetch_weather(40.1010833, -87.5976111)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "points_payload",
    [
        {"properties": [{"forecast": FORECAST_URL}]},
        {"properties": "ILX"},
        {"properties": {"forecast": ["not", "a", "url"]}},
    ],
)
async def test_malformed_points_payload_raises(monkeypatch, points_payload) -> None:
    _install(monkeypatch, {POINTS_URL: _StubResponse(200, points_payload)})

    with pytest.raises(WeatherLookupError):
        await NwsWeatherGateway("https://nws").fetch_weather(40.1010833, -87.5976111)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "forecast_payload",
    [
        {"properties": {"periods": {"0": {"temperature": 70}}}},
        {"properties": {"periods": "sunny"}},
        {"properties": None},
        {"properties": {"periods": [{"temperature": float("inf")}]}},
    ],
)
async def test_malformed_forecast_payload_raises(monkeypatch, forecast_payload) -> None:
    _install(
        monkeypatch,
        {
            POINTS_URL: _StubResponse(200, {"properties": {"forecast": FORECAST_URL}}),
            FORECAST_URL: _StubResponse(200, forecast_payload),
        },
    )

    with pytest.raises(WeatherLookupError):
        await NwsWeatherGateway("https://nws").fetch_weather(40.1010833, -87.5976111)


@pytest.mark.asyncio
async def test_encoder_uses_zero_temperature_for_malformed_weather(
    monkeypatch, usgs_document
) -> None:
    _install(
        monkeypatch,
        {POINTS_URL: _StubResponse(200, {"properties": [{"forecast": FORECAST_URL}]})},
    )
    encoder = FeatureEncoder(NwsWeatherGateway("https://nws"))

    encoded = await encoder.encode_document(usgs_document)

    assert len(encoded.rows) == 3
    assert all(row.weather_temperature == 0 for row in encoded.rows)
    assert encoded.content.decode().splitlines()[0].endswith(",0")
