"""
Infrastructure Gateway - National Weather Service

Resolves a coordinate to its forecast office grid through ``/points`` and
reads the first forecast period as the current weather.
"""

from typing import Any, Dict

import httpx
import structlog

from hydrowatch.domain.entities.errors import WeatherLookupError
from hydrowatch.domain.entities.weather import WeatherReading
from hydrowatch.domain.gateways.weather_gateway import IWeatherGateway
from hydrowatch.shared.consts import DEFAULT_USER_AGENT

logger = structlog.get_logger(__name__)


def _properties(payload: Dict[str, Any], url: str) -> Dict[str, Any]:
    properties = payload.get("properties")
    if not isinstance(properties, dict):
        raise WeatherLookupError(f"Unexpected properties from {url}")
    return properties


class NwsWeatherGateway(IWeatherGateway):
    """Implementation of the weather gateway over api.weather.gov."""

    def __init__(
        self,
        base_url: str = "https://api.weather.gov",
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherReading:
        points_url = f"{self.base_url}/points/{latitude:.4f},{longitude:.4f}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                points = await self._get_json(client, points_url, headers)
                forecast_url = _properties(points, points_url).get("forecast")
                if not forecast_url or not isinstance(forecast_url, str):
                    raise WeatherLookupError(
                        "Weather points response has no forecast URL",
                        details={"latitude": latitude, "longitude": longitude},
                    )
                forecast = await self._get_json(client, forecast_url, headers)

        except httpx.HTTPStatusError as e:
            raise WeatherLookupError(
                f"Weather service returned status {e.response.status_code}",
                details={"url": str(e.request.url)},
            ) from e

        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise WeatherLookupError(f"Weather request failed: {e}") from e

        periods = _properties(forecast, forecast_url).get("periods")
        if (
            not isinstance(periods, list)
            or not periods
            or not isinstance(periods[0], dict)
        ):
            raise WeatherLookupError("Weather forecast has no periods")

        period = periods[0]
        try:
            temperature = int(round(float(period.get("temperature"))))
        except (TypeError, ValueError, OverflowError) as e:
            raise WeatherLookupError("Weather forecast has no temperature") from e

        reading = WeatherReading(
            temperature=temperature,
            unit=str(period.get("temperatureUnit") or ""),
            wind_speed=str(period.get("windSpeed") or ""),
            wind_direction=str(period.get("windDirection") or ""),
        )
        logger.debug(
            "weather.fetched",
            latitude=latitude,
            longitude=longitude,
            temperature=reading.temperature,
            unit=reading.unit,
        )
        return reading

    async def _get_json(
        self, client: httpx.AsyncClient, url: str, headers: Dict[str, str]
    ) -> Dict[str, Any]:
        response = await client.get(url, headers=headers)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise WeatherLookupError(f"Invalid JSON from {url}") from e
        if not isinstance(payload, dict):
            raise WeatherLookupError(f"Unexpected payload from {url}")
        return payload
