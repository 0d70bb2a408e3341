"""
Domain Gateway - Weather

This module defines the gateway interface for point weather lookups.
"""

from abc import ABC, abstractmethod

from hydrowatch.domain.entities.weather import WeatherReading


class IWeatherGateway(ABC):
    """Interface for the weather service."""

    @abstractmethod
    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherReading:
        """
        Fetch the current forecast period for a coordinate.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            Weather reading for the first forecast period

        Raises:
            WeatherLookupError: When the lookup fails for any reason
        """
        pass
