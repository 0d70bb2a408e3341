"""Domain entity for a point weather reading."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """First forecast period for a coordinate."""

    temperature: int
    unit: str
    wind_speed: str
    wind_direction: str
