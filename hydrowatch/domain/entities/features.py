"""Domain entities for encoded feature rows."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .time_series import Observation

LABEL_COLUMN = "value"
FEATURE_COLUMNS = ("timestamp_unix", "latitude", "longitude", "wx_temp")


@dataclass(frozen=True, slots=True)
class FeatureRow:
    """
    One training/inference record.

    The label (observed value) comes first, followed by the four features.
    Text encoding is part of the stored dataset contract: six-decimal fixed
    floats, integer epoch seconds and integer temperature, no quoting.
    """

    label_value: float
    timestamp_epoch_seconds: int
    latitude: float
    longitude: float
    weather_temperature: int

    @classmethod
    def from_observation(
        cls, observation: Observation, weather_temperature: float
    ) -> "FeatureRow":
        return cls(
            label_value=observation.value,
            timestamp_epoch_seconds=math.floor(observation.timestamp.timestamp()),
            latitude=observation.latitude,
            longitude=observation.longitude,
            weather_temperature=int(round(weather_temperature)),
        )

    def to_fields(self) -> List[str]:
        return [
            f"{self.label_value:.6f}",
            str(self.timestamp_epoch_seconds),
            f"{self.latitude:.6f}",
            f"{self.longitude:.6f}",
            str(self.weather_temperature),
        ]
