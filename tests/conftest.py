from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import pytest

from hydrowatch.domain.entities.errors import (
    DatasetNotFoundError,
    ProviderFetchError,
    WeatherLookupError,
)
from hydrowatch.domain.entities.time_series import Granularity
from hydrowatch.domain.entities.weather import WeatherReading

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_document(
    points: Sequence[Tuple[Any, Any]],
    site_id: str = "03339000",
    latitude: float = 40.1010833,
    longitude: float = -87.5976111,
    extra_series: Sequence[Dict[str, Any]] = (),
) -> bytes:
    """Build a WaterML-as-JSON document with one series of (value, dateTime)."""
    series = {
        "name": f"USGS:{site_id}:00060:00000",
        "sourceInfo": {
            "siteCode": [{"value": site_id}],
            "geoLocation": {
                "geogLocation": {"latitude": latitude, "longitude": longitude}
            },
        },
        "variable": {"unit": {"unitCode": "ft3/s"}},
        "values": [
            {
                "value": [
                    {"value": value, "qualifiers": ["P"], "dateTime": date_time}
                    for value, date_time in points
                ]
            }
        ],
    }
    return json.dumps({"value": {"timeSeries": [series, *extra_series]}}).encode()


class RecordingLogger:
    """Stands in for a module-level structlog logger."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def bind(self, **kwargs: Any) -> "RecordingLogger":
        return self

    def _record(self, level: str):
        def log(event: str, **kwargs: Any) -> None:
            self.events.append((level, event, kwargs))

        return log

    def __getattr__(self, level: str):
        if level.startswith("_"):
            raise AttributeError(level)
        return self._record(level)

    def names(self, level: Optional[str] = None) -> List[str]:
        return [name for lvl, name, _ in self.events if level in (None, lvl)]


class StubWeatherGateway:
    def __init__(self, temperature: int = 71, fail: bool = False) -> None:
        self.temperature = temperature
        self.fail = fail
        self.calls: List[Tuple[float, float]] = []

    async def fetch_weather(self, latitude: float, longitude: float) -> WeatherReading:
        self.calls.append((latitude, longitude))
        if self.fail:
            raise WeatherLookupError("weather down")
        return WeatherReading(
            temperature=self.temperature,
            unit="F",
            wind_speed="5 mph",
            wind_direction="NW",
        )


class StubTimeSeriesGateway:
    """Answers per granularity; granularities in ``failing`` raise."""

    def __init__(
        self,
        documents: Optional[Dict[str, bytes]] = None,
        failing: Sequence[Granularity] = (),
    ) -> None:
        self.documents = documents or {}
        self.failing = set(failing)
        self.calls: List[Tuple[List[str], str, Granularity]] = []

    async def fetch(
        self, site_ids: Sequence[str], parameter_code: str, granularity: Granularity
    ) -> List[Optional[bytes]]:
        self.calls.append((list(site_ids), parameter_code, granularity))
        if granularity in self.failing:
            raise ProviderFetchError("provider down", site_id=site_ids[0])
        return [
            self.documents.get(site.strip()) if site.strip() else None
            for site in site_ids
        ]


class StubInferenceGateway:
    def __init__(self, output: bytes = b"66.2", error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.calls: List[Tuple[str, bytes, str]] = []

    async def invoke(self, endpoint_name: str, payload: bytes, target_model: str):
        self.calls.append((endpoint_name, payload, target_model))
        if self.error is not None:
            raise self.error
        return self.output


class InMemoryDatasetRepository:
    def __init__(self, blobs: Optional[Dict[str, bytes]] = None) -> None:
        self.blobs: Dict[str, bytes] = dict(blobs or {})
        self.saves: List[str] = []
        self.save_error: Optional[Exception] = None

    async def load(self, key: str) -> bytes:
        if key not in self.blobs:
            raise DatasetNotFoundError(key)
        return self.blobs[key]

    async def save(self, content: bytes, key: str) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saves.append(key)
        self.blobs[key] = content


class StubAlertGateway:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.published: List[Tuple[str, str]] = []

    async def publish(self, subject: str, message: str) -> None:
        if self.error is not None:
            raise self.error
        self.published.append((subject, message))


class FakeCollection:
    def __init__(self, name: str = "collection") -> None:
        self.name = name
        self.created_indexes: List[Tuple[Any, ...]] = []

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys


@pytest.fixture()
def usgs_document() -> bytes:
    return make_document(
        [
            ("70.1", "2025-08-24T09:45:00.000-06:00"),
            ("72.3", "2025-08-24T10:15:00.000-06:00"),
            ("71.0", "2025-08-24T10:00:00.000-06:00"),
        ]
    )


@pytest.fixture()
def weather_gateway() -> StubWeatherGateway:
    return StubWeatherGateway()


@pytest.fixture()
def dataset_repository() -> InMemoryDatasetRepository:
    return InMemoryDatasetRepository()


@pytest.fixture()
def recording_logger() -> Iterator[RecordingLogger]:
    yield RecordingLogger()
