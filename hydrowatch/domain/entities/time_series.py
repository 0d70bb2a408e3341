"""Domain entities for provider time series and their parsed observations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

# Raw provider payload (a WaterML-as-JSON document), kept opaque until parsed.
RawDocument = bytes


class Granularity(str, Enum):
    """Provider endpoint a raw document is requested from."""

    DAILY_30D = "daily30d"
    INSTANTANEOUS = "instantaneous"


class SourceTier(str, Enum):
    """Rung of the fallback ladder that produced a batch of documents."""

    DAILY_30D = "daily30d"
    INSTANTANEOUS = "instantaneous"
    MOCK = "mock"

    @classmethod
    def for_granularity(cls, granularity: Granularity) -> "SourceTier":
        return cls(granularity.value)


@dataclass(frozen=True, slots=True)
class Observation:
    """A single reported value for a site at an absolute instant."""

    site_id: str
    timestamp: datetime
    value: float
    unit: str
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class SeriesObservations:
    """Observations of one named series, in document order."""

    name: str
    site_id: str
    unit: str
    latitude: float
    longitude: float
    observations: List[Observation] = field(default_factory=list)

    def latest(self) -> Optional[Observation]:
        """Latest observation by timestamp; ties keep the earlier point."""
        latest: Optional[Observation] = None
        for observation in self.observations:
            if latest is None or observation.timestamp > latest.timestamp:
                latest = observation
        return latest


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Result of a single traversal of a raw time-series document."""

    series: List[SeriesObservations] = field(default_factory=list)
    skipped_points: int = 0

    @property
    def observation_count(self) -> int:
        return sum(len(item.observations) for item in self.series)

    def latest_observation(self) -> Optional[Observation]:
        """Latest observation of the first series that has any."""
        for item in self.series:
            latest = item.latest()
            if latest is not None:
                return latest
        return None


@dataclass(frozen=True, slots=True)
class TimeSeriesBatch:
    """Raw documents aligned by index with the requested site ids."""

    site_ids: List[str]
    documents: List[Optional[RawDocument]]
    tier: SourceTier

    @property
    def is_mock(self) -> bool:
        return self.tier is SourceTier.MOCK

    def present_documents(self) -> Sequence[RawDocument]:
        return [document for document in self.documents if document]
