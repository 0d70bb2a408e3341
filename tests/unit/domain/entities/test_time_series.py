from __future__ import annotations

from datetime import datetime, timezone

from hydrowatch.domain.entities.time_series import (
    Granularity,
    Observation,
    ParsedDocument,
    SeriesObservations,
    SourceTier,
    TimeSeriesBatch,
)


def _obs(value: float, hour: int) -> Observation:
    return Observation(
        site_id="1",
        timestamp=datetime(2025, 1, 1, hour, tzinfo=timezone.utc),
        value=value,
        unit="ft3/s",
        latitude=0.0,
        longitude=0.0,
    )


def _series(*observations: Observation) -> SeriesObservations:
    return SeriesObservations(
        name="s",
        site_id="1",
        unit="ft3/s",
        latitude=0.0,
        longitude=0.0,
        observations=list(observations),
    )


def test_latest_is_by_timestamp_not_document_order() -> None:
    series = _series(_obs(1.0, 3), _obs(2.0, 5), _obs(3.0, 4))
    assert series.latest().value == 2.0


def test_latest_tie_keeps_first_point() -> None:
    series = _series(_obs(1.0, 5), _obs(2.0, 5))
    assert series.latest().value == 1.0


def test_parsed_document_latest_skips_empty_series() -> None:
    document = ParsedDocument(series=[_series(), _series(_obs(9.0, 1))])
    assert document.latest_observation().value == 9.0
    assert document.observation_count == 1


def test_parsed_document_without_observations() -> None:
    assert ParsedDocument().latest_observation() is None


def test_source_tier_for_granularity_and_mock_flag() -> None:
    assert SourceTier.for_granularity(Granularity.DAILY_30D) is SourceTier.DAILY_30D
    batch = TimeSeriesBatch(site_ids=["a", ""], documents=[b"{}", None], tier=SourceTier.MOCK)
    assert batch.is_mock is True
    assert batch.present_documents() == [b"{}"]
