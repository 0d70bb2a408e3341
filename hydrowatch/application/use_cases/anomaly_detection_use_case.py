"""
Application Use Case - Single-site anomaly detection

Runs fetch, encode, optional persistence, inference and the anomaly
decision for one site. Configuration, fetch, encode, inference and parse
failures abort the run; dataset persistence and weather lookups degrade
gracefully.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from hydrowatch.application.use_cases.dataset_accumulator import DatasetAccumulator
from hydrowatch.application.use_cases.feature_encoder import FeatureEncoder
from hydrowatch.application.use_cases.inference_client import InferenceClient
from hydrowatch.application.use_cases.time_series_source import TimeSeriesSource
from hydrowatch.domain.entities.errors import (
    ConfigurationError,
    DomainError,
    NoObservationsError,
    ProviderFetchError,
)
from hydrowatch.domain.entities.prediction import PredictionResult
from hydrowatch.domain.services.anomaly_decider import AnomalyDecider
from hydrowatch.shared.consts import DEFAULT_PARAMETER_CODE

logger = structlog.get_logger(__name__)


def site_snapshot_key(site_id: str, now: datetime) -> str:
    return f"processed/{site_id}/{int(now.timestamp())}.csv"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnomalyDetectionUseCase:
    """Process-infer-and-detect pipeline for a single site."""

    def __init__(
        self,
        source: TimeSeriesSource,
        encoder: FeatureEncoder,
        inference_client: InferenceClient,
        decider: AnomalyDecider,
        accumulator: Optional[DatasetAccumulator] = None,
        anomalous_reason: str = "high discharge",
        default_parameter_code: str = DEFAULT_PARAMETER_CODE,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.encoder = encoder
        self.inference_client = inference_client
        self.decider = decider
        self.accumulator = accumulator
        self.anomalous_reason = anomalous_reason
        self.default_parameter_code = default_parameter_code
        self._clock = clock

    async def execute(
        self,
        site_id: str,
        parameter_code: Optional[str] = None,
        threshold_percent: Optional[float] = None,
    ) -> PredictionResult:
        """
        Detect whether the latest observation of a site is anomalous.

        Args:
            site_id: Monitoring site identifier
            parameter_code: Measured quantity, defaults to discharge
            threshold_percent: Optional override of the configured threshold

        Returns:
            PredictionResult for the site

        Raises:
            ConfigurationError: Missing site id or inference configuration
            ProviderFetchError: No provider tier produced a document
            ParseError: Document or prediction output could not be used
            EndpointError: The inference endpoint call failed
        """
        site_id = (site_id or "").strip()
        if not site_id:
            raise ConfigurationError("Site id is required")
        self.inference_client.ensure_configured()
        parameter_code = (parameter_code or "").strip() or self.default_parameter_code

        log = logger.bind(site_id=site_id, parameter_code=parameter_code)
        log.info("anomaly_detection.start")

        batch = await self.source.fetch([site_id], parameter_code)
        raw = batch.documents[0] if batch.documents else None
        if not raw:
            raise ProviderFetchError("No document returned for site", site_id=site_id)

        encoded = await self.encoder.encode_document(raw)
        if encoded.latest is None:
            raise NoObservationsError(
                "Document has no observation with a valid timestamp",
                details={"site_id": site_id, "skipped_points": encoded.skipped_points},
            )

        dataset_key = site_snapshot_key(site_id, self._clock())
        await self._persist(encoded.content, dataset_key, batch.tier)

        predicted = await self.inference_client.predict(encoded.content)
        decision = self.decider.decide(
            encoded.latest.value, predicted, threshold_percent
        )

        result = PredictionResult.from_decision(
            site_id,
            dataset_key,
            decision,
            mock_data=batch.is_mock,
            anomalous_reason=self.anomalous_reason,
        )
        log.info(
            "anomaly_detection.completed",
            observed=result.observed_value,
            predicted=result.predicted_value,
            percent_change=round(result.percent_change, 2),
            anomalous=result.anomalous,
            mock_data=result.mock_data,
        )
        return result

    async def _persist(self, content: bytes, key: str, tier) -> None:
        if self.accumulator is None:
            return
        try:
            await self.accumulator.append(content, key, source_tier=tier)
        except DomainError as exc:
            logger.warning("dataset.persist_failed", key=key, error=str(exc))
