"""
Application Use Case - Dataset preprocessing

Fetches documents for a batch of sites through the full fallback ladder,
encodes them and appends the rows to a stored dataset.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

import structlog

from hydrowatch.application.use_cases.dataset_accumulator import DatasetAccumulator
from hydrowatch.application.use_cases.feature_encoder import FeatureEncoder
from hydrowatch.application.use_cases.time_series_source import TimeSeriesSource
from hydrowatch.domain.entities.dataset import DatasetUpdate
from hydrowatch.domain.entities.errors import ConfigurationError
from hydrowatch.domain.entities.time_series import RawDocument, SourceTier
from hydrowatch.shared.consts import DEFAULT_PARAMETER_CODE

logger = structlog.get_logger(__name__)


def default_dataset_key(now: datetime) -> str:
    return f"processed/{int(now.timestamp())}.csv"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PreprocessDatasetUseCase:
    """Fetch, encode and accumulate rows for a batch of sites."""

    def __init__(
        self,
        source: TimeSeriesSource,
        encoder: FeatureEncoder,
        accumulator: DatasetAccumulator,
        default_parameter_code: str = DEFAULT_PARAMETER_CODE,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.encoder = encoder
        self.accumulator = accumulator
        self.default_parameter_code = default_parameter_code
        self._clock = clock

    def resolve_dataset_key(self, dataset_key: Optional[str] = None) -> str:
        return (dataset_key or "").strip() or default_dataset_key(self._clock())

    async def encode_and_accumulate(
        self,
        documents: Sequence[Optional[RawDocument]],
        dataset_key: str,
        source_tier: Optional[SourceTier] = None,
    ) -> DatasetUpdate:
        """Encode ``documents`` and append the rows to ``dataset_key``.

        The returned update carries the full dataset content.
        """
        if not (dataset_key or "").strip():
            raise ConfigurationError("Dataset key is required")
        encoded = await self.encoder.encode_batch(documents)
        return await self.accumulator.append(
            encoded, dataset_key.strip(), source_tier=source_tier
        )

    async def execute(
        self,
        site_ids: Sequence[str],
        parameter_code: Optional[str] = None,
        dataset_key: Optional[str] = None,
    ) -> DatasetUpdate:
        """
        Raises:
            ConfigurationError: When no site id is given
            DocumentParseError: When a provider document is not JSON
            DatasetStorageError: When the dataset cannot be saved
        """
        sites = [str(site or "").strip() for site in site_ids]
        if not any(sites):
            raise ConfigurationError("At least one site id is required")
        parameter_code = (parameter_code or "").strip() or self.default_parameter_code
        key = self.resolve_dataset_key(dataset_key)

        logger.info(
            "preprocessing.start",
            sites=sites,
            parameter_code=parameter_code,
            key=key,
        )
        batch = await self.source.fetch(sites, parameter_code)
        update = await self.encode_and_accumulate(batch.documents, key, batch.tier)
        logger.info(
            "preprocessing.completed",
            key=key,
            tier=batch.tier.value,
            rows=update.rows_appended,
            mock_data=update.mock_data,
        )
        return update
