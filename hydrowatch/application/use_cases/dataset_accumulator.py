"""Append-only accumulation of encoded rows into a stored dataset."""

from __future__ import annotations

from typing import Optional

import structlog

from hydrowatch.domain.entities.dataset import DatasetUpdate
from hydrowatch.domain.entities.errors import DatasetNotFoundError, DatasetStorageError
from hydrowatch.domain.entities.time_series import SourceTier
from hydrowatch.domain.repositories.dataset_repository import IDatasetRepository

logger = structlog.get_logger(__name__)


def merge_dataset(existing: bytes, new: bytes) -> bytes:
    """Concatenate ``new`` after ``existing`` with one separating newline."""
    if existing and not existing.endswith(b"\n"):
        return existing + b"\n" + new
    return existing + new


def count_rows(content: bytes) -> int:
    return sum(1 for line in content.split(b"\n") if line.strip())


class DatasetAccumulator:
    """Byte-level append of encoded rows onto the blob at a key.

    Row shape is not validated. Concurrent writers to one key race and the
    last save wins.
    """

    def __init__(self, repository: IDatasetRepository):
        self.repository = repository

    async def append(
        self,
        content: bytes,
        key: str,
        source_tier: Optional[SourceTier] = None,
    ) -> DatasetUpdate:
        created = False
        try:
            existing = await self.repository.load(key)
        except DatasetNotFoundError:
            existing, created = b"", True
        except DatasetStorageError as exc:
            logger.warning("dataset.load_failed", key=key, error=str(exc))
            existing, created = b"", True

        merged = merge_dataset(existing, content)
        await self.repository.save(merged, key)

        update = DatasetUpdate(
            dataset_key=key,
            rows_appended=count_rows(content),
            bytes_total=len(merged),
            created=created,
            source_tier=source_tier,
            content=merged,
        )
        logger.info(
            "dataset.appended",
            key=key,
            rows=update.rows_appended,
            bytes_total=update.bytes_total,
            created=created,
        )
        return update
