"""Domain entities for accumulated datasets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .time_series import SourceTier


@dataclass(frozen=True, slots=True)
class DatasetUpdate:
    """Summary of one append to a stored dataset."""

    dataset_key: str
    rows_appended: int
    bytes_total: int
    created: bool
    source_tier: Optional[SourceTier] = None
    content: bytes = field(default=b"", repr=False, compare=False)

    @property
    def mock_data(self) -> bool:
        return self.source_tier is SourceTier.MOCK
