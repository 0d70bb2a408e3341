"""Application DTOs for dataset preprocessing."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from hydrowatch.domain.entities.dataset import DatasetUpdate


class PreprocessRequestDTO(BaseModel):
    """Payload for fetching, encoding and accumulating site data."""

    sites: List[str] = Field(
        default_factory=list, description="Monitoring site identifiers"
    )
    parameter: Optional[str] = Field(default=None, description="Parameter code")
    dataset_key: Optional[str] = Field(
        default=None,
        description="Dataset to append to; a timestamped key is generated if omitted",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "sites": ["03339000"],
                "parameter": "00060",
                "dataset_key": "processed/training.csv",
            }
        }
    }


class PreprocessResponseDTO(BaseModel):
    """Summary of a dataset append."""

    dataset_key: str
    rows_appended: int
    bytes_total: int
    source_tier: Optional[str] = None
    mock_data: bool = False

    @classmethod
    def from_domain(cls, update: DatasetUpdate) -> "PreprocessResponseDTO":
        return cls(
            dataset_key=update.dataset_key,
            rows_appended=update.rows_appended,
            bytes_total=update.bytes_total,
            source_tier=update.source_tier.value if update.source_tier else None,
            mock_data=update.mock_data,
        )


class PreprocessTaskDTO(BaseModel):
    """Reference to a queued preprocessing task."""

    task_id: str
    dataset_key: str
