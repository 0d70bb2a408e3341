"""
Application DTOs - Anomaly detection

Request and response payloads for single-site and batch anomaly checks.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from hydrowatch.domain.entities.prediction import (
    AnomalyBatchResult,
    PredictionResult,
    SiteFailure,
)


class AnomalyCheckRequestDTO(BaseModel):
    """Payload for checking several sites at once."""

    sites: List[str] = Field(
        default_factory=list, description="Monitoring site identifiers"
    )
    parameter: Optional[str] = Field(
        default=None, description="Parameter code, defaults to discharge (00060)"
    )
    threshold_percent: Optional[float] = Field(
        default=None,
        description="Deviation threshold in percent; values <= 0 use the default",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "sites": ["03339000", "05558300"],
                "parameter": "00060",
                "threshold_percent": 20,
            }
        }
    }


class PredictionResultDTO(BaseModel):
    """Result of one site's fetch, infer and detect run."""

    site: str
    observed_value: float
    predicted_value: float
    percent_change: float
    anomalous: bool
    anomalous_reason: Optional[str] = None
    dataset_key: str = Field(description="Snapshot of the rows used for inference")
    mock_data: bool = Field(
        default=False,
        description="True when the provider was unreachable and canned data was used",
    )

    @classmethod
    def from_domain(cls, result: PredictionResult) -> "PredictionResultDTO":
        return cls(
            site=result.site_id,
            observed_value=result.observed_value,
            predicted_value=result.predicted_value,
            percent_change=result.percent_change,
            anomalous=result.anomalous,
            anomalous_reason=result.anomalous_reason,
            dataset_key=result.dataset_key,
            mock_data=result.mock_data,
        )


class SiteFailureDTO(BaseModel):
    """A site that could not be checked."""

    site: str
    error: str
    error_type: str

    @classmethod
    def from_domain(cls, failure: SiteFailure) -> "SiteFailureDTO":
        return cls(
            site=failure.site_id, error=failure.error, error_type=failure.error_type
        )


class AnomalyCheckResponseDTO(BaseModel):
    """Partial-success response of a batch check."""

    items: List[PredictionResultDTO] = Field(default_factory=list)
    failures: List[SiteFailureDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: AnomalyBatchResult) -> "AnomalyCheckResponseDTO":
        return cls(
            items=[PredictionResultDTO.from_domain(item) for item in result.items],
            failures=[
                SiteFailureDTO.from_domain(failure) for failure in result.failures
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "items": [
                    {
                        "site": "03339000",
                        "observed_value": 72.3,
                        "predicted_value": 66.2,
                        "percent_change": 8.437,
                        "anomalous": False,
                        "anomalous_reason": None,
                        "dataset_key": "processed/03339000/1756052100.csv",
                        "mock_data": False,
                    }
                ],
                "failures": [
                    {
                        "site": "05558300",
                        "error": "Inference endpoint returned status 500",
                        "error_type": "EndpointError",
                    }
                ],
            }
        }
    }
