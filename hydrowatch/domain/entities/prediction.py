"""Domain entities for inference outcomes and anomaly decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class AnomalyDecision:
    """Outcome of comparing an observed value with its prediction."""

    observed_value: float
    predicted_value: float
    percent_change: float
    anomalous: bool


@dataclass(frozen=True, slots=True)
class PredictionResult:
    """Result of one fetch, encode, infer and decide run for a site."""

    site_id: str
    dataset_key: str
    observed_value: float
    predicted_value: float
    percent_change: float
    anomalous: bool
    mock_data: bool = False
    anomalous_reason: Optional[str] = None

    @classmethod
    def from_decision(
        cls,
        site_id: str,
        dataset_key: str,
        decision: AnomalyDecision,
        *,
        mock_data: bool = False,
        anomalous_reason: Optional[str] = None,
    ) -> "PredictionResult":
        return cls(
            site_id=site_id,
            dataset_key=dataset_key,
            observed_value=decision.observed_value,
            predicted_value=decision.predicted_value,
            percent_change=decision.percent_change,
            anomalous=decision.anomalous,
            mock_data=mock_data,
            anomalous_reason=anomalous_reason if decision.anomalous else None,
        )


@dataclass(frozen=True, slots=True)
class SiteFailure:
    """A site whose pipeline run failed, with the reason."""

    site_id: str
    error: str
    error_type: str


@dataclass(slots=True)
class AnomalyBatchResult:
    """Partial-success outcome of checking several sites."""

    items: List[PredictionResult] = field(default_factory=list)
    failures: List[SiteFailure] = field(default_factory=list)

    @property
    def anomalous_items(self) -> List[PredictionResult]:
        return [item for item in self.items if item.anomalous]
