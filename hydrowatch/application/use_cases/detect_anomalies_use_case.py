"""
Application Use Case - Batch anomaly detection and alerting

Checks several sites concurrently. A failing site never fails the batch:
it is reported next to the successful results. When any site is
anomalous on real provider data a single alert summarizing them is
published; results computed from the canned fallback document are left
out of it.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Tuple, Union

import structlog

from hydrowatch.application.use_cases.anomaly_detection_use_case import (
    AnomalyDetectionUseCase,
)
from hydrowatch.domain.entities.errors import (
    AlertPublishError,
    ConfigurationError,
    DomainError,
)
from hydrowatch.domain.entities.prediction import (
    AnomalyBatchResult,
    PredictionResult,
    SiteFailure,
)
from hydrowatch.domain.gateways.alert_gateway import IAlertGateway

logger = structlog.get_logger(__name__)


def build_alert(
    items: Sequence[PredictionResult], title: str = "HydroWatch"
) -> Tuple[str, str]:
    """Subject and body of the alert for anomalous results."""
    subject = f"{title} Anomalies Detected ({len(items)})"
    message = "".join(
        f"Site {item.site_id} anomalous: observed={item.observed_value:.2f} "
        f"predicted={item.predicted_value:.2f} ({item.percent_change:.1f}%)\n"
        for item in items
    )
    return subject, message


class DetectAnomaliesUseCase:
    """Runs single-site detection over a batch of sites."""

    def __init__(
        self,
        detection: AnomalyDetectionUseCase,
        alert_gateway: Optional[IAlertGateway] = None,
        max_sites: int = 10,
        max_concurrency: int = 4,
        alert_title: str = "HydroWatch",
    ):
        self.detection = detection
        self.alert_gateway = alert_gateway
        self.max_sites = max_sites
        self.max_concurrency = max(1, max_concurrency)
        self.alert_title = alert_title

    async def execute(
        self,
        site_ids: Sequence[str],
        parameter_code: Optional[str] = None,
        threshold_percent: Optional[float] = None,
    ) -> AnomalyBatchResult:
        """
        Raises:
            ConfigurationError: When no site is given or too many are
        """
        if len(site_ids) > self.max_sites:
            raise ConfigurationError(
                f"At most {self.max_sites} sites can be checked per request",
                details={"requested": len(site_ids), "max_sites": self.max_sites},
            )
        sites = [site.strip() for site in site_ids if site and site.strip()]
        if not sites:
            raise ConfigurationError("At least one site id is required")

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(site_id: str) -> Union[PredictionResult, SiteFailure]:
            async with semaphore:
                try:
                    return await self.detection.execute(
                        site_id, parameter_code, threshold_percent
                    )
                except DomainError as exc:
                    logger.warning(
                        "anomaly_detection.site_failed",
                        site_id=site_id,
                        error=exc.message,
                        error_type=type(exc).__name__,
                    )
                    return SiteFailure(
                        site_id=site_id,
                        error=exc.message,
                        error_type=type(exc).__name__,
                    )
                except Exception as exc:
                    logger.error(
                        "anomaly_detection.site_crashed",
                        site_id=site_id,
                        error=str(exc),
                        exc_info=exc,
                    )
                    return SiteFailure(
                        site_id=site_id,
                        error=str(exc) or type(exc).__name__,
                        error_type=type(exc).__name__,
                    )

        outcomes = await asyncio.gather(*(run(site) for site in sites))

        result = AnomalyBatchResult()
        for outcome in outcomes:
            if isinstance(outcome, SiteFailure):
                result.failures.append(outcome)
            else:
                result.items.append(outcome)

        logger.info(
            "anomaly_detection.batch_completed",
            sites=len(sites),
            succeeded=len(result.items),
            failed=len(result.failures),
            anomalous=len(result.anomalous_items),
        )

        await self._alert(result.anomalous_items)
        return result

    async def _alert(self, anomalous: List[PredictionResult]) -> None:
        mocked = [item.site_id for item in anomalous if item.mock_data]
        if mocked:
            logger.warning("alerts.mock_data_skipped", site_ids=mocked)
        anomalous = [item for item in anomalous if not item.mock_data]
        if not anomalous or self.alert_gateway is None:
            return
        subject, message = build_alert(anomalous, self.alert_title)
        try:
            await self.alert_gateway.publish(subject, message)
        except AlertPublishError as exc:
            logger.warning("alerts.publish_failed", subject=subject, error=str(exc))
