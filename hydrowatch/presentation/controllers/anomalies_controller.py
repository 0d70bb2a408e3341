"""
Presentation Layer - Anomalies Controller

Endpoints that compare the latest observation of monitoring sites with
the value predicted by the inference endpoint.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query

from hydrowatch.application.dtos.anomaly_dto import (
    AnomalyCheckRequestDTO,
    AnomalyCheckResponseDTO,
    PredictionResultDTO,
)
from hydrowatch.application.use_cases.anomaly_detection_use_case import (
    AnomalyDetectionUseCase,
)
from hydrowatch.application.use_cases.detect_anomalies_use_case import (
    DetectAnomaliesUseCase,
)
from hydrowatch.domain.entities.errors import DomainError
from hydrowatch.main.container import AppContainer
from hydrowatch.presentation.controllers.errors import http_error_for

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/anomalies", tags=["Anomalies"])


@router.post(
    "/check",
    response_model=AnomalyCheckResponseDTO,
    summary="Check several sites for anomalies",
    description="""
    Run the fetch, encode, infer and decide pipeline for every site. Sites
    that fail are reported in `failures` without failing the request. When
    any site is anomalous a single alert is published.
    """,
)
@inject
async def check_anomalies(
    payload: AnomalyCheckRequestDTO,
    detect_use_case: DetectAnomaliesUseCase = Depends(
        Provide[AppContainer.detect_anomalies_use_case]
    ),
) -> AnomalyCheckResponseDTO:
    try:
        result = await detect_use_case.execute(
            payload.sites, payload.parameter, payload.threshold_percent
        )
    except DomainError as exc:
        raise http_error_for(exc)
    return AnomalyCheckResponseDTO.from_domain(result)


@router.post(
    "/{site_id}",
    response_model=PredictionResultDTO,
    summary="Check one site for an anomaly",
)
@inject
async def check_site(
    site_id: str,
    parameter: Optional[str] = Query(
        default=None, description="Parameter code, defaults to discharge"
    ),
    detection_use_case: AnomalyDetectionUseCase = Depends(
        Provide[AppContainer.anomaly_detection_use_case]
    ),
) -> PredictionResultDTO:
    try:
        result = await detection_use_case.execute(site_id, parameter)
    except DomainError as exc:
        logger.warning(
            "anomaly_detection.failed",
            site_id=site_id,
            error=exc.message,
            error_type=type(exc).__name__,
        )
        raise http_error_for(exc)
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "anomaly_detection.unexpected_error",
            site_id=site_id,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")
    return PredictionResultDTO.from_domain(result)
