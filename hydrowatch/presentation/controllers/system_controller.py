"""
Presentation Layer - System Controller

Liveness of the service and its collaborators: the dataset store, the
worker transport and the water, weather and inference hosts.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from hydrowatch.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from hydrowatch.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from hydrowatch.domain.entities.health import ServiceStatus
from hydrowatch.main.container import AppContainer
from hydrowatch.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={503: {"model": SystemHealthDTO, "description": "A dependency is down"}},
)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide[AppContainer.get_health_status_use_case]
    ),
) -> SystemHealthDTO:
    """Dependency health; answers 503 while any dependency is down."""
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("system.health_failed", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    if health_status.status is ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning(
            "system.health_down",
            down=health_status.names_with_status(ServiceStatus.DOWN),
        )
    else:
        logger.debug("system.health_checked", status=health_status.status.value)
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide[AppContainer.get_application_info_use_case]
    ),
) -> ApplicationInfoDTO:
    started_at = getattr(request.app.state, "started_at", None)
    try:
        info_response = await get_application_info_use_case.execute(started_at)
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("system.info_failed", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc
    logger.debug("system.info_retrieved", status=info_response.status.value)
    return info_response
