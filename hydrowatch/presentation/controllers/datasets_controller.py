"""
Presentation Layer - Datasets Controller

Endpoints that fetch, encode and append site data to stored datasets,
either inline or through the preprocessing worker queue.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from hydrowatch.application.dtos.dataset_dto import (
    PreprocessRequestDTO,
    PreprocessResponseDTO,
    PreprocessTaskDTO,
)
from hydrowatch.application.use_cases.preprocess_dataset_use_case import (
    PreprocessDatasetUseCase,
)
from hydrowatch.domain.entities.errors import DomainError
from hydrowatch.domain.ports.preprocessing_dispatcher import IPreprocessingDispatcher
from hydrowatch.main.container import AppContainer
from hydrowatch.presentation.controllers.errors import http_error_for

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/datasets", tags=["Datasets"])


@router.post(
    "/preprocess",
    response_model=PreprocessResponseDTO,
    summary="Fetch, encode and append site data to a dataset",
)
@inject
async def preprocess_dataset(
    payload: PreprocessRequestDTO,
    preprocess_use_case: PreprocessDatasetUseCase = Depends(
        Provide[AppContainer.preprocess_dataset_use_case]
    ),
) -> PreprocessResponseDTO:
    try:
        update = await preprocess_use_case.execute(
            payload.sites, payload.parameter, payload.dataset_key
        )
    except DomainError as exc:
        logger.warning(
            "preprocessing.failed",
            error=exc.message,
            error_type=type(exc).__name__,
        )
        raise http_error_for(exc)
    return PreprocessResponseDTO.from_domain(update)


@router.post(
    "/preprocess/async",
    response_model=PreprocessTaskDTO,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue a preprocessing run on the worker",
)
@inject
async def queue_preprocess_dataset(
    payload: PreprocessRequestDTO,
    preprocess_use_case: PreprocessDatasetUseCase = Depends(
        Provide[AppContainer.preprocess_dataset_use_case]
    ),
    dispatcher: IPreprocessingDispatcher = Depends(
        Provide[AppContainer.preprocessing_dispatcher]
    ),
) -> PreprocessTaskDTO:
    sites = [site.strip() for site in payload.sites if site and site.strip()]
    if not sites:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one site id is required",
        )

    dataset_key = preprocess_use_case.resolve_dataset_key(payload.dataset_key)
    try:
        task_id = await dispatcher.dispatch(
            site_ids=sites,
            dataset_key=dataset_key,
            parameter_code=payload.parameter,
        )
    except Exception as exc:
        logger.error("preprocessing.dispatch_failed", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to queue preprocessing task",
        ) from exc
    return PreprocessTaskDTO(task_id=task_id, dataset_key=dataset_key)
