"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .anomaly_dto import (
    AnomalyCheckRequestDTO,
    AnomalyCheckResponseDTO,
    PredictionResultDTO,
    SiteFailureDTO,
)
from .dataset_dto import PreprocessRequestDTO, PreprocessResponseDTO, PreprocessTaskDTO
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "AnomalyCheckRequestDTO",
    "AnomalyCheckResponseDTO",
    "PredictionResultDTO",
    "SiteFailureDTO",
    "PreprocessRequestDTO",
    "PreprocessResponseDTO",
    "PreprocessTaskDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
