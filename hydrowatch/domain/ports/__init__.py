"""Domain ports package."""

from .health_check import IHealthCheckService
from .preprocessing_dispatcher import IPreprocessingDispatcher

__all__ = ["IHealthCheckService", "IPreprocessingDispatcher"]
