"""Infrastructure services package."""

from . import tasks
from .celery_config import celery_app
from .health_check_service import HealthCheckService
from .preprocessing_dispatcher import CeleryPreprocessingDispatcher

__all__ = ["celery_app", "tasks", "HealthCheckService", "CeleryPreprocessingDispatcher"]
