"""Celery task implementations for infrastructure services."""

from .base import CallbackTask, logger
from .preprocessing import preprocess_dataset

__all__ = ["CallbackTask", "logger", "preprocess_dataset"]
