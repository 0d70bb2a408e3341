"""Celery-backed implementation of the preprocessing dispatcher port."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from hydrowatch.domain.ports.preprocessing_dispatcher import IPreprocessingDispatcher
from hydrowatch.infrastructure.services.celery_config import (
    PREPROCESSING_QUEUE,
    celery_app,
)
from hydrowatch.shared import get_logger

logger = get_logger(__name__)


class CeleryPreprocessingDispatcher(IPreprocessingDispatcher):
    """Dispatch preprocessing runs through Celery."""

    def __init__(self, queue_name: str = PREPROCESSING_QUEUE) -> None:
        self._queue_name = queue_name

    async def dispatch(
        self,
        *,
        site_ids: Sequence[str],
        dataset_key: str,
        parameter_code: Optional[str] = None,
    ) -> str:
        def _send_task() -> str:
            logger.info(
                "preprocessing_dispatcher.dispatch",
                sites=list(site_ids),
                key=dataset_key,
                queue=self._queue_name,
            )
            result = celery_app.send_task(
                "preprocess_dataset",
                kwargs={
                    "site_ids": list(site_ids),
                    "dataset_key": dataset_key,
                    "parameter_code": parameter_code,
                },
                queue=self._queue_name,
            )
            return result.id

        task_id: Optional[str] = await asyncio.to_thread(_send_task)
        return task_id or ""
