from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hydrowatch.infrastructure.services.preprocessing_dispatcher import (
    CeleryPreprocessingDispatcher,
)


@pytest.fixture(autouse=True)
def patch_to_thread(monkeypatch):
    async def immediate(func, *args, **kwargs):
        return func(*args, **kwargs)

    monkeypatch.setattr(
        "hydrowatch.infrastructure.services.preprocessing_dispatcher.asyncio.to_thread",
        immediate,
    )


@pytest.mark.asyncio
async def test_dispatch_sends_preprocessing_task(monkeypatch) -> None:
    dispatcher = CeleryPreprocessingDispatcher(queue_name="custom")
    send_task = MagicMock(return_value=SimpleNamespace(id="task-123"))
    monkeypatch.setattr(
        "hydrowatch.infrastructure.services.preprocessing_dispatcher.celery_app.send_task",
        send_task,
    )

    task_id = await dispatcher.dispatch(
        site_ids=("03339000",), dataset_key="processed/1.csv", parameter_code="00060"
    )

    assert task_id == "task-123"
    send_task.assert_called_once_with(
        "preprocess_dataset",
        kwargs={
            "site_ids": ["03339000"],
            "dataset_key": "processed/1.csv",
            "parameter_code": "00060",
        },
        queue="custom",
    )


@pytest.mark.asyncio
async def test_dispatch_without_task_id_returns_empty(monkeypatch) -> None:
    monkeypatch.setattr(
        "hydrowatch.infrastructure.services.preprocessing_dispatcher.celery_app.send_task",
        MagicMock(return_value=SimpleNamespace(id=None)),
    )

    task_id = await CeleryPreprocessingDispatcher().dispatch(
        site_ids=["1"], dataset_key="k"
    )

    assert task_id == ""
