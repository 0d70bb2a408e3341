#!/usr/bin/env python3
"""
Preprocessing worker entry point.

Consumes the preprocessing queue, where each message appends one fetched
batch of site readings to a stored dataset.
"""

import os
from typing import List

from hydrowatch.infrastructure.services.celery_config import PREPROCESSING_QUEUE
from hydrowatch.main.config import AppSettings, get_settings
from hydrowatch.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

configure_logging()
update_logging_from_settings(get_settings())

logger = get_logger(__name__)


def worker_argv(settings: AppSettings) -> List[str]:
    return [
        "worker",
        f"--loglevel={settings.logging.level.lower()}",
        f"--queues={PREPROCESSING_QUEUE}",
        f"--concurrency={settings.celery.worker_concurrency}",
        f"--max-tasks-per-child={settings.celery.worker_max_tasks_per_child}",
    ]


def create_worker():
    """Celery app bound to the configured broker and result backend."""
    settings = get_settings()

    # tasks read the transport from the environment when imported by celery
    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)

    from hydrowatch.infrastructure.services.celery_config import create_celery_app

    worker_app = create_celery_app(
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
    )
    logger.info(
        "worker.configured",
        app_name=worker_app.main,
        queue=PREPROCESSING_QUEUE,
        concurrency=settings.celery.worker_concurrency,
    )
    return worker_app


def main():
    logger.info("worker.starting")
    worker_app = create_worker()
    worker_app.worker_main(worker_argv(get_settings()))


if __name__ == "__main__":
    main()
