"""Celery task that fetches, encodes and accumulates a dataset."""

import asyncio
from typing import Any, Dict, List, Optional

from hydrowatch.infrastructure.services.celery_config import celery_app
from hydrowatch.infrastructure.services.tasks.base import CallbackTask, logger


def build_preprocess_use_case(settings, mongo_database):
    """Wire the preprocessing use case from settings."""
    from hydrowatch.application.use_cases.dataset_accumulator import (
        DatasetAccumulator,
    )
    from hydrowatch.application.use_cases.feature_encoder import FeatureEncoder
    from hydrowatch.application.use_cases.preprocess_dataset_use_case import (
        PreprocessDatasetUseCase,
    )
    from hydrowatch.application.use_cases.time_series_source import (
        PREPROCESSING_TIERS,
        TimeSeriesSource,
    )
    from hydrowatch.infrastructure.gateways.nws_weather_gateway import (
        NwsWeatherGateway,
    )
    from hydrowatch.infrastructure.gateways.usgs_water_services_gateway import (
        UsgsWaterServicesGateway,
    )
    from hydrowatch.infrastructure.repositories.gridfs_dataset_repository import (
        GridFSDatasetRepository,
    )

    water_services = settings.water_services
    source = TimeSeriesSource(
        UsgsWaterServicesGateway(
            base_url=water_services.water_services_url,
            timeout=water_services.timeout_seconds,
            daily_window_days=water_services.daily_window_days,
            daily_statistic_code=water_services.daily_statistic_code,
            max_concurrency=water_services.max_concurrency,
        ),
        tiers=PREPROCESSING_TIERS,
    )
    encoder = FeatureEncoder(
        NwsWeatherGateway(
            base_url=settings.weather.base_url,
            timeout=settings.weather.timeout_seconds,
            user_agent=settings.weather.user_agent,
        )
    )
    repository = GridFSDatasetRepository(
        mongo_database.client,
        settings.database.database_name,
        bucket=settings.database.dataset_bucket,
    )
    return PreprocessDatasetUseCase(
        source=source,
        encoder=encoder,
        accumulator=DatasetAccumulator(repository),
        default_parameter_code=water_services.default_parameter_code,
    )


@celery_app.task(bind=True, base=CallbackTask, name="preprocess_dataset")
def preprocess_dataset(
    self,
    site_ids: List[str],
    dataset_key: str,
    parameter_code: Optional[str] = None,
) -> Dict[str, Any]:
    """Append freshly encoded rows for ``site_ids`` to ``dataset_key``."""
    from hydrowatch.infrastructure.database.mongo_database import MongoDatabase
    from hydrowatch.main.config import get_settings

    settings = get_settings()
    logger.info(
        "preprocessing.task_started",
        task_id=self.request.id,
        sites=site_ids,
        key=dataset_key,
    )

    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
    )
    try:
        use_case = build_preprocess_use_case(settings, database)
        update = asyncio.run(
            use_case.execute(site_ids, parameter_code, dataset_key=dataset_key)
        )
    finally:
        database.close()

    return {
        "dataset_key": update.dataset_key,
        "rows_appended": update.rows_appended,
        "bytes_total": update.bytes_total,
        "source_tier": update.source_tier.value if update.source_tier else None,
        "mock_data": update.mock_data,
    }
