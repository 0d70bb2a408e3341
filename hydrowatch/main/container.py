"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from hydrowatch.application.models import SystemInfo
from hydrowatch.application.use_cases.anomaly_detection_use_case import (
    AnomalyDetectionUseCase,
)
from hydrowatch.application.use_cases.dataset_accumulator import DatasetAccumulator
from hydrowatch.application.use_cases.detect_anomalies_use_case import (
    DetectAnomaliesUseCase,
)
from hydrowatch.application.use_cases.feature_encoder import FeatureEncoder
from hydrowatch.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from hydrowatch.application.use_cases.inference_client import InferenceClient
from hydrowatch.application.use_cases.preprocess_dataset_use_case import (
    PreprocessDatasetUseCase,
)
from hydrowatch.application.use_cases.time_series_source import (
    DETECTION_TIERS,
    PREPROCESSING_TIERS,
    TimeSeriesSource,
)
from hydrowatch.domain.services.anomaly_decider import AnomalyDecider
from hydrowatch.infrastructure.database import MongoDatabase
from hydrowatch.infrastructure.gateways.model_endpoint_gateway import (
    ModelEndpointGateway,
)
from hydrowatch.infrastructure.gateways.nws_weather_gateway import NwsWeatherGateway
from hydrowatch.infrastructure.gateways.usgs_water_services_gateway import (
    UsgsWaterServicesGateway,
)
from hydrowatch.infrastructure.gateways.webhook_alert_gateway import (
    WebhookAlertGateway,
)
from hydrowatch.infrastructure.repositories.gridfs_dataset_repository import (
    GridFSDatasetRepository,
)
from hydrowatch.infrastructure.services.health_check_service import HealthCheckService
from hydrowatch.infrastructure.services.preprocessing_dispatcher import (
    CeleryPreprocessingDispatcher,
)
from hydrowatch.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _optional_accumulator(enabled, accumulator):
    return accumulator if enabled else None


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    dataset_repository = providers.Singleton(
        GridFSDatasetRepository,
        mongo_client=providers.Callable(lambda db: db.client, mongo_database),
        database_name=config.database.database_name,
        bucket=config.database.dataset_bucket,
    )

    # Gateways
    water_services_gateway = providers.Singleton(
        UsgsWaterServicesGateway,
        base_url=config.water_services.water_services_url,
        timeout=config.water_services.timeout_seconds,
        daily_window_days=config.water_services.daily_window_days,
        daily_statistic_code=config.water_services.daily_statistic_code,
        max_concurrency=config.water_services.max_concurrency,
    )

    weather_gateway = providers.Singleton(
        NwsWeatherGateway,
        base_url=config.weather.base_url,
        timeout=config.weather.timeout_seconds,
        user_agent=config.weather.user_agent,
    )

    inference_gateway = providers.Singleton(
        ModelEndpointGateway,
        base_url=config.inference.base_url,
        timeout=config.inference.timeout_seconds,
    )

    alert_gateway = providers.Singleton(
        WebhookAlertGateway,
        webhook_url=config.alerts.webhook_url,
        timeout=config.alerts.timeout_seconds,
    )

    preprocessing_dispatcher = providers.Singleton(CeleryPreprocessingDispatcher)

    # Pipeline components
    detection_source = providers.Factory(
        TimeSeriesSource,
        gateway=water_services_gateway,
        tiers=providers.Object(DETECTION_TIERS),
    )

    preprocessing_source = providers.Factory(
        TimeSeriesSource,
        gateway=water_services_gateway,
        tiers=providers.Object(PREPROCESSING_TIERS),
    )

    feature_encoder = providers.Factory(
        FeatureEncoder,
        weather_gateway=weather_gateway,
    )

    dataset_accumulator = providers.Factory(
        DatasetAccumulator,
        repository=dataset_repository,
    )

    inference_client = providers.Factory(
        InferenceClient,
        gateway=inference_gateway,
        endpoint_name=config.inference.endpoint_name,
        target_model=config.inference.target_model,
    )

    anomaly_decider = providers.Factory(
        AnomalyDecider,
        threshold_percent=config.anomaly.threshold_percent,
        minimum_floor=config.anomaly.minimum_floor,
    )

    # Application (use cases)
    anomaly_detection_use_case = providers.Factory(
        AnomalyDetectionUseCase,
        source=detection_source,
        encoder=feature_encoder,
        inference_client=inference_client,
        decider=anomaly_decider,
        accumulator=providers.Callable(
            _optional_accumulator,
            config.database.persist_datasets,
            dataset_accumulator,
        ),
        anomalous_reason=config.anomaly.anomalous_reason,
        default_parameter_code=config.water_services.default_parameter_code,
    )

    detect_anomalies_use_case = providers.Factory(
        DetectAnomaliesUseCase,
        detection=anomaly_detection_use_case,
        alert_gateway=alert_gateway,
        max_sites=config.anomaly.max_sites_per_request,
        max_concurrency=config.water_services.max_concurrency,
        alert_title=config.ge.title,
    )

    preprocess_dataset_use_case = providers.Factory(
        PreprocessDatasetUseCase,
        source=preprocessing_source,
        encoder=feature_encoder,
        accumulator=dataset_accumulator,
        default_parameter_code=config.water_services.default_parameter_code,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        broker_url=config.celery.broker_url,
        redis_url=config.celery.result_backend_url,
        water_services_url=config.water_services.water_services_url,
        weather_url=config.weather.base_url,
        inference_url=config.inference.base_url,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        celery_broker_url=config.celery.broker_url,
        celery_result_backend_url=config.celery.result_backend_url,
        water_services_url=config.water_services.water_services_url,
        weather_url=config.weather.base_url,
        inference_url=config.inference.base_url,
        inference_endpoint=config.inference.endpoint_name,
        dataset_bucket=config.database.dataset_bucket,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Used from the FastAPI lifespan to prepare the dataset store on startup
    and release the Mongo client on shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes(container.config.database.dataset_bucket())

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
