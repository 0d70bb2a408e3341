from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from hydrowatch.application.models import SystemInfo
from hydrowatch.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from hydrowatch.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from hydrowatch.main.app import create_app
from hydrowatch.main.container import get_container


class _StubMongo:
    client: dict = {}

    async def create_indexes(self, dataset_bucket):
        return None

    def close(self):
        return None


class _HealthCheckService:
    def __init__(self, status: ServiceStatus):
        self.status = status

    async def evaluate(self) -> SystemHealth:
        return SystemHealth(
            status=self.status,
            dependencies=[DependencyStatus(name="mongo", status=self.status)],
        )


@pytest.fixture()
def health_service() -> _HealthCheckService:
    return _HealthCheckService(ServiceStatus.UP)


@pytest.fixture()
def client(health_service):
    app = create_app()
    container = get_container()
    container.mongo_database.override(providers.Object(_StubMongo()))

    system_info = SystemInfo(
        title="HydroWatch",
        description="desc",
        version="1.0",
        environment="dev",
        git_commit="abc",
        build_time="now",
        celery_broker_url="amqp://",
        celery_result_backend_url="redis://",
        water_services_url="https://nwis",
        weather_url="https://nws",
        inference_url="http://inference",
        inference_endpoint="water-anomaly",
        dataset_bucket="datasets",
    )

    container.get_health_status_use_case.override(
        providers.Factory(GetHealthStatusUseCase, health_check_service=health_service)
    )
    container.get_application_info_use_case.override(
        providers.Factory(
            GetApplicationInfoUseCase,
            health_check_service=health_service,
            system_info=system_info,
        )
    )

    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "up"


def test_health_endpoint_reports_outage(client, health_service):
    health_service.status = ServiceStatus.DOWN

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["dependencies"][0]["status"] == "down"


def test_info_endpoint(client):
    response = client.get("/info")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "HydroWatch"
    assert body["extras"]["datasets"] == {"bucket": "datasets"}
