"""Response payloads for /health and /info."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hydrowatch.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)

_MONGO_EXAMPLE: Dict[str, Any] = {
    "name": "mongo",
    "status": "up",
    "message": "MongoDB ping successful",
    "checked_at": "2025-08-24T16:00:00Z",
    "latency_ms": 4.2,
    "details": {"database": "hydrowatch", "bucket": "datasets"},
}

_INFERENCE_EXAMPLE: Dict[str, Any] = {
    "name": "inference",
    "status": "degraded",
    "message": "Inference host answered 404",
    "checked_at": "2025-08-24T16:00:01Z",
    "latency_ms": 38.0,
    "details": {"endpoint": "water-anomaly"},
}


class DependencyStatusDTO(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": _MONGO_EXAMPLE},
    )

    name: str = Field(description="Collaborator probed by the check")
    status: ServiceStatus
    message: Optional[str] = Field(default=None, description="Probe outcome")
    checked_at: datetime
    latency_ms: Optional[float] = Field(
        default=None, description="Round trip of the probe in milliseconds"
    )
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls.model_validate(status)


class SystemHealthDTO(BaseModel):
    """Aggregated reachability of every pipeline collaborator."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "status": "degraded",
                "dependencies": [_MONGO_EXAMPLE, _INFERENCE_EXAMPLE],
            }
        },
    )

    status: ServiceStatus = Field(description="Worst status among dependencies")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls.model_validate(health)

    def names_with_status(self, status: ServiceStatus) -> List[str]:
        return [dep.name for dep in self.dependencies if dep.status is status]


class ApplicationInfoDTO(BaseModel):
    """
    Build and runtime metadata of the running service.

    ``extras`` carries the configured upstream hosts (water services,
    weather, inference), the Celery transport and the dataset bucket so
    operators can tell which deployment they are talking to.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "name": "HydroWatch",
                "description": "Water-sensor anomaly detection service",
                "version": "1.0.0",
                "environment": "production",
                "git_commit": "4f2c9e1",
                "build_time": "2025-08-24T15:30:00Z",
                "started_at": "2025-08-24T15:45:00Z",
                "uptime_seconds": 900.0,
                "status": "up",
                "dependencies": [_MONGO_EXAMPLE],
                "extras": {
                    "celery": {
                        "broker": "amqp://rabbitmq:5672/hydrowatch",
                        "result_backend": "redis://redis:6379/0",
                    },
                    "providers": {
                        "water_services_url": "https://waterservices.usgs.gov/nwis",
                        "weather_url": "https://api.weather.gov",
                    },
                    "inference": {
                        "url": "http://inference:8080",
                        "endpoint_name": "water-anomaly",
                    },
                    "datasets": {"bucket": "datasets"},
                },
            }
        },
    )

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float = Field(description="Seconds since the app started")
    status: ServiceStatus
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls.model_validate(info)
