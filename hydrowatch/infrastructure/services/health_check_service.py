"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional
from urllib.parse import urljoin

import httpx
import pika
import redis.asyncio as aioredis

from hydrowatch.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from hydrowatch.domain.ports.health_check import IHealthCheckService
from hydrowatch.infrastructure.database.mongo_database import MongoDatabase


def _elapsed_ms(start: float) -> float:
    return (perf_counter() - start) * 1000


class HealthCheckService(IHealthCheckService):
    """Collect health information for the dataset store, the Celery
    transport and the remote water, weather and inference services."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        broker_url: str,
        redis_url: str,
        water_services_url: str,
        weather_url: str,
        inference_url: str,
        *,
        http_timeout: float = 5.0,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._broker_url = broker_url
        self._redis_url = redis_url
        self._http_services = {
            "water_services": (water_services_url, ("/iv/?format=json&sites=03339000", "/")),
            "weather": (weather_url, ("/",)),
            "inference": (inference_url, ("/ping", "/")),
        }
        self._http_timeout = http_timeout
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""
        checks: Dict[str, Awaitable[DependencyStatus]] = {
            "mongo": self._check_mongo(),
            "rabbitmq": self._check_rabbitmq(),
            "redis": self._check_redis(),
        }
        for name, (base_url, paths) in self._http_services.items():
            checks[name] = self._check_http_service(
                name=name, base_url=base_url, paths=paths
            )

        results = await asyncio.gather(*checks.values(), return_exceptions=True)

        statuses: List[DependencyStatus] = []
        for name, result in zip(checks, results):
            if isinstance(result, BaseException):
                statuses.append(
                    DependencyStatus(
                        name=name, status=ServiceStatus.DOWN, message=str(result)
                    )
                )
            else:
                statuses.append(result)

        return SystemHealth.from_dependencies(statuses)

    async def _probe(
        self,
        name: str,
        configured: bool,
        probe: Callable[[], Awaitable[Any]],
        success_message: str,
        failure_message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> DependencyStatus:
        if not configured:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message=f"{name} not configured.",
            )

        start = perf_counter()
        try:
            await probe()
        except Exception as exc:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"{failure_message}: {exc}",
                latency_ms=_elapsed_ms(start),
            )
        return DependencyStatus(
            name=name,
            status=ServiceStatus.UP,
            message=success_message,
            latency_ms=_elapsed_ms(start),
            details=details or {},
        )

    async def _check_mongo(self) -> DependencyStatus:
        database = self._mongo_database

        async def ping() -> None:
            await asyncio.to_thread(database.client.admin.command, "ping")

        return await self._probe(
            "mongo",
            database is not None,
            ping,
            "MongoDB ping successful",
            "MongoDB ping failed",
            details={"database": database.db.name} if database is not None else None,
        )

    async def _check_rabbitmq(self) -> DependencyStatus:
        def connect() -> None:
            connection = pika.BlockingConnection(pika.URLParameters(self._broker_url))
            connection.close()

        async def ping() -> None:
            await asyncio.to_thread(connect)

        return await self._probe(
            "rabbitmq",
            bool(self._broker_url),
            ping,
            "RabbitMQ connection successful",
            "RabbitMQ connection failed",
        )

    async def _check_redis(self) -> DependencyStatus:
        async def ping() -> None:
            client = aioredis.from_url(
                self._redis_url,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
            try:
                await client.ping()
            finally:
                await client.aclose()

        return await self._probe(
            "redis",
            bool(self._redis_url),
            ping,
            "Redis ping successful",
            "Redis ping failed",
        )

    async def _check_http_service(
        self,
        *,
        name: str,
        base_url: str,
        paths: Iterable[str],
    ) -> DependencyStatus:
        """Try each path in turn; the first answer that is not DOWN wins."""
        if not base_url:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message="Service URL not configured.",
            )

        attempts: List[Dict[str, Any]] = []
        result: Optional[DependencyStatus] = None
        for path in paths:
            result = await self._hit_http_endpoint(
                name=name, base_url=base_url, path=path
            )
            attempts.append(
                {"path": path, "status": result.status.value, "message": result.message}
            )
            if result.status != ServiceStatus.DOWN:
                break

        if result is None:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message="Unable to evaluate service health",
            )

        result.details.setdefault("attempts", attempts)
        return result

    async def _hit_http_endpoint(
        self,
        *,
        name: str,
        base_url: str,
        path: str,
    ) -> DependencyStatus:
        url = self._normalize_url(base_url, path)
        start = perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"HTTP request failed: {exc}",
                latency_ms=_elapsed_ms(start),
                details={"url": url},
            )

        status_code = response.status_code
        if status_code >= 500:
            status = ServiceStatus.DOWN
        elif status_code >= 400:
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.UP

        return DependencyStatus(
            name=name,
            status=status,
            message=f"HTTP {status_code}",
            latency_ms=_elapsed_ms(start),
            details={"url": url, "status_code": status_code},
        )

    def _normalize_url(self, base_url: str, path: str) -> str:
        if not path:
            return base_url
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        return urljoin(base, path.lstrip("/"))
