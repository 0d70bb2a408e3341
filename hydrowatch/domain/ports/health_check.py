"""Port for probing the collaborators the pipeline relies on."""

from __future__ import annotations

from typing import Protocol

from hydrowatch.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self) -> SystemHealth:
        """Probe the dataset store, the worker transport and upstream hosts."""
        ...
