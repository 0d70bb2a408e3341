from __future__ import annotations

from datetime import timezone

import pytest

from hydrowatch.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


def test_dependency_status_defaults() -> None:
    status = DependencyStatus(name="mongo", status=ServiceStatus.UP)
    assert status.checked_at.tzinfo == timezone.utc
    assert status.details == {}


@pytest.mark.parametrize(
    ("statuses", "expected"),
    [
        ([ServiceStatus.UP, ServiceStatus.UP], ServiceStatus.UP),
        ([ServiceStatus.UP, ServiceStatus.UNKNOWN], ServiceStatus.UNKNOWN),
        ([ServiceStatus.UNKNOWN, ServiceStatus.DEGRADED], ServiceStatus.DEGRADED),
        ([ServiceStatus.DEGRADED, ServiceStatus.DOWN], ServiceStatus.DOWN),
        ([], ServiceStatus.UP),
    ],
)
def test_system_health_from_dependencies_picks_worst(statuses, expected) -> None:
    dependencies = [
        DependencyStatus(name=f"dep{index}", status=status)
        for index, status in enumerate(statuses)
    ]
    health = SystemHealth.from_dependencies(dependencies)
    assert health.status is expected
    assert health.dependencies == dependencies
