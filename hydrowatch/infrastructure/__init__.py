"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the dataset store,
remote HTTP services and the Celery worker.
"""

from hydrowatch.infrastructure import gateways, repositories

__all__ = ["gateways", "repositories"]
