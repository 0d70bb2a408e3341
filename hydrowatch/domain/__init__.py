"""
Domain Layer Package

This package contains the core business logic and rules of the application.
It defines entities, gateway and repository contracts, and the pure
services that parse provider documents and predictions and classify
anomalies, without dependencies on external frameworks or infrastructure
concerns.
"""

# Re-export submodules
from hydrowatch.domain import entities, gateways, ports, repositories, services

__all__ = ["entities", "gateways", "repositories", "services", "ports"]
