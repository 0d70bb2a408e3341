"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .dataset_repository import IDatasetRepository

__all__ = ["IDatasetRepository"]
