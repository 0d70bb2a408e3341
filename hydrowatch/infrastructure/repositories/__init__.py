"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .gridfs_dataset_repository import GridFSDatasetRepository

__all__ = ["GridFSDatasetRepository"]
