"""
Dataset Repository Interface

Blob store for accumulated feature datasets, addressed by a caller-supplied
key. Writes to the same key are last-writer-wins.
"""

from abc import ABC, abstractmethod


class IDatasetRepository(ABC):
    """Interface for dataset blob storage."""

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """
        Load the dataset stored under ``key``.

        Raises:
            DatasetNotFoundError: When nothing is stored under the key
            DatasetStorageError: When the store cannot be read
        """
        pass

    @abstractmethod
    async def save(self, content: bytes, key: str) -> None:
        """
        Store ``content`` under ``key``, replacing any previous content.

        Raises:
            DatasetStorageError: When the store cannot be written
        """
        pass
