"""
GridFS Dataset Repository - Infrastructure Layer

Stores accumulated feature datasets in MongoDB GridFS. The dataset key is
the GridFS filename; every save writes a new version and removes the
older ones, so the newest upload is the dataset content.
"""

from datetime import datetime, timezone

import gridfs
import structlog
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from hydrowatch.domain.entities.errors import DatasetNotFoundError, DatasetStorageError
from hydrowatch.domain.repositories.dataset_repository import IDatasetRepository

logger = structlog.get_logger(__name__)


class GridFSDatasetRepository(IDatasetRepository):
    """MongoDB GridFS implementation of the dataset repository."""

    def __init__(
        self, mongo_client: MongoClient, database_name: str, bucket: str = "datasets"
    ):
        """
        Initialize the GridFS dataset repository.

        Args:
            mongo_client: MongoDB client connection
            database_name: Name of the database to use
            bucket: GridFS collection prefix holding datasets
        """
        self.db: Database = mongo_client[database_name]
        self.fs = gridfs.GridFS(self.db, collection=bucket)

    async def load(self, key: str) -> bytes:
        try:
            grid_out = next(
                iter(self.fs.find({"filename": key}).sort("uploadDate", -1).limit(1)),
                None,
            )
            if grid_out is None:
                raise DatasetNotFoundError(key)
            content = grid_out.read()

        except PyMongoError as e:
            logger.error("dataset.load_error", key=key, error=str(e))
            raise DatasetStorageError(f"Failed to load dataset {key}: {e}") from e

        logger.debug("dataset.loaded", key=key, size_bytes=len(content))
        return content

    async def save(self, content: bytes, key: str) -> None:
        try:
            file_id = self.fs.put(
                content,
                filename=key,
                metadata={
                    "content_type": "text/csv",
                    "saved_at": datetime.now(timezone.utc).isoformat(),
                },
            )
            # newer versions belong to concurrent writers and are kept
            stale = [
                grid_out._id
                for grid_out in self.fs.find(
                    {"filename": key, "_id": {"$lt": file_id}}
                )
            ]
            for old_id in stale:
                self.fs.delete(old_id)

        except PyMongoError as e:
            logger.error("dataset.save_error", key=key, error=str(e))
            raise DatasetStorageError(f"Failed to save dataset {key}: {e}") from e

        logger.info(
            "dataset.saved",
            key=key,
            file_id=str(file_id),
            size_bytes=len(content),
            replaced_versions=len(stale),
        )
