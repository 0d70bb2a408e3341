"""
MongoDB Database - Infrastructure Layer

Shared MongoDB client for the dataset store.
"""

import pymongo.errors
import structlog
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db_name = db_name
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self, dataset_bucket: str) -> None:
        """
        Create the lookup index for dataset versions.

        Called during application startup; failures are logged and ignored.
        """
        files = self.db[f"{dataset_bucket}.files"]
        try:
            files.create_index(
                [("filename", 1), ("uploadDate", -1)],
                name="dataset_key_idx",
                background=True,
            )
        except pymongo.errors.PyMongoError as e:
            logger.warning(
                "mongo.index_creation_failed", collection=files.name, error=str(e)
            )
