"""
Database package - Infrastructure Layer

MongoDB connection used by the GridFS dataset store.
"""

from hydrowatch.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
