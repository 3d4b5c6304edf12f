"""
Repository Configuration and Factory

Provides factory function to get the record repository implementation
based on environment configuration.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .base import RecordRepositoryInterface

logger = logging.getLogger(__name__)


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    mongodb_uri: str
    database: str = "reports"
    collection: str = "records"

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017)
        - MONGO_DB_NAME: Database name (default: reports)
        - RECORDS_COLLECTION: Collection name (default: records)

        Returns:
            RepositoryConfig instance
        """
        return cls(
            mongodb_uri=os.getenv("MONGODB_URI") or "mongodb://localhost:27017",
            database=os.getenv("MONGO_DB_NAME", "reports"),
            collection=os.getenv("RECORDS_COLLECTION", "records"),
        )


# Singleton repository instance
_repository_instance: Optional[RecordRepositoryInterface] = None


def get_record_repository() -> RecordRepositoryInterface:
    """
    Get the record repository instance.

    Uses singleton pattern for connection pooling.

    Returns:
        RecordRepositoryInterface implementation
    """
    global _repository_instance

    if _repository_instance is None:
        config = RepositoryConfig.from_env()

        from .record_repository import AtlasRecordRepository
        _repository_instance = AtlasRecordRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
            collection=config.collection,
        )
        logger.info(f"Initialized record repository ({config.database}.{config.collection})")

    return _repository_instance


def reset_repository() -> None:
    """
    Reset the repository singleton.

    Used for testing or when configuration changes.
    """
    global _repository_instance

    if _repository_instance is not None:
        from .record_repository import AtlasRecordRepository
        if isinstance(_repository_instance, AtlasRecordRepository):
            AtlasRecordRepository.reset_connection()

    _repository_instance = None
    logger.info("Repository singleton reset")
