"""
Repository Pattern for MongoDB Operations

Provides an abstraction layer over MongoDB for the record store.

Public API:
- get_record_repository(): Factory to get the record repository instance
- reset_repository(): Drop the singleton (tests, config changes)
- RecordRepositoryInterface: Abstract interface for the records collection
- WriteResult: Result dataclass for write operations
- generate_record_id(): New record identifier

Usage:
    from src.common.repositories import generate_record_id, get_record_repository

    repo = get_record_repository()
    record_id = generate_record_id()
    repo.put(record_id, {"title": "Quarterly results"})
    data = repo.get(record_id)
"""

from .base import RecordRepositoryInterface, RecordStoreError, WriteResult
from .config import (
    get_record_repository,
    reset_repository,
    RepositoryConfig,
)
from .record_repository import AtlasRecordRepository, generate_record_id

__all__ = [
    "get_record_repository",
    "reset_repository",
    "RecordRepositoryInterface",
    "AtlasRecordRepository",
    "RecordStoreError",
    "WriteResult",
    "RepositoryConfig",
    "generate_record_id",
]
