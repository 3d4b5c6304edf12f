"""
Repository Interface Definitions

Defines the abstract interface for record store operations.
Records are arbitrary JSON payloads stored under a generated identifier
until a template page consumes them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents written or deleted
        upserted_id: ID of the written document (if any)
    """
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None


class RecordStoreError(Exception):
    """Raised when a stored record cannot be decoded."""


class RecordRepositoryInterface(ABC):
    """
    Abstract interface for the records collection.

    Implementations:
    - AtlasRecordRepository: MongoDB

    Write failures propagate to the caller (fail-fast).
    """

    @abstractmethod
    def put(self, record_id: str, data: Any) -> WriteResult:
        """
        Store a JSON payload, replacing any record with the same id.

        Args:
            record_id: Record identifier (see generate_record_id())
            data: JSON-serializable payload

        Returns:
            WriteResult with upserted_id set to record_id
        """
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[Any]:
        """
        Load and decode a payload.

        Args:
            record_id: Record identifier

        Returns:
            Decoded payload, or None if no usable record exists

        Raises:
            RecordStoreError: If the stored JSON is corrupt
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> WriteResult:
        """
        Delete a record. Deleting a missing record is not an error.

        Args:
            record_id: Record identifier

        Returns:
            WriteResult with delete count
        """
        pass

    @abstractmethod
    def scan(self) -> List[Dict[str, str]]:
        """
        List every stored record.

        Returns:
            List of {"id": ..., "json": <serialized payload>} dicts
        """
        pass
