"""
Record Repository

MongoDB implementation of the record store. Each document holds one JSON
payload serialized as a string, so payload keys never clash with MongoDB
operators or field name restrictions.
"""

import json
import logging
import secrets
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import MongoClient

from .base import RecordRepositoryInterface, RecordStoreError, WriteResult

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_record_id() -> str:
    """
    Generate a record identifier.

    Format: <epoch milliseconds in base36>-<8 random hex chars>

    Example:
        >>> generate_record_id()
        "mh3k2x9a-4f1c08be"
    """
    timestamp = _to_base36(int(time.time() * 1000))
    return f"{timestamp}-{secrets.token_hex(4)}"


class AtlasRecordRepository(RecordRepositoryInterface):
    """
    MongoDB implementation of RecordRepositoryInterface.

    Documents: {"_id": record_id, "json": "<payload>", "created_at": datetime}
    """

    _client: Optional[MongoClient] = None

    def __init__(
        self,
        mongodb_uri: str,
        database: str = "reports",
        collection: str = "records",
    ):
        """
        Initialize the repository.

        Args:
            mongodb_uri: MongoDB connection string
            database: Database name
            collection: Collection name
        """
        if not mongodb_uri:
            raise ValueError("MongoDB URI is required")

        self._mongodb_uri = mongodb_uri
        self._database = database
        self._collection_name = collection

    def _get_client(self) -> MongoClient:
        """Get or create the MongoDB client (singleton)."""
        if AtlasRecordRepository._client is None:
            AtlasRecordRepository._client = MongoClient(self._mongodb_uri)
            logger.info("Created new MongoDB client for record repository")
        return AtlasRecordRepository._client

    def _get_collection(self):
        client = self._get_client()
        return client[self._database][self._collection_name]

    @classmethod
    def reset_connection(cls) -> None:
        """Reset the MongoDB client connection."""
        if cls._client is not None:
            cls._client.close()
            cls._client = None
            logger.info("Record repository connection reset")

    def put(self, record_id: str, data: Any) -> WriteResult:
        collection = self._get_collection()
        document = {
            "_id": record_id,
            "json": json.dumps(data),
            "created_at": datetime.utcnow(),
        }
        result = collection.replace_one({"_id": record_id}, document, upsert=True)
        logger.info(f"Stored record {record_id}")
        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=record_id,
        )

    def get(self, record_id: str) -> Optional[Any]:
        collection = self._get_collection()
        document = collection.find_one({"_id": record_id})
        if document is None:
            return None

        payload = document.get("json")
        if not isinstance(payload, str):
            logger.warning(f"Record {record_id} has no serialized payload")
            return None

        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise RecordStoreError(f"Record {record_id} holds invalid JSON: {e}") from e

    def delete(self, record_id: str) -> WriteResult:
        collection = self._get_collection()
        result = collection.delete_one({"_id": record_id})
        logger.info(f"Deleted record {record_id} (count={result.deleted_count})")
        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def scan(self) -> List[Dict[str, str]]:
        collection = self._get_collection()
        return [
            {"id": str(doc["_id"]), "json": doc.get("json") or ""}
            for doc in collection.find({}, {"json": 1})
        ]
