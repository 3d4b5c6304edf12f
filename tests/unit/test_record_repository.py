"""
Tests for the record store repository.
"""

import json
import re

import pytest
from unittest.mock import MagicMock, patch

from src.common.repositories import (
    RecordStoreError,
    RepositoryConfig,
    WriteResult,
    generate_record_id,
    get_record_repository,
    reset_repository,
)
from src.common.repositories.record_repository import AtlasRecordRepository


class TestGenerateRecordId:
    """Tests for generate_record_id()."""

    def test_format(self):
        record_id = generate_record_id()

        assert re.fullmatch(r"[0-9a-z]+-[0-9a-f]{8}", record_id)

    def test_ids_are_unique(self):
        ids = {generate_record_id() for _ in range(200)}

        assert len(ids) == 200

    def test_timestamp_prefix_is_base36_milliseconds(self):
        with patch("src.common.repositories.record_repository.time.time", return_value=1.0):
            record_id = generate_record_id()

        # 1000 ms == "rs" in base36
        assert record_id.startswith("rs-")


class TestAtlasRecordRepository:
    """Tests for AtlasRecordRepository."""

    @pytest.fixture
    def mock_collection(self):
        """Create a mock MongoDB collection."""
        with patch("src.common.repositories.record_repository.MongoClient") as mock_client:
            mock_collection = MagicMock()
            mock_db = MagicMock()
            mock_db.__getitem__.return_value = mock_collection
            mock_client.return_value.__getitem__.return_value = mock_db
            yield mock_collection

    def test_requires_uri(self):
        with pytest.raises(ValueError):
            AtlasRecordRepository("")

    def test_put_stores_serialized_payload(self, mock_collection):
        mock_result = MagicMock()
        mock_result.matched_count = 0
        mock_result.modified_count = 0
        mock_collection.replace_one.return_value = mock_result

        repo = AtlasRecordRepository("mongodb://test")
        result = repo.put("abc-123", {"title": "Q3", "values": [1, 2]})

        (query, document), kwargs = mock_collection.replace_one.call_args
        assert query == {"_id": "abc-123"}
        assert document["_id"] == "abc-123"
        assert json.loads(document["json"]) == {"title": "Q3", "values": [1, 2]}
        assert "created_at" in document
        assert kwargs == {"upsert": True}
        assert isinstance(result, WriteResult)
        assert result.upserted_id == "abc-123"

    def test_get_returns_parsed_payload(self, mock_collection):
        mock_collection.find_one.return_value = {"_id": "abc", "json": '{"title": "Q3"}'}

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.get("abc") == {"title": "Q3"}
        mock_collection.find_one.assert_called_once_with({"_id": "abc"})

    def test_get_missing_record(self, mock_collection):
        mock_collection.find_one.return_value = None

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.get("nope") is None

    def test_get_record_without_payload(self, mock_collection):
        mock_collection.find_one.return_value = {"_id": "abc"}

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.get("abc") is None

    def test_get_invalid_json_raises(self, mock_collection):
        mock_collection.find_one.return_value = {"_id": "abc", "json": "{not json"}

        repo = AtlasRecordRepository("mongodb://test")

        with pytest.raises(RecordStoreError):
            repo.get("abc")

    def test_get_scalar_payload(self, mock_collection):
        mock_collection.find_one.return_value = {"_id": "abc", "json": "42"}

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.get("abc") == 42

    def test_delete(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)

        repo = AtlasRecordRepository("mongodb://test")
        result = repo.delete("abc")

        mock_collection.delete_one.assert_called_once_with({"_id": "abc"})
        assert result.matched_count == 1

    def test_delete_missing_record_is_not_an_error(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.delete("nope").matched_count == 0

    def test_scan_lists_raw_payloads(self, mock_collection):
        mock_collection.find.return_value = [
            {"_id": "a", "json": '{"x": 1}'},
            {"_id": "b", "json": "[]"},
        ]

        repo = AtlasRecordRepository("mongodb://test")
        items = repo.scan()

        mock_collection.find.assert_called_once_with({}, {"json": 1})
        assert items == [{"id": "a", "json": '{"x": 1}'}, {"id": "b", "json": "[]"}]

    def test_scan_lists_missing_or_null_payload_as_empty(self, mock_collection):
        mock_collection.find.return_value = [
            {"_id": "a", "json": None},
            {"_id": "b"},
        ]

        repo = AtlasRecordRepository("mongodb://test")

        assert repo.scan() == [{"id": "a", "json": ""}, {"id": "b", "json": ""}]

    def test_client_is_shared(self, mock_collection):
        with patch("src.common.repositories.record_repository.MongoClient") as mock_client:
            first = AtlasRecordRepository("mongodb://test")
            second = AtlasRecordRepository("mongodb://test")
            first._get_client()
            second._get_client()

        assert mock_client.call_count == 1


class TestRepositoryFactory:
    """Tests for get_record_repository()/reset_repository()."""

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db.internal:27017")
        monkeypatch.setenv("MONGO_DB_NAME", "renderer")
        monkeypatch.setenv("RECORDS_COLLECTION", "payloads")

        config = RepositoryConfig.from_env()

        assert config.mongodb_uri == "mongodb://db.internal:27017"
        assert config.database == "renderer"
        assert config.collection == "payloads"

    def test_config_defaults(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URI", raising=False)
        monkeypatch.delenv("MONGO_DB_NAME", raising=False)
        monkeypatch.delenv("RECORDS_COLLECTION", raising=False)

        config = RepositoryConfig.from_env()

        assert config.mongodb_uri == "mongodb://localhost:27017"
        assert config.database == "reports"
        assert config.collection == "records"

    def test_singleton(self):
        assert get_record_repository() is get_record_repository()

    def test_reset_creates_new_instance(self):
        first = get_record_repository()
        reset_repository()

        assert get_record_repository() is not first
