"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would cause 5-30s timeout per test)
- Repository singletons leaking between tests

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import os
import pytest
from unittest.mock import patch, MagicMock

# Set test environment BEFORE any imports to prevent settings from loading real values
os.environ["ENVIRONMENT"] = "development"


@pytest.fixture(autouse=True)
def mock_mongodb():
    """
    Prevent MongoDB connection attempts in all unit tests.

    MongoClient("mongodb://localhost:27017") would otherwise try to reach a
    local server on first use.
    """
    with patch("pymongo.MongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_db = MagicMock()
        mock_collection = MagicMock()

        # Setup chain: client["db"]["collection"]
        mock_instance.__getitem__ = MagicMock(return_value=mock_db)
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        mock_collection.find_one = MagicMock(return_value=None)
        mock_collection.find = MagicMock(return_value=[])

        mock_client.return_value = mock_instance
        yield mock_client


@pytest.fixture(autouse=True)
def reset_record_repository():
    """Drop the repository singleton and its cached client around each test."""
    from src.common.repositories import reset_repository
    from src.common.repositories.record_repository import AtlasRecordRepository

    AtlasRecordRepository._client = None
    reset_repository()
    yield
    AtlasRecordRepository._client = None
    reset_repository()
