"""
Pytest fixtures for render service tests.
"""

import os
from unittest.mock import MagicMock

# IMPORTANT: Set environment variables BEFORE any imports from render_service
# to ensure RenderSettings is configured correctly when first loaded.
# RenderSettings validation requires secrets of at least 16 characters.
os.environ["ENVIRONMENT"] = "development"
os.environ["API_SECRET"] = "test-api-secret-5678"
os.environ["ADMIN_SECRET"] = "test-admin-secret-1234"
os.environ["MAX_CONCURRENT_CAPTURES"] = "2"
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"

import pytest
from fastapi.testclient import TestClient

from src.common.repositories import RecordRepositoryInterface, get_record_repository


@pytest.fixture
def mock_repo():
    """Record store mock injected in place of the MongoDB repository."""
    repo = MagicMock(spec=RecordRepositoryInterface)
    repo.get.return_value = None
    repo.scan.return_value = []
    return repo


@pytest.fixture
def client(mock_repo):
    """Create test client with Playwright marked as ready."""
    import render_service.capture as capture_module
    from render_service.app import app

    capture_module.reset_capture_state()
    # Mark Playwright as ready for tests
    capture_module._playwright_ready = True
    app.dependency_overrides[get_record_repository] = lambda: mock_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
    capture_module.reset_capture_state()


@pytest.fixture
def client_playwright_unavailable(mock_repo):
    """Create test client with Playwright marked as unavailable."""
    import render_service.capture as capture_module
    from render_service.app import app

    capture_module.reset_capture_state()
    capture_module._playwright_error = "Test: Playwright not available"
    app.dependency_overrides[get_record_repository] = lambda: mock_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
    capture_module.reset_capture_state()


@pytest.fixture
def admin_headers():
    return {"x-admin-secret": "test-admin-secret-1234"}


@pytest.fixture
def api_headers():
    return {"x-api-secret": "test-api-secret-5678"}


@pytest.fixture
def mock_playwright_page():
    """
    Patch async_playwright so captures run against an AsyncMock page.

    page.evaluate answers every surface script with True, and a measurement
    that yields no items, so the pagination pass returns without a result.
    """
    from unittest.mock import AsyncMock, patch

    mock_page = MagicMock()
    mock_page.set_content = AsyncMock()
    mock_page.emulate_media = AsyncMock()
    mock_page.wait_for_load_state = AsyncMock()
    mock_page.evaluate = AsyncMock(return_value={"gap": 0, "items": []})
    mock_page.content = AsyncMock(return_value="<html>paginated</html>")
    mock_page.pdf = AsyncMock(return_value=b"%PDF-1.4 fake pdf content")

    mock_browser = AsyncMock()
    mock_browser.new_page = AsyncMock(return_value=mock_page)

    with patch("playwright.async_api.async_playwright") as mock_playwright:
        mock_playwright.return_value.__aenter__ = AsyncMock(
            return_value=MagicMock(chromium=MagicMock(launch=AsyncMock(return_value=mock_browser)))
        )
        mock_playwright.return_value.__aexit__ = AsyncMock(return_value=False)
        yield mock_page
