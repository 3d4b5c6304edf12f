"""
Tests for POST /api/pdf.
"""

import asyncio

from unittest.mock import AsyncMock, patch

PAYLOAD = {"title": "Annual results"}


class TestPdfEndpoint:
    """Tests for PDF capture of stored records."""

    def test_requires_uuid_and_template(self, client):
        response = client.post("/api/pdf", json={})

        assert response.status_code == 422

    def test_unknown_template(self, client, mock_repo):
        response = client.post("/api/pdf", json={"uuid": "abc", "template": "nope"})

        assert response.status_code == 404

    def test_unknown_record(self, client, mock_repo):
        mock_repo.get.return_value = None

        response = client.post("/api/pdf", json={"uuid": "abc", "template": "results"})

        assert response.status_code == 404

    def test_pdf_success(self, client, mock_repo, mock_playwright_page):
        # Arrange
        mock_repo.get.return_value = PAYLOAD

        # Act
        response = client.post(
            "/api/pdf",
            json={"uuid": "abc", "template": "results", "paperWidth": 600, "paperHeight": 1000},
        )

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="results_abc.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")
        kwargs = mock_playwright_page.pdf.call_args.kwargs
        assert kwargs["width"] == "600px"
        assert kwargs["height"] == "1000px"
        assert kwargs["print_background"] is True
        mock_repo.delete.assert_called_once_with("abc")

    def test_test_mode_keeps_record(self, client, mock_repo, mock_playwright_page):
        mock_repo.get.return_value = PAYLOAD

        client.post("/api/pdf", json={"uuid": "abc", "template": "results", "test": True})

        mock_repo.delete.assert_not_called()

    def test_default_paper_size(self, client, mock_repo, mock_playwright_page):
        mock_repo.get.return_value = PAYLOAD

        client.post("/api/pdf", json={"uuid": "abc", "template": "summary"})

        kwargs = mock_playwright_page.pdf.call_args.kwargs
        assert (kwargs["width"], kwargs["height"]) == ("794px", "1123px")

    def test_timeout(self, client, mock_repo):
        mock_repo.get.return_value = PAYLOAD

        with patch("render_service.capture.render_pdf", new=AsyncMock(side_effect=asyncio.TimeoutError())):
            response = client.post("/api/pdf", json={"uuid": "abc", "template": "results"})

        assert response.status_code == 500
        assert "Rendering timed out" in response.json()["detail"]

    def test_render_failure(self, client, mock_repo):
        mock_repo.get.return_value = PAYLOAD

        with patch("render_service.capture.render_pdf", new=AsyncMock(side_effect=RuntimeError("crash"))):
            response = client.post("/api/pdf", json={"uuid": "abc", "template": "results"})

        assert response.status_code == 500
        assert "Rendering failed" in response.json()["detail"]

    def test_overloaded(self, client, mock_repo):
        mock_repo.get.return_value = PAYLOAD

        with patch("render_service.capture.is_overloaded", return_value=True):
            response = client.post("/api/pdf", json={"uuid": "abc", "template": "results"})

        assert response.status_code == 503
        assert "overloaded" in response.json()["detail"]
        mock_repo.get.assert_not_called()

    def test_browser_unavailable(self, client_playwright_unavailable, mock_repo):
        response = client_playwright_unavailable.post("/api/pdf", json={"uuid": "abc", "template": "results"})

        assert response.status_code == 503
        assert "Playwright not available" in response.json()["detail"]
