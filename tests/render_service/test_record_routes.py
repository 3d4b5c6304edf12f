"""
Tests for the record store endpoints: /api/data, /api/delete, /api/list.
"""

import re


class TestUploadData:
    """Tests for POST /api/data."""

    def test_requires_a_secret(self, client, mock_repo):
        response = client.post("/api/data", json={"title": "x"})

        assert response.status_code == 401
        mock_repo.put.assert_not_called()

    def test_rejects_wrong_secret(self, client, mock_repo):
        response = client.post("/api/data", json={"title": "x"}, headers={"x-api-secret": "wrong-secret-value"})

        assert response.status_code == 401

    def test_api_secret_stores_payload(self, client, mock_repo, api_headers):
        payload = {"title": "Annual results", "sections": [{"heading": "A"}]}

        response = client.post("/api/data", json=payload, headers=api_headers)

        assert response.status_code == 201
        record_id = response.json()["uuid"]
        assert re.fullmatch(r"[0-9a-z]+-[0-9a-f]{8}", record_id)
        mock_repo.put.assert_called_once_with(record_id, payload)

    def test_admin_secret_also_accepted(self, client, mock_repo, admin_headers):
        response = client.post("/api/data", json=[1, 2, 3], headers=admin_headers)

        assert response.status_code == 201
        mock_repo.put.assert_called_once()

    def test_invalid_json(self, client, mock_repo, api_headers):
        response = client.post(
            "/api/data",
            content=b"{not json",
            headers={**api_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid JSON"
        mock_repo.put.assert_not_called()

    def test_store_failure(self, client, mock_repo, api_headers):
        mock_repo.put.side_effect = RuntimeError("connection refused")

        response = client.post("/api/data", json={"a": 1}, headers=api_headers)

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"


class TestDeleteRecord:
    """Tests for POST /api/delete."""

    def test_requires_admin_secret(self, client, mock_repo, api_headers):
        response = client.post("/api/delete", json={"id": "abc"}, headers=api_headers)

        assert response.status_code == 401
        mock_repo.delete.assert_not_called()

    def test_deletes_record(self, client, mock_repo, admin_headers):
        response = client.post("/api/delete", json={"id": "abc"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "abc"}
        mock_repo.delete.assert_called_once_with("abc")

    def test_missing_id(self, client, mock_repo, admin_headers):
        response = client.post("/api/delete", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing id"

    def test_store_failure(self, client, mock_repo, admin_headers):
        mock_repo.delete.side_effect = RuntimeError("boom")

        response = client.post("/api/delete", json={"id": "abc"}, headers=admin_headers)

        assert response.status_code == 500


class TestListRecords:
    """Tests for GET /api/list."""

    def test_requires_admin_secret(self, client):
        response = client.get("/api/list")

        assert response.status_code == 401

    def test_lists_records(self, client, mock_repo, admin_headers):
        mock_repo.scan.return_value = [
            {"id": "a", "json": '{"title": "A"}'},
            {"id": "b", "json": "[]"},
        ]

        response = client.get("/api/list", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["items"][0] == {"id": "a", "json": '{"title": "A"}'}

    def test_empty_store(self, client, admin_headers):
        response = client.get("/api/list", headers=admin_headers)

        assert response.json() == {"items": [], "count": 0}
