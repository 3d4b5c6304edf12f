"""
Tests for /api/templates and /api/layout/plan.
"""


class TestTemplatesEndpoint:
    """Tests for GET /api/templates."""

    def test_lists_registered_templates(self, client):
        response = client.get("/api/templates")

        assert response.status_code == 200
        assert response.json() == {"templates": ["results", "starter", "summary"]}


class TestLayoutPlanEndpoint:
    """Tests for POST /api/layout/plan."""

    def test_plans_breaks(self, client):
        response = client.post(
            "/api/layout/plan",
            json={
                "page_height": 1000,
                "footer_height": 40,
                "items": [
                    {"top": 0, "height": 500},
                    {"top": 500, "height": 600},
                    {"top": 1100, "height": 300},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_pages"] == 2
        assert len(data["breaks"]) == 1
        assert data["breaks"][0]["before_index"] == 1
        assert data["breaks"][0]["spacer_height"] == 500
        assert data["content_bottom"] == 1900

    def test_no_items(self, client):
        response = client.post("/api/layout/plan", json={"page_height": 1000})

        assert response.status_code == 200
        assert response.json()["breaks"] == []

    def test_footer_taller_than_page(self, client):
        response = client.post(
            "/api/layout/plan",
            json={"page_height": 100, "footer_height": 100, "items": []},
        )

        assert response.status_code == 422

    def test_margins_leaving_no_room(self, client):
        response = client.post(
            "/api/layout/plan",
            json={"page_height": 100, "footer_height": 50, "margin_top": 30, "margin_bottom": 20},
        )

        assert response.status_code == 422

    def test_missing_page_height(self, client):
        response = client.post("/api/layout/plan", json={"items": []})

        assert response.status_code == 422
