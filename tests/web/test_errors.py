from unittest.mock import patch

from timebill.exceptions import RenderError


class TestErrorTranslation:
    def test_domain_error_json(self, auth_client):
        response = auth_client.get("/time-tracking/export?month=2024-03")
        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "No entries found for March 2024"}

    def test_unknown_route_json(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_render_error_is_500(self, auth_client, march_in_db):
        with patch(
            "timebill.services.document_service.DocumentService.generate",
            side_effect=RenderError("Failed to render invoice: boom"),
        ):
            response = auth_client.get("/time-tracking/generate-docs?type=invoice&month=2024-03")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to render invoice: boom"}

    def test_unexpected_error_is_500_json_with_cors(self, auth_client):
        with patch("web.routes.time_tracking.local_today", side_effect=RuntimeError("clock broke")):
            response = auth_client.get("/time-tracking/status")
        assert response.status_code == 500
        assert response.json() == {"error": "clock broke"}
        assert response.headers["access-control-allow-origin"] == "*"

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "ok"}
