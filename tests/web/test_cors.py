import pytest


class TestCORS:
    @pytest.mark.parametrize("path", ["/time-tracking/export", "/time-tracking/generate-docs", "/anything"])
    def test_preflight(self, client, path):
        response = client.options(path)
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "content-type" in response.headers["access-control-allow-headers"]
        assert "GET" in response.headers["access-control-allow-methods"]

    def test_preflight_needs_no_session(self, client):
        response = client.options("/time-tracking/status")
        assert response.status_code == 200

    def test_success_response_has_headers(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_error_response_has_headers(self, client):
        response = client.get("/time-tracking/status")
        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-headers"] == "authorization, x-client-info, apikey, content-type"

    def test_exposes_content_disposition(self, client):
        response = client.get("/health")
        assert "content-disposition" in response.headers["access-control-expose-headers"]
