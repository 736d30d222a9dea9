"""Unit tests for the front-end route and fallback responses."""

from flask.testing import FlaskClient


class TestIndex:
    """Test suite for the front-end page served at the root."""

    def test_index_returns_200(self, client: FlaskClient) -> None:
        response = client.get("/")
        assert response.status_code == 200

    def test_index_content_type(self, client: FlaskClient) -> None:
        """Test that the page is served as HTML."""
        response = client.get("/")
        assert "text/html" in response.content_type

    def test_index_loads_front_end_assets(self, client: FlaskClient) -> None:
        response = client.get("/")
        assert 'src="/js/app.js"' in response.text
        assert 'href="/styles.css"' in response.text

    def test_static_assets_are_served_from_root(self, client: FlaskClient) -> None:
        assert client.get("/styles.css").status_code == 200
        assert client.get("/js/app.js").status_code == 200

    def test_nonexistent_route_returns_404(self, client: FlaskClient) -> None:
        """Test that non-existent routes return a JSON 404."""
        response = client.get("/nonexistent")

        assert response.status_code == 404
        assert response.get_json() == {
            "error": "Not Found",
            "message": "The requested endpoint was not found",
        }
