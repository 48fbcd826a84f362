"""Tests for the HTML pages."""

import pytest

from app.core.config import settings

PASTES_URL = f"{settings.API_PREFIX}/pastes"


@pytest.mark.api
class TestPages:
    """Test suite for the browser-facing routes."""

    def test_create_form(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<form" in response.text
        assert PASTES_URL in response.text

    def test_paste_page_escapes_content(self, client):
        content = "<script>alert('x')</script>"
        paste_id = client.post(PASTES_URL, json={"content": content}).json()["id"]

        response = client.get(f"/p/{paste_id}")

        assert response.status_code == 200
        assert "<script>alert" not in response.text
        assert "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;" in response.text

    def test_paste_page_shows_limits(self, client):
        paste_id = client.post(
            PASTES_URL, json={"content": "hello", "ttl_seconds": 60, "max_views": 2}
        ).json()["id"]

        response = client.get(f"/p/{paste_id}")

        assert "Remaining views: 1" in response.text
        assert "Expires at:" in response.text

    def test_page_view_counts_against_limit(self, client):
        paste_id = client.post(PASTES_URL, json={"content": "hello", "max_views": 1}).json()["id"]

        assert client.get(f"/p/{paste_id}").status_code == 200
        assert client.get(f"{PASTES_URL}/{paste_id}").status_code == 404

    def test_paste_page_not_found(self, client):
        response = client.get("/p/nosuchid")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Paste not found" in response.text
