"""Integration tests for memeworks.api.main — FastAPI REST API endpoints.

All tests use the FastAPI TestClient with the shared HTTP client replaced by
an httpx MockTransport, so no real network access occurs.  Tests cover:

- ``GET /api/config`` — Version and synthesis defaults.
- ``GET /api/templates`` — Catalog loaded during startup.
- ``POST /api/url`` — URL synthesis.
- ``POST /api/download`` — Image download as attachment.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from memeworks.api import main as api_main

BASE = "https://api.memegen.link/images"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


def _build_handler(catalog_payload, *, catalog_status=200, image_status=200):
    """Route catalog and image requests to canned responses."""
    image_requests: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/templates":
            if catalog_status != 200:
                return httpx.Response(catalog_status)
            return httpx.Response(200, json=catalog_payload)
        image_requests.append(str(request.url))
        if image_status != 200:
            return httpx.Response(image_status)
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

    handler.image_requests = image_requests
    return handler


def _client(monkeypatch, test_config, handler) -> TestClient:
    monkeypatch.setattr(api_main, "config", test_config)
    monkeypatch.setattr(
        api_main,
        "create_http_client",
        lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return TestClient(api_main.app)


@pytest.fixture
def upstream(catalog_payload):
    return _build_handler(catalog_payload)


@pytest.fixture
def test_client(monkeypatch, test_config, upstream):
    with _client(monkeypatch, test_config, upstream) as client:
        yield client


# ---------------------------------------------------------------------------
# Configuration endpoint tests.
# ---------------------------------------------------------------------------


class TestGetConfig:
    """Test GET /api/config."""

    def test_config_returns_version_and_defaults(self, test_client):
        resp = test_client.get("/api/config")
        assert resp.status_code == 200
        data = resp.json()
        assert "version" in data
        assert data["default_template"] == "noidea"
        assert data["blank_sentinel"] == "_"
        assert data["download_filename"] == "meme_image.png"


# ---------------------------------------------------------------------------
# Template catalog tests.
# ---------------------------------------------------------------------------


class TestGetTemplates:
    """Test GET /api/templates."""

    def test_templates_loaded_at_startup(self, test_client):
        resp = test_client.get("/api/templates")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 3
        assert data["error"] == ""
        assert data["templates"][1] == {
            "id": "drake",
            "display_name": "Drakeposting",
            "preview_image_url": f"{BASE}/drake.png",
        }

    def test_catalog_failure_starts_with_empty_catalog(
        self, monkeypatch, test_config, catalog_payload
    ):
        handler = _build_handler(catalog_payload, catalog_status=500)
        with _client(monkeypatch, test_config, handler) as client:
            data = client.get("/api/templates").json()
            url = client.post("/api/url", json={"template": "Doge", "top_text": "hi"}).json()

        assert data["total"] == 0
        assert "500" in data["error"]
        # synthesis still works from the raw key
        assert url["url"] == f"{BASE}/doge/hi/_.png"


# ---------------------------------------------------------------------------
# URL synthesis tests.
# ---------------------------------------------------------------------------


class TestSynthesizeUrl:
    """Test POST /api/url."""

    def test_template_with_text(self, test_client):
        resp = test_client.post(
            "/api/url",
            json={"template": "doge", "top_text": "hello world", "bottom_text": ""},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["url"] == f"{BASE}/doge/hello%20world/_.png"
        assert data["mode"] == "template"
        assert data["template"]["display_name"] == "Doge"

    def test_template_key_case_insensitive(self, test_client):
        upper = test_client.post("/api/url", json={"template": "DOGE", "top_text": "a"}).json()
        lower = test_client.post("/api/url", json={"template": "doge", "top_text": "a"}).json()
        assert upper["url"] == lower["url"]

    def test_no_template_with_text(self, test_client):
        data = test_client.post("/api/url", json={"top_text": "hi"}).json()
        assert data["url"] == f"{BASE}/noidea/hi/_.png"
        assert data["mode"] == "default_template"
        assert data["template"] is None

    def test_no_template_no_text(self, test_client, test_config):
        data = test_client.post("/api/url", json={}).json()
        assert data["url"] == test_config.placeholder_image_url
        assert data["mode"] == "placeholder"

    def test_external_template(self, test_client):
        ref = "https://example.com/custom.png"
        data = test_client.post("/api/url", json={"template": ref, "top_text": "x"}).json()
        assert data["url"] == ref
        assert data["mode"] == "external"

    def test_text_too_long_rejected(self, test_client):
        resp = test_client.post("/api/url", json={"template": "doge", "top_text": "x" * 501})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Download endpoint tests.
# ---------------------------------------------------------------------------


class TestDownload:
    """Test POST /api/download."""

    def test_download_synthesized_url(self, test_client, upstream):
        resp = test_client.post("/api/download", json={"template": "fry", "top_text": "a b"})
        assert resp.status_code == 200
        assert resp.content == PNG_BYTES
        assert resp.headers["content-type"] == "image/png"
        assert 'filename="meme_image.png"' in resp.headers["content-disposition"]
        assert upstream.image_requests == [f"{BASE}/fry/a%20b/_.png"]

    def test_download_explicit_url(self, test_client, upstream):
        url = f"{BASE}/doge/such/wow.png"
        resp = test_client.post("/api/download", json={"url": url})
        assert resp.status_code == 200
        assert upstream.image_requests == [url]

    @pytest.mark.parametrize(
        "url",
        [
            "http://127.0.0.1:9000/secret",
            "http://169.254.169.254/latest/meta-data/",
            "https://example.com/cat.jpg",
            "https://api.memegen.link.evil.example/images/doge/_/_.png",
            "https://api.memegen.link/templates",
            "file:///etc/passwd",
        ],
    )
    def test_download_rejects_urls_outside_render_endpoint(self, test_client, upstream, url):
        resp = test_client.post("/api/download", json={"url": url})
        assert resp.status_code == 400
        assert upstream.image_requests == []

    def test_download_external_template_rejected(self, test_client, upstream):
        resp = test_client.post(
            "/api/download", json={"template": "http://127.0.0.1:9000/secret.png"}
        )
        assert resp.status_code == 400
        assert upstream.image_requests == []

    def test_download_blank_url_rejected(self, test_client, upstream):
        resp = test_client.post("/api/download", json={"url": "   "})
        assert resp.status_code == 400
        assert upstream.image_requests == []

    def test_download_upstream_failure(self, monkeypatch, test_config, catalog_payload):
        handler = _build_handler(catalog_payload, image_status=404)
        with _client(monkeypatch, test_config, handler) as client:
            resp = client.post("/api/download", json={"template": "doge"})

        assert resp.status_code == 502
        assert "404" in resp.json()["detail"]
