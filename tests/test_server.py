"""Tests for the FastAPI web service."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

try:
    from httpx import AsyncClient, ASGITransport
    _HAS_HTTPX = True
except ImportError:
    _HAS_HTTPX = False

from tiptap2html.server import app

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE_JSON = FIXTURE_DIR / "sample.json"

pytestmark = pytest.mark.skipif(not _HAS_HTTPX, reason="httpx not installed")

DOC = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Title"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "bold", "marks": [{"type": "bold"}]},
                {"type": "text", "text": " <plain>"},
            ],
        },
    ],
}


@pytest.fixture
def client():
    """Create an async test client."""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
class TestHealthEndpoint:

    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert "version" in data


@pytest.mark.asyncio
class TestConvertFileEndpoint:

    async def test_convert_file_upload(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("doc.json", json.dumps(DOC).encode(), "application/json")},
        )
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "<strong>bold</strong> &lt;plain&gt;" in resp.text

    async def test_convert_with_offset(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("doc.json", json.dumps(DOC).encode(), "application/json")},
            data={"offset_headings": "2"},
        )
        assert resp.status_code == 200
        assert "<h3>Title</h3>" in resp.text

    async def test_convert_sample_fixture(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("sample.json", SAMPLE_JSON.read_bytes(), "application/json")},
        )
        assert resp.status_code == 200
        assert "Release notes" in resp.text

    async def test_invalid_upload(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("doc.json", b"{not json", "application/json")},
        )
        assert resp.status_code == 422
        assert "invalid JSON" in resp.json()["detail"]


@pytest.mark.asyncio
class TestConvertJsonEndpoint:

    async def test_convert_json(self, client):
        resp = await client.post("/convert/json", json=DOC)
        assert resp.status_code == 200
        assert "<h1>Title</h1>" in resp.text

    async def test_allow_html(self, client):
        resp = await client.post("/convert/json", params={"allow_html": "true"}, json=DOC)
        assert resp.status_code == 200
        assert " <plain>" in resp.text

    async def test_inline(self, client):
        resp = await client.post("/convert/json", params={"inline": "true"}, json=DOC)
        assert resp.status_code == 200
        assert "<h1>" not in resp.text
        assert "<br />" in resp.text

    async def test_non_string_link_href(self, client):
        body = {
            "type": "doc",
            "content": [{"type": "paragraph", "content": [
                {"type": "text", "text": "x", "marks": [{"type": "link", "attrs": {"href": 42}}]},
            ]}],
        }
        resp = await client.post("/convert/json", json=body)
        assert resp.status_code == 200
        assert '<a href="42">x</a>' in resp.text

    async def test_malformed_document(self, client):
        resp = await client.post("/convert/json", json={"type": "doc", "content": "nope"})
        assert resp.status_code == 422

    async def test_unknown_node_type(self, client):
        resp = await client.post(
            "/convert/json",
            json={"type": "doc", "content": [{"type": "callout", "content": []}]},
        )
        assert resp.status_code == 422
        assert "callout" in resp.json()["detail"]


@pytest.mark.asyncio
class TestTreeEndpoint:

    async def test_tree(self, client):
        resp = await client.post("/tree", json=DOC)
        assert resp.status_code == 200
        tree = resp.json()
        paragraph = tree["content"][1]
        assert paragraph["content"][0] == {
            "type": "bold",
            "content": [{"type": "text", "text": "bold"}],
        }
