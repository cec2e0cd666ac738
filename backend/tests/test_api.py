"""
Pastebin Backend - API Integration Tests
=========================================

What:  End-to-end tests through the full FastAPI stack.
How:   HTTPX AsyncClient against the ASGI app with a real SQLite store
       per test (see conftest.py). broken_client serves from a store
       whose database cannot be opened.

What we test:
    ✅ POST /api/paste → 201 {id, url}, 400 on bad input, 500 on storage failure
    ✅ GET /api/paste/{id} → 200 / 404 / 500 with exact JSON shapes
    ✅ GET /{id} → HTML page with escaped content, plain-text 404 / 500
    ✅ Home page, widget script, health check, X-Request-ID header
    ✅ Unexpected errors still get a generic JSON 500 and an X-Request-ID
"""

import logging
import re
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient, ASGITransport

from pastebin.main import create_app

PASTE_ID_PATTERN = re.compile(r"^[0-9a-f]{8}$")


async def _create(client, content):
    response = await client.post("/api/paste", json={"content": content})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePaste:
    """Tests for POST /api/paste."""

    @pytest.mark.asyncio
    async def test_create_returns_id_and_url(self, test_client):
        response = await test_client.post("/api/paste", json={"content": "hello world"})

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"id", "url"}
        assert PASTE_ID_PATTERN.match(data["id"])
        assert data["url"] == f"http://test/{data['id']}"

    @pytest.mark.asyncio
    async def test_created_ids_are_distinct(self, test_client):
        first = await _create(test_client, "one")
        second = await _create(test_client, "two")
        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    async def test_content_at_limit_accepted(self, test_client):
        response = await test_client.post("/api/paste", json={"content": "x" * 10_000})
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_content_too_long(self, test_client):
        response = await test_client.post("/api/paste", json={"content": "x" * 10_001})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Content too long. Maximum 10,000 characters allowed."
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"content": ""},
            {},
            {"content": None},
            {"content": 42},
            {"content": ["hello"]},
            {"text": "hello"},
            ["hello"],
            "hello",
        ],
    )
    async def test_invalid_content(self, test_client, payload):
        response = await test_client.post("/api/paste", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid content."}

    @pytest.mark.asyncio
    async def test_malformed_json_body(self, test_client):
        response = await test_client.post(
            "/api/paste",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid content."}

    @pytest.mark.asyncio
    async def test_lone_surrogate_rejected(self, test_client):
        """A JSON \\ud800 escape decodes to text SQLite cannot store."""
        response = await test_client.post(
            "/api/paste",
            content=b'{"content": "a\\ud800b"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid content."}
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_storage_failure(self, broken_client):
        response = await broken_client.post("/api/paste", json={"content": "hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "Database error."}

    @pytest.mark.asyncio
    async def test_exhausted_id_space(self, test_client):
        """When every generated id is taken, the create fails with 500."""
        with patch(
            "pastebin.services.paste_service.generate_paste_id",
            return_value="deadbeef",
        ):
            first = await test_client.post("/api/paste", json={"content": "first"})
            second = await test_client.post("/api/paste", json={"content": "second"})

        assert first.status_code == 201
        assert first.json()["id"] == "deadbeef"
        assert second.status_code == 500
        assert second.json() == {"error": "Database error."}

        # The existing paste is untouched
        fetched = await test_client.get("/api/paste/deadbeef")
        assert fetched.json()["content"] == "first"


class TestGetPaste:
    """Tests for GET /api/paste/{id}."""

    @pytest.mark.asyncio
    async def test_get_existing_paste(self, test_client):
        created = await _create(test_client, "hello world")

        response = await test_client.get(f"/api/paste/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"id", "content", "created_at"}
        assert data["id"] == created["id"]
        assert data["content"] == "hello world"
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$", data["created_at"])

    @pytest.mark.asyncio
    async def test_content_returned_raw(self, test_client):
        """The JSON API returns exactly what was stored, markup included."""
        content = "<script>alert(1)</script>\n  indented & \"quoted\"  "
        created = await _create(test_client, content)

        response = await test_client.get(f"/api/paste/{created['id']}")

        assert response.json()["content"] == content

    @pytest.mark.asyncio
    async def test_get_missing_paste(self, test_client):
        response = await test_client.get("/api/paste/doesnotexist")

        assert response.status_code == 404
        assert response.json() == {"error": "Paste not found."}

    @pytest.mark.asyncio
    async def test_storage_failure(self, broken_client):
        response = await broken_client.get("/api/paste/a1b2c3d4")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error."}


class TestPastePage:
    """Tests for GET /{id} (HTML view)."""

    @pytest.mark.asyncio
    async def test_page_renders_content(self, test_client):
        created = await _create(test_client, "hello world")

        response = await test_client.get(f"/{created['id']}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert f"<title>Paste {created['id']}</title>" in response.text
        assert "<pre>hello world</pre>" in response.text
        assert "Created at:" in response.text

    @pytest.mark.asyncio
    async def test_page_escapes_markup(self, test_client):
        created = await _create(test_client, "<script>alert(1)</script>")

        response = await test_client.get(f"/{created['id']}")

        assert "<pre>&lt;script&gt;alert(1)&lt;/script&gt;</pre>" in response.text
        assert "<script>alert(1)" not in response.text

    @pytest.mark.asyncio
    async def test_page_escapes_ampersand_and_quotes(self, test_client):
        created = await _create(test_client, 'a & b "c" \'d\'')

        response = await test_client.get(f"/{created['id']}")

        assert "<pre>a &amp; b &#34;c&#34; &#39;d&#39;</pre>" in response.text

    @pytest.mark.asyncio
    async def test_page_missing_paste(self, test_client):
        response = await test_client.get("/doesnotexist")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Paste not found."

    @pytest.mark.asyncio
    async def test_page_storage_failure(self, broken_client):
        response = await broken_client.get("/a1b2c3d4")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Database error."


class TestHomeAndWidget:
    """Tests for the home page and the client widget script."""

    @pytest.mark.asyncio
    async def test_home_page_has_form(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert 'id="pasteForm"' in response.text
        assert 'id="content"' in response.text
        assert 'id="result"' in response.text
        assert 'maxlength="10000"' in response.text
        assert "/static/script.js" in response.text

    @pytest.mark.asyncio
    async def test_widget_script_served(self, test_client):
        response = await test_client.get("/static/script.js")

        assert response.status_code == 200
        assert "/api/paste" in response.text
        assert "Content cannot be empty." in response.text


class TestHealthAndRequestId:
    """Tests for /health and the X-Request-ID header."""

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_health_disconnected(self, broken_client):
        response = await broken_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")

        assert PASTE_ID_PATTERN.match(response.headers["X-Request-ID"])

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_malformed_request_id_replaced(self, test_client):
        response = await test_client.get(
            "/health", headers={"X-Request-ID": "bad id with spaces"}
        )

        assert response.headers["X-Request-ID"] != "bad id with spaces"
        assert PASTE_ID_PATTERN.match(response.headers["X-Request-ID"])

    @pytest.mark.asyncio
    async def test_request_id_on_error_responses(self, test_client):
        response = await test_client.get("/api/paste/doesnotexist")

        assert response.status_code == 404
        assert "X-Request-ID" in response.headers


class TestUnexpectedErrors:
    """Errors outside the paste exception taxonomy."""

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500_with_request_id(self, caplog):
        store = AsyncMock()
        store.get_by_id = AsyncMock(side_effect=RuntimeError("boom"))
        app = create_app(store=store)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with caplog.at_level(logging.ERROR, logger="pastebin.access"):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get(
                    "/api/paste/a1b2c3d4", headers={"X-Request-ID": "trace-500"}
                )

        assert response.status_code == 500
        assert response.json() == {"error": "Database error."}
        assert response.headers["X-Request-ID"] == "trace-500"
        # Internal details stay in the logs
        assert "boom" not in response.text
        assert any(r.exc_info for r in caplog.records)
        assert any("/api/paste/a1b2c3d4 500" in r.getMessage() for r in caplog.records)
