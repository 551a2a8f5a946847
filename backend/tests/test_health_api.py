"""
svc-notes: Operational Endpoint Tests
=======================================

What we test:
    ✅ /healthz is 200 "OK" even with the database down
    ✅ /readyz follows the database ping, including a ping that raises
    ✅ /metrics exposes the note counter in Prometheus text format
    ✅ every response carries X-Request-ID
"""

import pytest

from svc_notes.main import create_app


class TestLiveness:

    @pytest.mark.asyncio
    async def test_healthz(self, test_client):
        response = await test_client.get("/healthz")

        assert response.status_code == 200
        assert response.text == "OK"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_healthz_with_database_down(self, settings, unreachable_gateway, client_for):
        app = create_app(settings, gateway=unreachable_gateway)

        async with client_for(app) as client:
            assert (await client.get("/healthz")).status_code == 200
            readiness = await client.get("/readyz")

        assert readiness.status_code == 500
        assert readiness.text == "NOT READY"


class TestReadiness:

    @pytest.mark.asyncio
    async def test_ready(self, test_client):
        response = await test_client.get("/readyz")

        assert response.status_code == 200
        assert response.text == "READY"

    @pytest.mark.asyncio
    async def test_ping_false(self, settings, mock_gateway, client_for):
        mock_gateway.ping.return_value = False
        app = create_app(settings, gateway=mock_gateway)

        async with client_for(app) as client:
            response = await client.get("/readyz")

        assert response.status_code == 500
        assert response.text == "NOT READY"

    @pytest.mark.asyncio
    async def test_ping_raises(self, settings, mock_gateway, client_for):
        mock_gateway.ping.side_effect = ConnectionError("refused")
        app = create_app(settings, gateway=mock_gateway)

        async with client_for(app) as client:
            response = await client.get("/readyz")

        assert response.status_code == 500
        assert response.text == "NOT READY"


class TestMetrics:

    @pytest.mark.asyncio
    async def test_exposition_format(self, test_client):
        response = await test_client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "# TYPE svc_notes_note_created_total counter" in response.text
        assert "python_info" in response.text

    @pytest.mark.asyncio
    async def test_counter_follows_creations(self, test_client):
        await test_client.post("/api/lectures/lec-1/notes", json={"content": "a"})
        await test_client.post("/api/lectures/lec-1/notes", json={"content": ""})
        await test_client.post("/api/lectures/lec-1/notes", json={"content": "b"})

        response = await test_client.get("/metrics")

        assert "svc_notes_note_created_total 2.0" in response.text


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/healthz")
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get("/healthz", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
