"""Tests for /openapi.json and /docs."""

import json

import pytest

from svc_notes.config import DEFAULT_OPENAPI_PATH, Settings
from svc_notes.main import create_app


@pytest.mark.asyncio
async def test_openapi_document_served_verbatim(test_client):
    with open(DEFAULT_OPENAPI_PATH, encoding="utf-8") as fh:
        expected = json.load(fh)

    response = await test_client.get("/openapi.json")

    assert response.status_code == 200
    assert response.json() == expected
    assert "/api/lectures/{lectureId}/notes" in response.json()["paths"]


@pytest.mark.asyncio
async def test_docs_page_references_document(test_client):
    response = await test_client.get("/docs")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "/openapi.json" in response.text


@pytest.mark.asyncio
async def test_custom_document_location(tmp_path, database_url, gateway, client_for):
    doc_path = tmp_path / "openapi.json"
    doc_path.write_text(json.dumps({"openapi": "3.0.3", "info": {"title": "custom"}}))
    settings = Settings(database_url=database_url, openapi_path=str(doc_path))
    app = create_app(settings, gateway=gateway)

    # Loaded at boot: later edits to the file are not served
    doc_path.write_text("{}")

    async with client_for(app) as client:
        response = await client.get("/openapi.json")

    assert response.json()["info"]["title"] == "custom"
