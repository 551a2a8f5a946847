"""
svc-notes: API Documentation Routes
=====================================

What:  GET /openapi.json and GET /docs.
How:   The OpenAPI document is a static file read once at boot
       (load_openapi_document) and served verbatim; /docs renders FastAPI's
       bundled Swagger UI page pointed at /openapi.json.

FastAPI's generated schema and docs routes are disabled in create_app() so
these are the only documentation endpoints.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Documentation"], include_in_schema=False)


def load_openapi_document(path: str) -> Dict[str, Any]:
    """Read and parse the static OpenAPI document."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded OpenAPI document from %s", path)
    return document


@router.get("/openapi.json")
async def openapi_document(request: Request) -> JSONResponse:
    return JSONResponse(request.app.state.openapi_document)


@router.get("/docs")
async def docs() -> HTMLResponse:
    return get_swagger_ui_html(
        openapi_url="/openapi.json",
        title="svc-notes API reference",
    )
