"""
svc-notes: Operational Routes
===============================

What:  Liveness, readiness and metrics endpoints.
Who:   Orchestrator probes and the Prometheus scraper.

Probe Semantics:
    /healthz   process liveness only; 200 "OK" without touching any dependency
    /readyz    dependency readiness; 200 "READY" if the database answers
               SELECT 1, otherwise 500 "NOT READY"
    /metrics   Prometheus text exposition of the app's MetricsRegistry

Readiness failures are answered here and do not reach the terminal error
handler; the underlying cause is logged by NoteGateway.ping() or below.
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from svc_notes.deps import get_gateway, get_metrics
from svc_notes.gateway import NoteGateway
from svc_notes.metrics import MetricsRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Operations"])


@router.get("/healthz", response_class=PlainTextResponse, summary="Liveness probe")
async def healthz() -> PlainTextResponse:
    return PlainTextResponse("OK")


@router.get("/readyz", response_class=PlainTextResponse, summary="Readiness probe")
async def readyz(gateway: NoteGateway = Depends(get_gateway)) -> PlainTextResponse:
    try:
        ready = await gateway.ping()
    except Exception:
        logger.warning("Readiness check raised", exc_info=True)
        ready = False

    if not ready:
        return PlainTextResponse("NOT READY", status_code=500)
    return PlainTextResponse("READY")


@router.get("/metrics", summary="Prometheus metrics")
async def metrics(registry: MetricsRegistry = Depends(get_metrics)) -> Response:
    payload, content_type = registry.render()
    return Response(content=payload, media_type=content_type)
