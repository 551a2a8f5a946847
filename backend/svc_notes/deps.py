"""
FastAPI dependencies resolving the per-app collaborators stored on
`app.state` by create_app().
"""

from fastapi import Depends, Request

from svc_notes.gateway import NoteGateway
from svc_notes.metrics import MetricsRegistry
from svc_notes.services.note_service import NoteService


def get_gateway(request: Request) -> NoteGateway:
    return request.app.state.gateway


def get_metrics(request: Request) -> MetricsRegistry:
    return request.app.state.metrics


def get_note_service(
    gateway: NoteGateway = Depends(get_gateway),
    metrics: MetricsRegistry = Depends(get_metrics),
) -> NoteService:
    return NoteService(gateway=gateway, metrics=metrics)
