"""
svc-notes: Note Service
=========================

What:  Business rules for notes, independent of HTTP.
How:   Validates input, delegates storage to NoteGateway and records the
       note-created metric.
Who:   Called by the route handlers in svc_notes.routes.notes.

Flow (create):
    validate content ──▶ gateway.create_note ──▶ metrics.note_created
                │                   │
                ▼                   ▼
         ValidationError     PersistenceError
         (400, route)        (500, terminal handler)

The counter is only incremented after the insert committed.
"""

import logging
from typing import List, Optional

from svc_notes.exceptions import ValidationError
from svc_notes.gateway import NoteGateway
from svc_notes.metrics import MetricsRegistry
from svc_notes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

CONTENT_REQUIRED = "Content is required!"


class NoteService:
    """
    Lecture-note operations.

    Stateless apart from its collaborators; one instance per request is fine.
    """

    def __init__(self, gateway: NoteGateway, metrics: MetricsRegistry):
        self.gateway = gateway
        self.metrics = metrics

    async def list_notes(self, lecture_id: str) -> List[NoteResponse]:
        """Notes of one lecture, oldest first. Empty list if there are none."""
        notes = await self.gateway.list_notes(lecture_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(
        self,
        lecture_id: str,
        user_id: Optional[str],
        content: Optional[str],
    ) -> NoteResponse:
        """
        Store a new note for a lecture.

        Raises:
            ValidationError: content is missing or empty; nothing is stored
            PersistenceError: the insert failed
        """
        if not content:
            raise ValidationError(message=CONTENT_REQUIRED, field="content")

        note = await self.gateway.create_note(
            lecture_id=lecture_id,
            user_id=user_id,
            content=content,
        )
        self.metrics.note_created()
        logger.info("Note %s created for lecture %s", note.id, lecture_id)
        return NoteResponse.model_validate(note)
