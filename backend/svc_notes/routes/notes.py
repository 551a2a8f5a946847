"""
svc-notes: Notes Route Handlers
=================================

What:  GET and POST /api/lectures/{lectureId}/notes.
How:   Path parameter and JSON body are parsed by FastAPI into typed values;
       the handlers delegate to NoteService and return Pydantic models.

Error handling:
    ValidationError   caught here → 400 {"error": "Content is required!"}
    PersistenceError  propagates → terminal handler → 500
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from svc_notes.deps import get_note_service
from svc_notes.exceptions import ValidationError
from svc_notes.schemas.note import ErrorResponse, NoteCreate, NoteResponse
from svc_notes.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lectures", tags=["Notes"])


@router.get(
    "/{lectureId}/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes of a lecture",
)
async def list_notes(
    lectureId: str,
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """Every note of the lecture, oldest first; an empty array if none."""
    return await service.list_notes(lectureId)


@router.post(
    "/{lectureId}/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Content missing or empty", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note for a lecture",
)
async def create_note(
    lectureId: str,
    body: Optional[NoteCreate] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> Union[NoteResponse, JSONResponse]:
    """
    Store a note for the lecture.

    A missing body is treated like a body without content.
    """
    payload = body or NoteCreate()
    try:
        return await service.create_note(
            lecture_id=lectureId,
            user_id=payload.user_id,
            content=payload.content,
        )
    except ValidationError as exc:
        logger.info("Rejected note for lecture %s: %s", lectureId, exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message},
        )
