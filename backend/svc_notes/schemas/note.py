"""
svc-notes: Pydantic Request/Response Schemas
==============================================

What:  The JSON contract of the notes endpoints.
How:   FastAPI validates request bodies against NoteCreate and serializes
       ORM rows through NoteResponse (`from_attributes`).

Schemas are separate from the SQLAlchemy model so the API controls exactly
which fields are exposed.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class NoteCreate(BaseModel):
    """
    Body of POST /api/lectures/{lectureId}/notes.

    `content` is optional at the schema level: a missing or empty value is a
    business-rule failure answered with 400 by the handler, not a schema
    failure.
    """
    user_id: Optional[str] = Field(default=None, description="Author identifier")
    content: Optional[str] = Field(default=None, description="Note text (required, non-empty)")


class NoteResponse(BaseModel):
    """A stored note as returned by list and create."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    lecture_id: str = Field(description="Lecture the note belongs to")
    user_id: Optional[str] = Field(default=None, description="Author identifier, if any")
    content: str = Field(description="Note text")
    created_at: datetime = Field(description="When the note was created (ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite drops the offset on read; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ErrorResponse(BaseModel):
    """Error body shared by every JSON endpoint: {"error": "..."}."""
    error: str = Field(description="Human-readable error description")
