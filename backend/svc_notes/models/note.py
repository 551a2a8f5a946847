"""
svc-notes: Note SQLAlchemy Model
==================================

What:  ORM model for the `notes` table.
Who:   Used by NoteGateway for inserts and lecture-scoped listing, and by
       Alembic for schema management.

Table Design:
    - id: UUID generated on insert, immutable
    - lecture_id: opaque reference to a lecture owned by another service;
      no foreign key, lectures are not modeled here
    - user_id: optional author reference
    - content: required, non-empty (enforced by NoteService before insert)
    - created_at: UTC with timezone, set once at insert

    Index on (lecture_id, created_at):
        Serves the only read pattern, "notes of one lecture, oldest first".
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from svc_notes.database import Base


class Note(Base):
    """
    A single user-authored text annotation tied to a lecture.

    Lifecycle:
        Created through POST /api/lectures/{lectureId}/notes and never
        updated or deleted through the service afterwards.
    """

    __tablename__ = "notes"

    # ── Primary Key ───────────────────────────────────────────────────────
    # Generic Uuid: native uuid on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned on insert",
    )

    # ── References ────────────────────────────────────────────────────────
    lecture_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Identifier of the lecture this note belongs to",
    )

    user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Identifier of the note author, if supplied",
    )

    # ── Body ──────────────────────────────────────────────────────────────
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note text",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Python-side default keeps microsecond precision on SQLite, where
    # CURRENT_TIMESTAMP only has second resolution.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_lecture_id_created_at", "lecture_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, lecture_id='{self.lecture_id}', "
            f"created_at='{self.created_at}')>"
        )
