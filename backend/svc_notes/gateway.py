"""
svc-notes: Persistence Gateway
================================

What:  The single object that talks to the database.
How:   Owns an async engine + session factory; every operation opens its own
       AsyncSession, so concurrent requests never share session state.
Who:   Constructed once at boot, stored on `app.state.gateway`, used by
       NoteService and the readiness probe; closed by the app lifespan.

Operations:
    list_notes(lecture_id)                     -> List[Note], oldest first
    create_note(lecture_id, user_id, content)  -> Note with id/created_at
    ping()                                     -> bool
    close()                                    idempotent pool disposal
    create_schema()                            metadata.create_all (tests, dev)

Error Handling:
    SQLAlchemy errors from list/create are rolled back and re-raised as
    PersistenceError with the original exception chained. ping() never
    raises; it logs and returns False.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from svc_notes.database import Base, build_engine, build_session_factory
from svc_notes.exceptions import PersistenceError
from svc_notes.models.note import Note

logger = logging.getLogger(__name__)


class NoteGateway:
    """
    Pooled database client exposing typed operations for the Note entity.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.engine = build_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            echo=echo,
        )
        self._session_factory = build_session_factory(self.engine)
        self._closed = False

    @classmethod
    def from_settings(cls, settings) -> "NoteGateway":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def list_notes(self, lecture_id: str) -> List[Note]:
        """
        Return every note of a lecture in ascending created_at order.

        A lecture without notes yields an empty list, not an error.

        Raises:
            PersistenceError: the query failed
        """
        query = (
            select(Note)
            .where(Note.lecture_id == lecture_id)
            .order_by(Note.created_at.asc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise PersistenceError(
                message="Failed to list notes",
                context={"lecture_id": lecture_id, "original_error": type(exc).__name__},
            ) from exc

    async def create_note(
        self,
        lecture_id: str,
        user_id: Optional[str],
        content: str,
    ) -> Note:
        """
        Insert one note and return it with its generated id and created_at.

        Raises:
            PersistenceError: the store rejected the write (constraint
                violation, connection loss); the transaction is rolled back
        """
        note = Note(lecture_id=lecture_id, user_id=user_id, content=content)
        try:
            async with self._session_factory() as session:
                try:
                    session.add(note)
                    await session.commit()
                except SQLAlchemyError:
                    await session.rollback()
                    raise
        except SQLAlchemyError as exc:
            raise PersistenceError(
                message="Failed to create note",
                context={"lecture_id": lecture_id, "original_error": type(exc).__name__},
            ) from exc

        logger.debug("Note %s created for lecture %s", note.id, lecture_id)
        return note

    async def ping(self) -> bool:
        """Run `SELECT 1`; False when the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            logger.warning("Database ping failed: %s: %s", type(exc).__name__, exc)
            return False
        return True

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Dispose the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self.engine.dispose()
        logger.info("Database connection pool closed")
