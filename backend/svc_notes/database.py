"""
svc-notes: Database Engine Construction
=========================================

What:  Declarative base for ORM models and the async engine factory.
How:   `build_engine()` creates an async SQLAlchemy engine with connection
       pooling; `build_session_factory()` wraps it in an async_sessionmaker.
Who:   Used by NoteGateway (svc_notes.gateway) and by Alembic's env.py.

Connection Pooling Strategy:
    pool_size:        persistent connections for normal load (default 5)
    max_overflow:     temporary connections for spikes (default 10)
    pool_pre_ping:    validates connections before use
    pool_recycle=3600 recycles connections every hour

    SQLite (used by the test suite) gets none of the sizing options: its
    dialect picks its own pool class and rejects them.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is what Alembic autogenerates against and what
    NoteGateway.create_schema() emits.
    """
    pass


def build_engine(
    database_url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """Create the async engine that owns the connection pool."""
    options = {"pool_pre_ping": pool_pre_ping, "echo": echo}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned Note objects stay readable after commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
