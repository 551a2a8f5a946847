"""
svc-notes: Lecture Notes Service
==================================

What: HTTP microservice storing and listing notes attached to lectures.

Architecture Note:

    ┌─────────────────────────────────────┐
    │  Routes (notes, health, docs)       │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  NoteService                        │  ← validation, metrics
    ├─────────────────────────────────────┤
    │  NoteGateway + Note model           │  ← async SQLAlchemy
    └─────────────────────────────────────┘

    svc_notes.server drives the process lifecycle around the FastAPI app.
"""

__version__ = "1.0.0"
