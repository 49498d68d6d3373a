"""
DelipuCash Backend: Application Package Initializer
=====================================================

What: Marks the `delipucash` directory as a Python package.
Why:  Enables module imports like `from delipucash.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The response-interaction engine follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Reactions, Replies,     │  ← Business rules, invariants
    │             Aggregates)             │
    ├─────────────────────────────────────┤
    │   Repository (Persistence Gateway)  │  ← find / create / delete / count
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Counts (likes, dislikes, replies) are never stored: every read recomputes
    them from the underlying rows.
"""

__version__ = "1.0.0"
