"""
WorshipDeck Backend - Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend serves three unrelated resources (presentation slides,
    song lyrics, psalm verses) over a local SQLite file:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, duplicate-name guard
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy over aiosqlite
    └─────────────────────────────────────┘

    Routes never talk to the database directly; they receive a session
    through FastAPI's dependency injection and hand it to a service.
"""

__version__ = "1.0.0"
