"""
EMS Backend — Application Package Initializer
==============================================

What: Marks the `ems` directory as a Python package (Employee Management System).
Why:  Enables module imports like `from ems.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same layered layout in every module:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Presence checks, not-found mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │          Store (Persistence)        │  ← In-memory SQLite, async sessions
    └─────────────────────────────────────┘

    Each request handler issues exactly one statement through one service call.
"""

__version__ = "1.0.0"
