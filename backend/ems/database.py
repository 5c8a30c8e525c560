"""
EMS Backend — Store (Engine, Session Factory, FastAPI Dependency)
=================================================================

What:  The relational store holding the `employees` and `roles` tables.
Why:   Centralizes all database connection logic in one place.
How:   `Store` owns an async engine and a session factory. The application
       creates one Store, keeps it on `app.state.store`, and route handlers
       receive a per-request session through `get_db_session`.
Who:   Created by `create_app()`; used by route handlers via Depends().

Architecture Decision:
    The store is an object owned by the application instead of a module-level
    engine. Every app instance (and every test) gets its own isolated
    database, and nothing is shared through import-time globals.

In-memory SQLite:
    An in-memory SQLite database exists only as long as its connection does.
    StaticPool keeps exactly one connection open for the life of the engine,
    so every session sees the same tables. SQLite serializes the statements.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from ems.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata,
    which `Store.create_schema()` uses to create the tables.
    """
    pass


def _is_memory_url(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Build create_async_engine() keyword arguments for the given URL."""
    options: Dict[str, Any] = {
        # SQL logging is noisy; only useful during development
        "echo": settings.log_level == "DEBUG",
    }
    if _is_memory_url(database_url):
        options["poolclass"] = StaticPool
    return options


class Store:
    """
    Handle on one relational store: engine plus session factory.

    Lifecycle:
        1. Constructed by create_app() (or a test fixture)
        2. create_schema() creates the tables (idempotent)
        3. Sessions are opened per request via get_db_session()
        4. dispose() closes the underlying connection on shutdown
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine = create_async_engine(
            self.database_url, **_engine_options(self.database_url)
        )
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """
        Create the `employees` and `roles` tables if they do not exist.

        There is no foreign key between employees.role and roles.name:
        the role on an employee is a soft reference.
        """
        # Importing the model modules registers their tables on Base.metadata
        from ems.models import employee, role  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Store schema ready (%s)", self.database_url)

    async def ping(self) -> bool:
        """Run SELECT 1 against the store. Used by the health check."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all connections held by the engine."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Looks up the Store owned by the application (app.state.store)
        2. Opens a new session from its factory and yields it to the handler
        3. On error: rolls back and re-raises for the global error handlers
        4. Always: closes the session

    Services own the commit: every write method commits its own statement.

    Example usage in a route:
        @router.get("/employees/{employee_id}")
        async def get_employee(employee_id: int, db: AsyncSession = Depends(get_db_session)):
            return await employee_service.get_employee(db, employee_id)
    """
    store: Store = request.app.state.store
    async with store.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
