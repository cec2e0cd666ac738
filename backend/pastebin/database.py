"""
Pastebin Backend - Database Engine & Session Helpers
=====================================================

What:  Async SQLAlchemy engine construction, session factory, declarative base,
       and the transactional session scope used by the paste store.
Why:   Keeps all connection and transaction handling in one module so the store
       only deals with rows.
How:   create_engine() builds an async engine with options suited to the URL's
       backend; session_scope() commits on success, rolls back on error, and
       always closes the session.
Who:   Used by PasteStore (store.py), the Paste model, and Alembic's env.py.

Engine options by backend:
    SQLite (default, file-backed):
        No pool sizing options. SQLAlchemy manages a small pool of aiosqlite
        connections per file database.
    Server databases (PostgreSQL etc.):
        pool_size / max_overflow / pool_pre_ping from settings,
        pool_recycle=3600 to drop connections the server may have closed.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pastebin.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is what PasteStore.open() creates on startup and what
    Alembic compares against for --autogenerate.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def _engine_options(database_url: str) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine, depending on the backend."""
    options: Dict[str, Any] = {
        # Echo SQL in DEBUG mode only (very noisy otherwise)
        "echo": settings.log_level == "DEBUG",
    }
    if make_url(database_url).get_backend_name() == "sqlite":
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


def create_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for `database_url`.

    No connection is opened here; the pool connects lazily on first use.
    """
    return create_async_engine(database_url, **_engine_options(database_url))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows returned by the store stay readable after
    # the session that loaded them is closed
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def sqlite_file_path(database_url: str) -> Optional[Path]:
    """
    Return the database file for a file-backed SQLite URL, else None.

    In-memory databases and URI-style ("file:...") databases return None;
    there is no directory to prepare for them.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    database = url.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return None
    return Path(database)


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a transactional session for one store operation.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the caller adds rows or runs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example:
        async with session_scope(factory) as session:
            session.add(Paste(id="a1b2c3d4", content="hello"))
        # committed here; an IntegrityError surfaces from the commit

    Raises:
        Whatever the body or the commit raised. Translation into
        application exceptions is the store's job.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
